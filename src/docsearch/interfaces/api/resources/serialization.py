"""JSON shapes shared by the API resources."""

import falcon
import falcon.asgi

from docsearch.application.dto.search_dto import SearchHit
from docsearch.domain.entities import DocumentRecord
from docsearch.domain.exceptions import IndexUnavailable, SearchIndexError


def index_error(resp: falcon.asgi.Response, error: SearchIndexError) -> None:
    """503 when the index is unreachable, 502 when it answered with an error."""
    resp.status = falcon.HTTP_503 if isinstance(error, IndexUnavailable) else falcon.HTTP_502
    resp.media = {"error": str(error)}


def file_urls(req: falcon.asgi.Request, document_id: str) -> dict[str, str]:
    base = req.prefix
    return {
        "downloadUrl": f"{base}/api/retrieval/download/{document_id}",
        "viewUrl": f"{base}/api/retrieval/view/{document_id}",
    }


def record_to_dict(
    record: DocumentRecord,
    req: falcon.asgi.Request | None = None,
    include_content: bool = False,
) -> dict:
    data = {
        "id": record.id,
        "title": record.title,
        "filename": record.filename,
        "originalName": record.original_name,
        "size": record.size,
        "mimetype": record.mimetype,
        "uploadDate": record.upload_date.isoformat(),
        "year": record.year,
        "description": record.description,
        "category": record.category,
        "tags": list(record.tags),
        "keywords": list(record.keywords),
        "employeeUuid": record.employee_uuid,
        "employeeName": record.employee_name,
        "employeeCedula": record.employee_cedula,
        "documentType": record.document_type,
        "relativePath": record.relative_path,
    }
    if include_content:
        data["extractedText"] = record.extracted_text
    if req is not None:
        data.update(file_urls(req, record.id))
    return data


def hit_to_dict(hit: SearchHit, req: falcon.asgi.Request) -> dict:
    data = record_to_dict(hit.document, req)
    data["score"] = hit.score
    data["highlights"] = hit.highlights
    return data
