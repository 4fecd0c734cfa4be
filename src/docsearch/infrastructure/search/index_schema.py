"""Index settings, field mappings and record <-> source conversion."""

from datetime import UTC, datetime
from typing import Any

from docsearch.domain.entities import DocumentRecord

TEXT_ANALYZER = "spanish_analyzer"

INDEX_SETTINGS: dict[str, Any] = {
    "number_of_shards": 1,
    "number_of_replicas": 0,
    "analysis": {
        "analyzer": {
            TEXT_ANALYZER: {
                "type": "custom",
                "tokenizer": "standard",
                "filter": ["lowercase", "spanish_stop", "spanish_stemmer"],
            }
        },
        "filter": {
            "spanish_stop": {"type": "stop", "stopwords": "_spanish_"},
            "spanish_stemmer": {"type": "stemmer", "language": "spanish"},
        },
    },
}

_KEYWORD = {"type": "keyword"}

INDEX_MAPPINGS: dict[str, Any] = {
    "properties": {
        "id": _KEYWORD,
        "title": {
            "type": "text",
            "analyzer": TEXT_ANALYZER,
            "fields": {"keyword": _KEYWORD},
        },
        "content": {"type": "text", "analyzer": TEXT_ANALYZER},
        "keywords": _KEYWORD,
        "tags": _KEYWORD,
        "category": _KEYWORD,
        "documentType": _KEYWORD,
        "employeeUuid": _KEYWORD,
        "employeeCedula": _KEYWORD,
        "employeeName": {
            "type": "text",
            "analyzer": TEXT_ANALYZER,
            "fields": {"keyword": _KEYWORD},
        },
        "filename": _KEYWORD,
        "originalName": {"type": "keyword", "index": False},
        "description": {"type": "text", "analyzer": TEXT_ANALYZER},
        "mimetype": _KEYWORD,
        "relativePath": _KEYWORD,
        "uploadDate": {"type": "date"},
        "year": {"type": "integer"},
        "size": {"type": "long"},
    }
}


def record_to_source(record: DocumentRecord) -> dict[str, Any]:
    """Index document body for a record."""
    return {
        "id": record.id,
        "title": record.title or record.original_name,
        "content": record.extracted_text,
        "keywords": list(record.keywords),
        "tags": list(record.tags),
        "category": record.category or None,
        "documentType": record.document_type,
        "employeeUuid": record.employee_uuid,
        "employeeName": record.employee_name or None,
        "employeeCedula": record.employee_cedula or None,
        "filename": record.filename,
        "originalName": record.original_name,
        "description": record.description or None,
        "mimetype": record.mimetype,
        "relativePath": record.relative_path,
        "uploadDate": record.upload_date.isoformat(),
        "year": record.year,
        "size": record.size,
    }


def _parse_date(value: Any) -> datetime:
    if isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return datetime.fromtimestamp(0, UTC)


def record_from_source(document_id: str, source: dict[str, Any]) -> DocumentRecord:
    """Rebuild a record from an index hit. `file_path` is left empty; it is derived on demand."""
    return DocumentRecord(
        id=document_id,
        filename=source.get("filename") or "",
        original_name=source.get("originalName") or source.get("filename") or "",
        mimetype=source.get("mimetype") or "",
        size=int(source.get("size") or 0),
        upload_date=_parse_date(source.get("uploadDate")),
        employee_uuid=source.get("employeeUuid") or "",
        title=source.get("title") or "",
        description=source.get("description") or "",
        category=source.get("category") or "",
        tags=list(source.get("tags") or []),
        employee_name=source.get("employeeName") or "",
        employee_cedula=source.get("employeeCedula") or "",
        document_type=source.get("documentType") or "",
        extracted_text=source.get("content") or "",
        keywords=list(source.get("keywords") or []),
        relative_path=source.get("relativePath") or "",
    )
