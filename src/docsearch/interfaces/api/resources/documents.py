"""Document API resources: upload, keywords, list, get and delete."""

from dataclasses import dataclass

import falcon
import falcon.asgi

from docsearch.application.dto.document_dto import DocumentUploadInput, IngestResult
from docsearch.application.use_cases.document.delete_document import DeleteDocumentUseCase
from docsearch.application.use_cases.document.get_document import GetDocumentUseCase
from docsearch.application.use_cases.document.ingest_document import IngestDocumentUseCase
from docsearch.application.use_cases.document.list_documents import ListDocumentsUseCase
from docsearch.domain.exceptions import SearchIndexError, ValidationError
from docsearch.interfaces.api.resources.serialization import index_error, record_to_dict
from docsearch.interfaces.api.validation import (
    parse_tags,
    validate_document_id,
    validate_file_count,
    validate_upload,
)

_METADATA_FIELDS = (
    "employeeUuid",
    "employeeName",
    "employeeCedula",
    "documentType",
    "title",
    "description",
    "category",
    "tags",
)


def _decode_filename(raw: str | None) -> str:
    """Decode filename to UTF-8, fixing mojibake when UTF-8 bytes were read as Latin-1."""
    if not raw or not raw.strip():
        return ""
    raw = raw.strip()
    try:
        return raw.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw


@dataclass
class _UploadedFile:
    data: bytes
    filename: str
    mimetype: str


@dataclass
class _UploadForm:
    fields: dict[str, str]
    files: list[_UploadedFile]
    texts: list[str]


async def _read_upload_form(req: falcon.asgi.Request, file_field: str) -> _UploadForm:
    """Collect metadata fields, file parts named `file_field` and `extractedText` parts."""
    form = await req.get_media()
    fields: dict[str, str] = {}
    files: list[_UploadedFile] = []
    texts: list[str] = []
    async for part in form:
        name = (part.name or "").strip()
        if name in (file_field, f"{file_field}[]"):
            data = await part.get_data()
            filename = _decode_filename(part.filename) or f"file_{len(files) + 1}"
            mimetype = (part.content_type or "").split(";")[0].strip().lower()
            files.append(_UploadedFile(bytes(data), filename, mimetype))
        elif name == "extractedText":
            data = await part.get_data()
            texts.append(data.decode("utf-8", errors="replace"))
        elif name in _METADATA_FIELDS:
            data = await part.get_data()
            fields[name] = data.decode("utf-8", errors="replace").strip()
    return _UploadForm(fields=fields, files=files, texts=texts)


def _upload_input(
    upload: _UploadedFile, fields: dict[str, str], extracted_text: str | None
) -> DocumentUploadInput:
    return DocumentUploadInput(
        data=upload.data,
        original_name=upload.filename,
        mimetype=upload.mimetype,
        employee_uuid=fields.get("employeeUuid", ""),
        document_type=fields.get("documentType", ""),
        employee_name=fields.get("employeeName", ""),
        employee_cedula=fields.get("employeeCedula", ""),
        title=fields.get("title", ""),
        description=fields.get("description", ""),
        category=fields.get("category", ""),
        tags=parse_tags(fields.get("tags")),
        extracted_text=extracted_text,
    )


def _ingest_to_dict(result: IngestResult, req: falcon.asgi.Request) -> dict:
    data = record_to_dict(result.record, req)
    data["indexed"] = result.indexed
    if result.index_error:
        data["indexError"] = result.index_error
    return data


class DocumentUploadResource:
    """POST /api/documents/upload and /api/documents/upload-multiple."""

    def __init__(
        self,
        ingest_document: IngestDocumentUseCase,
        max_file_size: int,
        max_files: int,
    ) -> None:
        self._ingest_document = ingest_document
        self._max_file_size = max_file_size
        self._max_files = max_files

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Upload one file in the `document` part."""
        form = await self._read_form(req, resp, "document")
        if form is None:
            return
        try:
            if not form.files:
                raise ValidationError("No file provided")
            upload = form.files[0]
            validate_upload(upload.filename, upload.mimetype, len(upload.data), self._max_file_size)
            text = form.texts[0] if form.texts else None
            result = await self._ingest_document.execute(_upload_input(upload, form.fields, text))
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.status = falcon.HTTP_201
        resp.media = {
            "message": "Document uploaded",
            "document": _ingest_to_dict(result, req),
        }

    async def on_post_multiple(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Upload several files in `documents` parts; `extractedText` parts pair with files by position."""
        form = await self._read_form(req, resp, "documents")
        if form is None:
            return
        try:
            validate_file_count(len(form.files), self._max_files)
            for upload in form.files:
                validate_upload(
                    upload.filename, upload.mimetype, len(upload.data), self._max_file_size
                )
            if not form.fields.get("employeeUuid"):
                raise ValidationError("employeeUuid is required to organise documents")
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        created: list[dict] = []
        errors: list[dict] = []
        for index, upload in enumerate(form.files):
            text = form.texts[index] if index < len(form.texts) else None
            try:
                result = await self._ingest_document.execute(
                    _upload_input(upload, form.fields, text)
                )
            except ValidationError as e:
                errors.append({"filename": upload.filename, "error": str(e)})
                continue
            created.append(_ingest_to_dict(result, req))
        resp.status = falcon.HTTP_201
        resp.media = {
            "message": f"{len(created)} documents uploaded",
            "documents": created,
            "errors": errors,
            "count": len(created),
        }

    async def _read_form(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, file_field: str
    ) -> _UploadForm | None:
        if "multipart/form-data" not in (req.content_type or ""):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "multipart/form-data required"}
            return None
        try:
            return await _read_upload_form(req, file_field)
        except falcon.MediaMalformedError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid multipart: {e.description or e.title}"}
            return None


class KeywordsResource:
    """POST /api/documents/keywords - keywords for a piece of extracted text."""

    def __init__(self, ingest_document: IngestDocumentUseCase) -> None:
        self._ingest_document = ingest_document

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await req.get_media()
            text = body["text"]
            if not isinstance(text, str):
                raise ValueError("text must be a string")
        except (falcon.MediaMalformedError, KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return
        keywords = self._ingest_document.ingest_keywords(text)
        resp.media = {"keywords": keywords, "count": len(keywords)}
        resp.status = falcon.HTTP_200


class DocumentsResource:
    """GET /api/documents - list all stored documents."""

    def __init__(self, list_documents: ListDocumentsUseCase) -> None:
        self._list_documents = list_documents

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        records = await self._list_documents.execute()
        resp.media = {
            "documents": [record_to_dict(r, req) for r in records],
            "count": len(records),
        }
        resp.status = falcon.HTTP_200


class DocumentResource:
    """GET/DELETE /api/documents/{document_id}."""

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        delete_document: DeleteDocumentUseCase,
    ) -> None:
        self._get_document = get_document
        self._delete_document = delete_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        try:
            validate_document_id(document_id)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            record = await self._get_document.execute(document_id)
        except SearchIndexError as e:
            index_error(resp, e)
            return
        if record is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.media = {"document": record_to_dict(record, req, include_content=True)}
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        try:
            validate_document_id(document_id)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            deleted = await self._delete_document.execute(document_id)
        except SearchIndexError as e:
            index_error(resp, e)
            return
        if not deleted:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.media = {"message": "Document deleted", "id": document_id}
        resp.status = falcon.HTTP_200
