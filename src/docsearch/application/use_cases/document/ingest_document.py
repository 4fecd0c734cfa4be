"""Ingest document use case."""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from docsearch.application.dto.document_dto import DocumentUploadInput, IngestResult
from docsearch.application.ports import (
    DocumentRepository,
    DocumentStorage,
    SearchIndex,
    TermExtractor,
)
from docsearch.domain.entities import DocumentRecord
from docsearch.domain.exceptions import SearchIndexError, ValidationError
from docsearch.domain.value_objects import StoredFilename

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_TYPE = "documentos"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class IngestDocumentUseCase:
    """Store an upload, extract its keywords, save the record and index it."""

    def __init__(
        self,
        repository: DocumentRepository,
        search_index: SearchIndex,
        term_extractor: TermExtractor,
        storage: DocumentStorage,
        default_document_type: str = DEFAULT_DOCUMENT_TYPE,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._search_index = search_index
        self._term_extractor = term_extractor
        self._storage = storage
        self._default_document_type = default_document_type
        self._clock = clock

    def ingest_keywords(self, text: str | None) -> list[str]:
        """Ranked keywords for extracted text; empty when there is no text."""
        if not text or not text.strip():
            return []
        return self._term_extractor.extract(text)

    async def execute(self, input_data: DocumentUploadInput) -> IngestResult:
        """Ingest one uploaded file."""
        employee_uuid = input_data.employee_uuid.strip()
        if not employee_uuid:
            raise ValidationError("employeeUuid is required to organise documents")
        if not input_data.data:
            raise ValidationError(f"File {input_data.original_name!r} is empty")
        document_type = input_data.document_type.strip() or self._default_document_type

        upload_date = self._clock()
        stored_name = StoredFilename.for_upload(
            year=upload_date.year,
            cedula=input_data.employee_cedula,
            document_type=document_type,
            timestamp_ms=int(upload_date.timestamp() * 1000),
            original_name=input_data.original_name,
        )
        stored = await asyncio.to_thread(
            self._storage.save, input_data.data, stored_name, employee_uuid
        )

        text = input_data.extracted_text or ""
        if not text.strip():
            logger.warning(
                "No extracted text for %s; storing without keywords", input_data.original_name
            )

        record = DocumentRecord(
            id=str(uuid4()),
            filename=stored_name.name,
            original_name=input_data.original_name,
            mimetype=input_data.mimetype,
            size=len(input_data.data),
            upload_date=upload_date,
            employee_uuid=employee_uuid,
            title=input_data.title.strip() or input_data.original_name,
            description=input_data.description.strip(),
            category=input_data.category.strip(),
            tags=[t.strip() for t in input_data.tags],
            employee_name=input_data.employee_name.strip(),
            employee_cedula=input_data.employee_cedula.strip(),
            document_type=document_type,
            extracted_text=text,
            keywords=self.ingest_keywords(text),
            file_path=str(stored.path),
            relative_path=stored.relative_path,
        )
        await self._repository.put(record)

        try:
            index_result = await self._search_index.upsert(record)
        except SearchIndexError as e:
            logger.error("Document %s stored but not indexed: %s", record.id, e)
            return IngestResult(record=record, index_error=str(e))
        return IngestResult(record=record, index_result=index_result)
