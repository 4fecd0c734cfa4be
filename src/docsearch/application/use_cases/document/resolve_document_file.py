"""Resolve document file use case."""

import asyncio

from docsearch.application.ports import DocumentPathResolver
from docsearch.application.use_cases.document.get_document import GetDocumentUseCase
from docsearch.domain.entities import DocumentRecord
from docsearch.domain.value_objects import FileLocation, FileMissing


class ResolveDocumentFileUseCase:
    """Find the bytes behind a document id for download or inline viewing."""

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        path_resolver: DocumentPathResolver,
    ) -> None:
        self._get_document = get_document
        self._path_resolver = path_resolver

    async def execute(
        self, document_id: str
    ) -> tuple[DocumentRecord, FileLocation | FileMissing] | None:
        """None when the document is unknown; otherwise the record and where its file is."""
        record = await self._get_document.execute(document_id)
        if record is None:
            return None
        location = await asyncio.to_thread(self._path_resolver.resolve, record)
        return record, location
