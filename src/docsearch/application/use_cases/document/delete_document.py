"""Delete document use case."""

import asyncio
import logging

from docsearch.application.ports import (
    DocumentPathResolver,
    DocumentRepository,
    DocumentStorage,
    SearchIndex,
)
from docsearch.domain.value_objects import FileLocation

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """Remove a document's record, backing file and index entry."""

    def __init__(
        self,
        repository: DocumentRepository,
        search_index: SearchIndex,
        storage: DocumentStorage,
        path_resolver: DocumentPathResolver,
    ) -> None:
        self._repository = repository
        self._search_index = search_index
        self._storage = storage
        self._path_resolver = path_resolver

    async def execute(self, document_id: str) -> bool:
        """Delete the document. False if neither the repository nor the index knows it.

        Records only the index holds are still deleted, file included.
        Index errors propagate after the local record and file are gone.
        """
        record = await self._repository.get(document_id)
        if record is None:
            record = await self._search_index.get_by_id(document_id)
        if record is None:
            return False

        location = await asyncio.to_thread(self._path_resolver.resolve, record)
        if isinstance(location, FileLocation):
            await asyncio.to_thread(self._storage.remove, location.path)
        else:
            logger.warning("Deleting document %s without a backing file", document_id)

        await self._repository.delete(document_id)
        await self._search_index.delete(document_id)
        return True
