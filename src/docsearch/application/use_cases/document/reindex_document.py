"""Reindex document use case."""

from docsearch.application.dto.document_dto import IndexResult
from docsearch.application.ports import DocumentRepository, SearchIndex


class ReindexDocumentUseCase:
    """Push a stored record to the search index again."""

    def __init__(self, repository: DocumentRepository, search_index: SearchIndex) -> None:
        self._repository = repository
        self._search_index = search_index

    async def execute(self, document_id: str) -> IndexResult | None:
        """None if the document is unknown. Index errors propagate."""
        record = await self._repository.get(document_id)
        if record is None:
            return None
        return await self._search_index.upsert(record)
