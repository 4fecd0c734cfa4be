"""Search documents use case."""

from docsearch.application.dto.search_dto import SearchQuery, SearchResult
from docsearch.application.ports import SearchIndex


class SearchDocumentsUseCase:
    """Structured full-text search with filters, facets and highlights."""

    def __init__(self, search_index: SearchIndex) -> None:
        self._search_index = search_index

    async def execute(self, query: SearchQuery) -> SearchResult:
        return await self._search_index.search(query)
