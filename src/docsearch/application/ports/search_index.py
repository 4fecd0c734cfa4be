"""Search index port - external full-text engine."""

from typing import Any, Protocol

from docsearch.application.dto.document_dto import IndexResult
from docsearch.application.dto.search_dto import SearchHit, SearchQuery, SearchResult
from docsearch.domain.entities import DocumentRecord
from docsearch.domain.value_objects import SuggestField


class SearchIndex(Protocol):
    """Port for indexing and querying documents.

    Write operations raise SearchIndexError / IndexUnavailable. Read operations
    never raise on engine failure; they return empty values instead.
    """

    async def ping(self) -> dict[str, Any]: ...

    async def ensure_index(self) -> bool: ...

    async def upsert(self, record: DocumentRecord) -> IndexResult: ...

    async def delete(self, document_id: str) -> bool: ...

    async def get_by_id(self, document_id: str) -> DocumentRecord | None: ...

    async def search(self, query: SearchQuery) -> SearchResult: ...

    async def suggest(self, text: str, field: SuggestField, size: int) -> list[str]: ...

    async def find_similar(
        self, document_id: str, min_score: float, max_results: int
    ) -> list[SearchHit]: ...

    async def stats(self) -> dict[str, Any] | None: ...
