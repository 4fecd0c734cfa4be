"""Find similar documents use case."""

from docsearch.application.dto.search_dto import SearchHit
from docsearch.application.ports import SearchIndex

DEFAULT_MIN_SCORE = 0.5
DEFAULT_MAX_RESULTS = 5


class FindSimilarDocumentsUseCase:
    """More-like-this search around a reference document."""

    def __init__(self, search_index: SearchIndex) -> None:
        self._search_index = search_index

    async def execute(
        self,
        document_id: str,
        min_score: float = DEFAULT_MIN_SCORE,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[SearchHit]:
        """Ranked similar documents; never includes `document_id` itself."""
        hits = await self._search_index.find_similar(document_id, min_score, max_results)
        return [hit for hit in hits if hit.document.id != document_id]
