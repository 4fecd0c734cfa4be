"""Suggest terms use case."""

from docsearch.application.ports import SearchIndex
from docsearch.domain.value_objects import SuggestField

DEFAULT_SUGGESTIONS = 5


class SuggestTermsUseCase:
    """Autocomplete from titles, keywords or content."""

    def __init__(self, search_index: SearchIndex) -> None:
        self._search_index = search_index

    async def execute(
        self,
        text: str,
        field: SuggestField = SuggestField.TITLE,
        size: int = DEFAULT_SUGGESTIONS,
    ) -> list[str]:
        if not text.strip():
            return []
        return await self._search_index.suggest(text, field, size)
