"""Fields that support completion suggestions."""

from enum import StrEnum


class SuggestField(StrEnum):
    """Supported suggestion sources."""

    TITLE = "title"
    KEYWORDS = "keywords"
    CONTENT = "content"
