"""Sort options for search results."""

from enum import StrEnum


class SortField(StrEnum):
    """Supported sort fields."""

    RELEVANCE = "relevance"
    DATE = "date"
    SIZE = "size"
    FILENAME = "filename"


class SortOrder(StrEnum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"
