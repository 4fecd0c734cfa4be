"""Domain exceptions."""


class DocSearchError(Exception):
    """Base exception for docsearch."""

    pass


class ValidationError(DocSearchError):
    """Validation failed for input data."""

    pass


class SearchIndexError(DocSearchError):
    """The search index rejected a write or administrative operation."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class IndexUnavailable(SearchIndexError):
    """The search index could not be reached."""

    pass
