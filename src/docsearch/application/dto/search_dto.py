"""Search DTOs."""

from dataclasses import dataclass, field
from datetime import datetime

from docsearch.domain.entities import DocumentRecord
from docsearch.domain.value_objects import SortField, SortOrder

DEFAULT_PAGE_SIZE = 10


@dataclass
class DateRange:
    """Inclusive upload date span; either bound may be open."""

    start: datetime | None = None
    end: datetime | None = None


@dataclass
class SearchFilters:
    """Exact-match filters applied to a search."""

    category: str | None = None
    document_type: str | None = None
    employee_uuid: str | None = None
    file_type: str | None = None
    date_range: DateRange | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class SearchQuery:
    """Structured search request."""

    query: str | None = None
    content: str | None = None
    keywords: list[str] = field(default_factory=list)
    filters: SearchFilters = field(default_factory=SearchFilters)
    size: int = DEFAULT_PAGE_SIZE
    from_: int = 0
    sort_by: SortField = SortField.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    fuzzy: bool = False
    boost: bool = False
    highlight: bool = True


@dataclass
class SearchHit:
    """Single ranked document."""

    document: DocumentRecord
    score: float | None
    highlights: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class SearchResult:
    """Ranked documents plus total, engine time and facet counts.

    `error` is set when the index could not answer; the result is then empty.
    """

    documents: list[SearchHit]
    total: int
    took_ms: int
    facets: dict[str, dict[str, int]] = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def empty(cls, error: str) -> "SearchResult":
        return cls(documents=[], total=0, took_ms=0, facets={}, error=error)
