"""Request parameter parsing and validation for the HTTP layer."""

import re
from datetime import UTC, datetime

import falcon.asgi

from docsearch.application.dto.search_dto import (
    DEFAULT_PAGE_SIZE,
    DateRange,
    SearchFilters,
    SearchQuery,
)
from docsearch.domain.exceptions import ValidationError
from docsearch.domain.value_objects import SortField, SortOrder, SuggestField

MAX_PAGE_SIZE = 100

ALLOWED_MIMETYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
    }
)

_UUID_V4 = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def validate_document_id(value: str) -> str:
    if not value or not _UUID_V4.match(value):
        raise ValidationError("Invalid document id format")
    return value


def parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("true", "1", "yes")


def parse_int(value: str | None, name: str, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer") from e


def parse_float(value: str | None, name: str, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ValidationError(f"{name} must be a number") from e


def parse_date(value: str | None, name: str) -> datetime | None:
    """ISO-8601 date or datetime; naive values are taken as UTC."""
    if value is None or value.strip() == "":
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(f"Invalid date format for {name}") from e
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def parse_date_range(date_from: str | None, date_to: str | None) -> DateRange | None:
    start = parse_date(date_from, "dateFrom")
    end = parse_date(date_to, "dateTo")
    if start is None and end is None:
        return None
    if start and end and start > end:
        raise ValidationError("dateFrom cannot be after dateTo")
    return DateRange(start=start, end=end)


def parse_tags(value: str | list[str] | None) -> list[str]:
    """Tags from a comma-separated string or repeated parameters."""
    if not value:
        return []
    raw = value if isinstance(value, list) else [value]
    tags: list[str] = []
    for item in raw:
        tags.extend(t.strip() for t in item.split(","))
    return [t for t in tags if t]


def parse_choice(value: str | None, enum_type, name: str, default):
    if value is None or value.strip() == "":
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_type)
        raise ValidationError(f"{name} must be one of: {allowed}") from e


def parse_page(req: falcon.asgi.Request) -> tuple[int, int]:
    size = parse_int(req.get_param("size"), "size", DEFAULT_PAGE_SIZE)
    from_ = parse_int(req.get_param("from"), "from", 0)
    if not 1 <= size <= MAX_PAGE_SIZE:
        raise ValidationError(f"size must be between 1 and {MAX_PAGE_SIZE}")
    if from_ < 0:
        raise ValidationError("from must be zero or greater")
    return size, from_


def parse_search_query(req: falcon.asgi.Request) -> SearchQuery:
    """Build a SearchQuery from the query string of GET /api/retrieval/search."""
    size, from_ = parse_page(req)
    return SearchQuery(
        query=req.get_param("query") or req.get_param("text"),
        content=req.get_param("content"),
        keywords=parse_tags(req.get_param_as_list("keywords")),
        filters=SearchFilters(
            category=req.get_param("category"),
            document_type=req.get_param("documentType"),
            employee_uuid=req.get_param("employeeUuid"),
            file_type=req.get_param("fileType"),
            date_range=parse_date_range(req.get_param("dateFrom"), req.get_param("dateTo")),
            tags=parse_tags(req.get_param_as_list("tags")),
        ),
        size=size,
        from_=from_,
        sort_by=parse_choice(req.get_param("sortBy"), SortField, "sortBy", SortField.RELEVANCE),
        sort_order=parse_choice(req.get_param("sortOrder"), SortOrder, "sortOrder", SortOrder.DESC),
        fuzzy=parse_bool(req.get_param("fuzzy")),
        boost=parse_bool(req.get_param("boost")),
        highlight=parse_bool(req.get_param("highlight"), default=True),
    )


def parse_suggest_field(value: str | None) -> SuggestField:
    return parse_choice(value, SuggestField, "field", SuggestField.TITLE)


def validate_upload(filename: str, mimetype: str, size: int, max_size: int) -> None:
    """Reject empty, oversized or unsupported files."""
    if size == 0:
        raise ValidationError(f"File {filename!r} is empty")
    if size > max_size:
        raise ValidationError(
            f"File {filename!r} is too large; maximum is {max_size // (1024 * 1024)}MB"
        )
    if mimetype not in ALLOWED_MIMETYPES:
        raise ValidationError(
            f"Unsupported file type {mimetype!r}; only PDF, DOC, DOCX and TXT are accepted"
        )


def validate_file_count(count: int, max_files: int) -> None:
    if count == 0:
        raise ValidationError("No files provided")
    if count > max_files:
        raise ValidationError(f"At most {max_files} files are allowed per upload")
