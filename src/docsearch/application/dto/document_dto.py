"""Document DTOs."""

from dataclasses import dataclass, field

from docsearch.domain.entities import DocumentRecord


@dataclass
class DocumentUploadInput:
    """Input for ingesting an uploaded file."""

    data: bytes
    original_name: str
    mimetype: str
    employee_uuid: str
    document_type: str
    employee_name: str = ""
    employee_cedula: str = ""
    title: str = ""
    description: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    extracted_text: str | None = None


@dataclass
class IndexResult:
    """Outcome of an index write."""

    id: str
    result: str


@dataclass
class DocumentStats:
    """Aggregate statistics over stored documents."""

    total_documents: int
    total_size: int
    categories: dict[str, int]
    mime_types: dict[str, int]

    @property
    def average_size(self) -> int:
        if not self.total_documents:
            return 0
        return round(self.total_size / self.total_documents)


@dataclass
class IngestResult:
    """Stored record plus the outcome of indexing it.

    The record is kept even when indexing fails; `index_error` then carries
    the reason so the caller can retry with a manual reindex.
    """

    record: DocumentRecord
    index_result: IndexResult | None = None
    index_error: str | None = None

    @property
    def indexed(self) -> bool:
        return self.index_result is not None
