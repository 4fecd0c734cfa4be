"""Pytest fixtures for docsearch tests."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest

from docsearch.application.dto.document_dto import IndexResult
from docsearch.application.dto.search_dto import SearchHit, SearchQuery, SearchResult
from docsearch.domain.entities import DocumentRecord
from docsearch.domain.exceptions import IndexUnavailable, SearchIndexError
from docsearch.domain.value_objects import SuggestField
from docsearch.infrastructure.keywords import FrequencyTermExtractor
from docsearch.infrastructure.persistence.memory import InMemoryDocumentRepository

EMPLOYEE_UUID = "11111111-1111-4111-8111-111111111111"
UPLOAD_DATE = datetime(2024, 3, 15, 10, 30, tzinfo=UTC)


def make_record(**overrides: Any) -> DocumentRecord:
    """Document record with sensible defaults; keyword arguments override fields."""
    values: dict[str, Any] = {
        "id": str(uuid4()),
        "filename": "2024_1234567_contratos_1710498600000_contrato.pdf",
        "original_name": "contrato.pdf",
        "mimetype": "application/pdf",
        "size": 2048,
        "upload_date": UPLOAD_DATE,
        "employee_uuid": EMPLOYEE_UUID,
        "title": "Contrato laboral",
        "category": "contratos",
        "tags": ["rrhh"],
        "employee_name": "Ana Torres",
        "employee_cedula": "1234567",
        "document_type": "contratos",
        "extracted_text": "Contrato laboral de prestación de servicios",
        "keywords": ["contrato", "laboral"],
    }
    values.update(overrides)
    return DocumentRecord(**values)


# --- Fake adapters ---


class FakeSearchIndex:
    """In-memory search index with scripted read results."""

    index = "documents"

    def __init__(self) -> None:
        self.closed = False
        self.documents: dict[str, DocumentRecord] = {}
        self.search_result = SearchResult(documents=[], total=0, took_ms=1)
        self.suggestions: list[str] = []
        self.similar: list[SearchHit] = []
        self.queries: list[SearchQuery] = []
        self.suggest_calls: list[tuple[str, SuggestField, int]] = []
        self.write_error: SearchIndexError | None = None
        self.read_error: SearchIndexError | None = None
        self.reachable = True
        self.index_exists = False

    async def ping(self) -> dict[str, Any]:
        if not self.reachable:
            raise IndexUnavailable("Search index unreachable: connection refused")
        return {"cluster": "test-cluster", "version": "8.13.0", "lucene": "9.10.0"}

    async def ensure_index(self) -> bool:
        if not self.reachable:
            raise IndexUnavailable("Search index unreachable: connection refused")
        created = not self.index_exists
        self.index_exists = True
        return created

    async def upsert(self, record: DocumentRecord) -> IndexResult:
        if self.write_error is not None:
            raise self.write_error
        result = "updated" if record.id in self.documents else "created"
        self.documents[record.id] = record
        return IndexResult(id=record.id, result=result)

    async def delete(self, document_id: str) -> bool:
        if self.write_error is not None:
            raise self.write_error
        return self.documents.pop(document_id, None) is not None

    async def get_by_id(self, document_id: str) -> DocumentRecord | None:
        if self.read_error is not None:
            raise self.read_error
        return self.documents.get(document_id)

    async def search(self, query: SearchQuery) -> SearchResult:
        self.queries.append(query)
        return self.search_result

    async def suggest(self, text: str, field: SuggestField, size: int) -> list[str]:
        self.suggest_calls.append((text, field, size))
        return self.suggestions[:size]

    async def find_similar(
        self, document_id: str, min_score: float, max_results: int
    ) -> list[SearchHit]:
        return self.similar[:max_results]

    async def stats(self) -> dict[str, Any] | None:
        if not self.reachable:
            return None
        return {"_all": {"primaries": {"docs": {"count": len(self.documents)}}}}

    async def close(self) -> None:
        self.closed = True


class FakeFileSystem:
    """File system view over a fixed set of file paths."""

    def __init__(self, files: list[Path | str] | None = None) -> None:
        self.files = {Path(f) for f in files or []}

    def add(self, path: Path | str) -> None:
        self.files.add(Path(path))

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files

    def list_dir(self, path: Path) -> list[str]:
        return [f.name for f in self.files if f.parent == Path(path)]


class FixedClock:
    """Callable clock returning a settable instant."""

    def __init__(self, now: datetime = UPLOAD_DATE) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# --- Fixtures ---


@pytest.fixture
def search_index() -> FakeSearchIndex:
    """Fresh fake search index for each test."""
    return FakeSearchIndex()


@pytest.fixture
def repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def term_extractor() -> FrequencyTermExtractor:
    return FrequencyTermExtractor()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def uploads_root(tmp_path: Path) -> Path:
    """Empty uploads directory on disk."""
    root = tmp_path / "uploads"
    root.mkdir()
    return root
