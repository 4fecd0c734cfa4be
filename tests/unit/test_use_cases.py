"""Unit tests for use cases."""

from datetime import timedelta
from pathlib import Path

import pytest

from docsearch.application.dto.document_dto import DocumentUploadInput
from docsearch.application.dto.search_dto import SearchHit, SearchQuery, SearchResult
from docsearch.application.use_cases.document.delete_document import DeleteDocumentUseCase
from docsearch.application.use_cases.document.get_document import GetDocumentUseCase
from docsearch.application.use_cases.document.ingest_document import IngestDocumentUseCase
from docsearch.application.use_cases.document.list_documents import (
    DocumentStatsUseCase,
    ListDocumentsUseCase,
)
from docsearch.application.use_cases.document.reindex_document import ReindexDocumentUseCase
from docsearch.application.use_cases.document.resolve_document_file import (
    ResolveDocumentFileUseCase,
)
from docsearch.application.use_cases.search.find_similar import FindSimilarDocumentsUseCase
from docsearch.application.use_cases.search.search_documents import SearchDocumentsUseCase
from docsearch.application.use_cases.search.suggest_terms import SuggestTermsUseCase
from docsearch.domain.exceptions import IndexUnavailable, SearchIndexError, ValidationError
from docsearch.domain.value_objects import FileLocation, FileMissing, SuggestField
from docsearch.infrastructure.storage import LocalFileSystem, PathResolver, UploadStorage

from tests.conftest import EMPLOYEE_UUID, UPLOAD_DATE, make_record

CONTRACT_TEXT = (
    "Contrato de prestación de servicios profesionales. El contratista prestará "
    "servicios profesionales de asesoría jurídica durante 2024."
)


def _upload(**overrides) -> DocumentUploadInput:
    values = {
        "data": b"%PDF-1.4 contrato",
        "original_name": "contrato.pdf",
        "mimetype": "application/pdf",
        "employee_uuid": EMPLOYEE_UUID,
        "document_type": "contratos",
        "employee_name": "Ana Torres",
        "employee_cedula": "1234567",
        "category": "contratos",
        "tags": ["rrhh", "legal"],
        "extracted_text": CONTRACT_TEXT,
    }
    values.update(overrides)
    return DocumentUploadInput(**values)


@pytest.fixture
def ingest(repository, search_index, term_extractor, uploads_root, clock) -> IngestDocumentUseCase:
    return IngestDocumentUseCase(
        repository=repository,
        search_index=search_index,
        term_extractor=term_extractor,
        storage=UploadStorage(uploads_root),
        clock=clock,
    )


# --- IngestDocumentUseCase ---


@pytest.mark.asyncio
async def test_ingest_stores_file_and_indexes(ingest, repository, search_index, uploads_root) -> None:
    result = await ingest.execute(_upload())
    record = result.record
    timestamp = int(UPLOAD_DATE.timestamp() * 1000)

    assert result.indexed
    assert result.index_error is None
    assert record.filename == f"2024_1234567_contratos_{timestamp}_contrato.pdf"
    assert record.relative_path == f"2024/{EMPLOYEE_UUID}/contratos/{record.filename}"
    assert Path(record.file_path) == (uploads_root / record.relative_path).resolve()
    assert Path(record.file_path).read_bytes() == b"%PDF-1.4 contrato"
    assert record.year == 2024
    assert record.size == len(b"%PDF-1.4 contrato")
    assert record.title == "contrato.pdf"
    assert "servicios profesionales" in record.keywords
    assert "2024" in record.keywords
    assert await repository.get(record.id) is record
    assert search_index.documents[record.id] is record


@pytest.mark.asyncio
async def test_ingest_defaults(ingest) -> None:
    result = await ingest.execute(_upload(document_type=" ", employee_cedula="", title="Mi contrato"))
    record = result.record
    assert record.document_type == "documentos"
    assert record.filename.startswith("2024_sincedula_documentos_")
    assert record.title == "Mi contrato"


@pytest.mark.asyncio
async def test_ingest_without_text_has_no_keywords(ingest) -> None:
    result = await ingest.execute(_upload(extracted_text=None))
    assert result.record.keywords == []
    assert result.record.extracted_text == ""
    assert result.indexed


@pytest.mark.asyncio
async def test_ingest_requires_employee_uuid(ingest, repository, uploads_root) -> None:
    with pytest.raises(ValidationError, match="employeeUuid"):
        await ingest.execute(_upload(employee_uuid="  "))
    assert await repository.list() == []
    assert list(uploads_root.iterdir()) == []


@pytest.mark.asyncio
async def test_ingest_rejects_empty_file(ingest) -> None:
    with pytest.raises(ValidationError, match="empty"):
        await ingest.execute(_upload(data=b""))


@pytest.mark.asyncio
async def test_ingest_keeps_record_when_index_write_fails(ingest, repository, search_index) -> None:
    search_index.write_error = IndexUnavailable("Search index unreachable: connection refused")
    result = await ingest.execute(_upload())
    assert not result.indexed
    assert "unreachable" in result.index_error
    assert await repository.get(result.record.id) is result.record


@pytest.mark.asyncio
async def test_ingest_keywords(ingest) -> None:
    assert ingest.ingest_keywords("") == []
    assert ingest.ingest_keywords(None) == []
    assert "asesoria" in ingest.ingest_keywords(CONTRACT_TEXT)


# --- GetDocumentUseCase ---


@pytest.mark.asyncio
async def test_get_document_prefers_repository(repository, search_index) -> None:
    record = make_record()
    await repository.put(record)
    search_index.documents[record.id] = make_record(id=record.id, title="stale")
    assert await GetDocumentUseCase(repository, search_index).execute(record.id) is record


@pytest.mark.asyncio
async def test_get_document_falls_back_to_index(repository, search_index) -> None:
    record = make_record()
    search_index.documents[record.id] = record
    use_case = GetDocumentUseCase(repository, search_index)
    assert await use_case.execute(record.id) is record
    assert await use_case.execute("missing") is None


# --- DeleteDocumentUseCase ---


def _delete_use_case(repository, search_index, root: Path) -> DeleteDocumentUseCase:
    return DeleteDocumentUseCase(
        repository=repository,
        search_index=search_index,
        storage=UploadStorage(root),
        path_resolver=PathResolver(root, LocalFileSystem()),
    )


@pytest.mark.asyncio
async def test_delete_removes_record_file_and_index_entry(
    ingest, repository, search_index, uploads_root
) -> None:
    record = (await ingest.execute(_upload())).record
    deleted = await _delete_use_case(repository, search_index, uploads_root).execute(record.id)
    assert deleted is True
    assert not Path(record.file_path).exists()
    assert await repository.get(record.id) is None
    assert record.id not in search_index.documents


@pytest.mark.asyncio
async def test_delete_unknown_document(repository, search_index, uploads_root) -> None:
    assert await _delete_use_case(repository, search_index, uploads_root).execute("nope") is False


@pytest.mark.asyncio
async def test_delete_without_backing_file(repository, search_index, uploads_root) -> None:
    record = make_record()
    await repository.put(record)
    assert await _delete_use_case(repository, search_index, uploads_root).execute(record.id) is True
    assert await repository.get(record.id) is None


@pytest.mark.asyncio
async def test_delete_propagates_index_error_after_local_removal(
    ingest, repository, search_index, uploads_root
) -> None:
    record = (await ingest.execute(_upload())).record
    search_index.write_error = SearchIndexError("deleting failed with HTTP 500", status_code=500)
    with pytest.raises(SearchIndexError):
        await _delete_use_case(repository, search_index, uploads_root).execute(record.id)
    assert await repository.get(record.id) is None
    assert not Path(record.file_path).exists()


@pytest.mark.asyncio
async def test_delete_document_known_only_to_index(
    ingest, repository, search_index, uploads_root
) -> None:
    record = (await ingest.execute(_upload())).record
    await repository.delete(record.id)
    deleted = await _delete_use_case(repository, search_index, uploads_root).execute(record.id)
    assert deleted is True
    assert not Path(record.file_path).exists()
    assert record.id not in search_index.documents


@pytest.mark.asyncio
async def test_delete_unknown_document_with_index_down(repository, search_index, uploads_root) -> None:
    search_index.read_error = IndexUnavailable("Search index unreachable: connection refused")
    with pytest.raises(IndexUnavailable):
        await _delete_use_case(repository, search_index, uploads_root).execute("nope")


# --- ListDocumentsUseCase / DocumentStatsUseCase ---


@pytest.mark.asyncio
async def test_list_by_category_and_tags(repository) -> None:
    factura = make_record(category="facturas", tags=["contabilidad"])
    contrato = make_record(category="contratos", tags=["rrhh", "legal"])
    otro = make_record(category="facturas", tags=["legal"], upload_date=UPLOAD_DATE - timedelta(days=1))
    for record in (factura, contrato, otro):
        await repository.put(record)
    use_case = ListDocumentsUseCase(repository)

    assert await use_case.execute(category="facturas") == [otro, factura]
    assert {r.id for r in await use_case.execute(tags=["legal"])} == {contrato.id, otro.id}
    assert await use_case.execute(category="facturas", tags=["legal"]) == [otro]
    assert len(await use_case.execute()) == 3


@pytest.mark.asyncio
async def test_recent_is_newest_first(repository) -> None:
    records = [make_record(upload_date=UPLOAD_DATE + timedelta(hours=i)) for i in range(5)]
    for record in records:
        await repository.put(record)
    recent = await ListDocumentsUseCase(repository).recent(limit=3)
    assert recent == [records[4], records[3], records[2]]


@pytest.mark.asyncio
async def test_document_stats(repository) -> None:
    await repository.put(make_record(size=100, category="facturas", mimetype="application/pdf"))
    await repository.put(make_record(size=201, category="facturas", mimetype="text/plain"))
    await repository.put(make_record(size=300, category="", mimetype="application/pdf"))
    stats = await DocumentStatsUseCase(repository).execute()
    assert stats.total_documents == 3
    assert stats.total_size == 601
    assert stats.average_size == 200
    assert stats.categories == {"facturas": 2}
    assert stats.mime_types == {"application/pdf": 2, "text/plain": 1}


@pytest.mark.asyncio
async def test_document_stats_empty(repository) -> None:
    stats = await DocumentStatsUseCase(repository).execute()
    assert stats.total_documents == 0
    assert stats.average_size == 0


# --- ResolveDocumentFileUseCase / ReindexDocumentUseCase ---


@pytest.mark.asyncio
async def test_resolve_document_file(ingest, repository, search_index, uploads_root) -> None:
    record = (await ingest.execute(_upload())).record
    use_case = ResolveDocumentFileUseCase(
        GetDocumentUseCase(repository, search_index),
        PathResolver(uploads_root, LocalFileSystem()),
    )
    found_record, location = await use_case.execute(record.id)
    assert found_record is record
    assert isinstance(location, FileLocation)
    assert location.strategy == "file_path"

    assert await use_case.execute("missing") is None

    orphan = make_record(document_type="facturas")
    await repository.put(orphan)
    _, missing = await use_case.execute(orphan.id)
    assert isinstance(missing, FileMissing)


@pytest.mark.asyncio
async def test_reindex_document(repository, search_index) -> None:
    record = make_record()
    await repository.put(record)
    use_case = ReindexDocumentUseCase(repository, search_index)
    result = await use_case.execute(record.id)
    assert (result.id, result.result) == (record.id, "created")
    assert await use_case.execute("missing") is None


# --- search use cases ---


@pytest.mark.asyncio
async def test_search_documents_delegates(search_index) -> None:
    expected = SearchResult(documents=[SearchHit(make_record(), 1.0)], total=1, took_ms=3)
    search_index.search_result = expected
    query = SearchQuery(query="contrato")
    assert await SearchDocumentsUseCase(search_index).execute(query) is expected
    assert search_index.queries == [query]


@pytest.mark.asyncio
async def test_suggest_terms(search_index) -> None:
    search_index.suggestions = ["Contrato A", "Contrato B"]
    use_case = SuggestTermsUseCase(search_index)
    assert await use_case.execute("   ") == []
    assert search_index.suggest_calls == []
    assert await use_case.execute("contr", SuggestField.TITLE, 1) == ["Contrato A"]
    assert search_index.suggest_calls == [("contr", SuggestField.TITLE, 1)]


@pytest.mark.asyncio
async def test_find_similar_excludes_reference(search_index) -> None:
    reference = make_record()
    other = make_record()
    search_index.similar = [SearchHit(reference, 5.0), SearchHit(other, 2.0)]
    hits = await FindSimilarDocumentsUseCase(search_index).execute(reference.id)
    assert [h.document.id for h in hits] == [other.id]
