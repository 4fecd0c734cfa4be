"""Fixtures for API tests."""

from pathlib import Path

import pytest
from falcon.testing import TestClient

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
from docsearch.infrastructure.storage import LocalFileSystem, PathResolver, UploadStorage
from docsearch.interfaces.api.app import ApiResources, create_app
from docsearch.interfaces.api.middleware.cors import CORSMiddleware
from docsearch.interfaces.api.resources.documents import (
    DocumentResource,
    DocumentsResource,
    DocumentUploadResource,
    KeywordsResource,
)
from docsearch.interfaces.api.resources.elasticsearch import (
    IndexAdminResource,
    IndexDocumentResource,
)
from docsearch.interfaces.api.resources.health import HealthResource
from docsearch.interfaces.api.resources.retrieval import (
    BrowseResource,
    DocumentFileResource,
    SearchResource,
    SimilarDocumentsResource,
    StatsResource,
    SuggestionsResource,
)

BOUNDARY = "----DocsearchBoundary"
MAX_UPLOAD_SIZE = 1024
MAX_FILES = 5


def multipart_body(
    fields: dict[str, str] | None = None,
    files: list[tuple[str, str, str, bytes]] | None = None,
    texts: list[str] | None = None,
) -> tuple[bytes, dict[str, str]]:
    """Encode form fields, (field, filename, content type, data) files and extractedText parts."""
    chunks: list[bytes] = []
    for name, value in (fields or {}).items():
        chunks.append(
            (
                f"--{BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
                f"{value}\r\n"
            ).encode("utf-8")
        )
    for field, filename, content_type, data in files or []:
        chunks.append(
            (
                f"--{BOUNDARY}\r\n"
                f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
                f"Content-Type: {content_type}\r\n\r\n"
            ).encode("utf-8")
            + data
            + b"\r\n"
        )
    for text in texts or []:
        chunks.append(
            (
                f"--{BOUNDARY}\r\n"
                'Content-Disposition: form-data; name="extractedText"\r\n\r\n'
                f"{text}\r\n"
            ).encode("utf-8")
        )
    chunks.append(f"--{BOUNDARY}--\r\n".encode("utf-8"))
    headers = {"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"}
    return b"".join(chunks), headers


@pytest.fixture
def api_uploads_root(tmp_path: Path) -> Path:
    root = tmp_path / "uploads"
    root.mkdir()
    return root


@pytest.fixture
def app(search_index, repository, term_extractor, clock, api_uploads_root):
    """Falcon ASGI app wired to the fake index, in-memory repository and a temp uploads root."""
    storage = UploadStorage(api_uploads_root)
    path_resolver = PathResolver(api_uploads_root, LocalFileSystem())

    ingest_document = IngestDocumentUseCase(
        repository=repository,
        search_index=search_index,
        term_extractor=term_extractor,
        storage=storage,
        clock=clock,
    )
    get_document = GetDocumentUseCase(repository, search_index)
    delete_document = DeleteDocumentUseCase(
        repository=repository,
        search_index=search_index,
        storage=storage,
        path_resolver=path_resolver,
    )
    list_documents = ListDocumentsUseCase(repository)

    resources = ApiResources(
        health=HealthResource(search_index),
        upload=DocumentUploadResource(
            ingest_document, max_file_size=MAX_UPLOAD_SIZE, max_files=MAX_FILES
        ),
        keywords=KeywordsResource(ingest_document),
        documents=DocumentsResource(list_documents),
        document=DocumentResource(get_document, delete_document),
        search=SearchResource(SearchDocumentsUseCase(search_index)),
        suggestions=SuggestionsResource(SuggestTermsUseCase(search_index)),
        similar=SimilarDocumentsResource(FindSimilarDocumentsUseCase(search_index)),
        document_file=DocumentFileResource(
            ResolveDocumentFileUseCase(get_document, path_resolver)
        ),
        stats=StatsResource(DocumentStatsUseCase(repository)),
        browse=BrowseResource(list_documents),
        index_admin=IndexAdminResource(search_index),
        index_document=IndexDocumentResource(ReindexDocumentUseCase(repository, search_index)),
    )
    return create_app(
        resources,
        middleware=[CORSMiddleware(["http://frontend.test"])],
        max_upload_size=MAX_UPLOAD_SIZE,
    )


@pytest.fixture
def client(app) -> TestClient:
    """Test client for the API."""
    return TestClient(app)
