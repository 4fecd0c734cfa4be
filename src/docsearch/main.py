"""Application entry point and composition root."""

import logging

import uvicorn
from falcon.asgi import App

from docsearch import __version__
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
from docsearch.config import Settings, get_settings
from docsearch.infrastructure.keywords import FrequencyTermExtractor
from docsearch.infrastructure.persistence.memory import InMemoryDocumentRepository
from docsearch.infrastructure.search import ElasticsearchSearchIndex, create_elasticsearch_client
from docsearch.infrastructure.storage import LocalFileSystem, PathResolver, UploadStorage
from docsearch.interfaces.api.app import ApiResources, create_app
from docsearch.interfaces.api.middleware.cors import CORSMiddleware
from docsearch.interfaces.api.middleware.index_lifespan import IndexLifespanMiddleware
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
from docsearch.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def create_docsearch_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    uploads_root = settings.uploads_dir.resolve()

    client = create_elasticsearch_client(
        settings.elasticsearch_url,
        username=settings.elasticsearch_username,
        password=settings.elasticsearch_password,
        api_key=settings.elasticsearch_api_key,
        timeout=settings.elasticsearch_timeout,
    )
    search_index = ElasticsearchSearchIndex(client, settings.elasticsearch_index)
    repository = InMemoryDocumentRepository()
    storage = UploadStorage(uploads_root)
    path_resolver = PathResolver(uploads_root, LocalFileSystem())
    term_extractor = FrequencyTermExtractor()

    ingest_document = IngestDocumentUseCase(
        repository=repository,
        search_index=search_index,
        term_extractor=term_extractor,
        storage=storage,
        default_document_type=settings.default_document_type,
    )
    get_document = GetDocumentUseCase(repository=repository, search_index=search_index)
    delete_document = DeleteDocumentUseCase(
        repository=repository,
        search_index=search_index,
        storage=storage,
        path_resolver=path_resolver,
    )
    list_documents = ListDocumentsUseCase(repository=repository)
    document_stats = DocumentStatsUseCase(repository=repository)
    resolve_file = ResolveDocumentFileUseCase(
        get_document=get_document,
        path_resolver=path_resolver,
    )
    reindex_document = ReindexDocumentUseCase(repository=repository, search_index=search_index)
    search_documents = SearchDocumentsUseCase(search_index=search_index)
    suggest_terms = SuggestTermsUseCase(search_index=search_index)
    find_similar = FindSimilarDocumentsUseCase(search_index=search_index)

    resources = ApiResources(
        health=HealthResource(search_index),
        upload=DocumentUploadResource(
            ingest_document,
            max_file_size=settings.max_upload_size_bytes,
            max_files=settings.max_files_per_upload,
        ),
        keywords=KeywordsResource(ingest_document),
        documents=DocumentsResource(list_documents),
        document=DocumentResource(get_document, delete_document),
        search=SearchResource(search_documents),
        suggestions=SuggestionsResource(suggest_terms),
        similar=SimilarDocumentsResource(find_similar),
        document_file=DocumentFileResource(resolve_file),
        stats=StatsResource(document_stats),
        browse=BrowseResource(list_documents),
        index_admin=IndexAdminResource(search_index),
        index_document=IndexDocumentResource(reindex_document),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            IndexLifespanMiddleware(search_index),
        ],
        max_upload_size=settings.max_upload_size_bytes,
    )


def main() -> None:
    """CLI entry point - serve the API with uvicorn."""
    settings = get_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level)
    logger.info(
        "docsearch v%s starting (%s) on %s:%s, index %s at %s",
        __version__,
        settings.environment,
        settings.host,
        settings.port,
        settings.elasticsearch_index,
        settings.elasticsearch_url,
    )
    uvicorn.run(
        create_docsearch_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
