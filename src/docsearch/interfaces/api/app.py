"""Falcon ASGI application."""

import logging
from dataclasses import dataclass

import falcon
import falcon.asgi
import falcon.media
from falcon.asgi import App

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

logger = logging.getLogger(__name__)


@dataclass
class ApiResources:
    """Every resource the API routes to."""

    health: HealthResource
    upload: DocumentUploadResource
    keywords: KeywordsResource
    documents: DocumentsResource
    document: DocumentResource
    search: SearchResource
    suggestions: SuggestionsResource
    similar: SimilarDocumentsResource
    document_file: DocumentFileResource
    stats: StatsResource
    browse: BrowseResource
    index_admin: IndexAdminResource
    index_document: IndexDocumentResource


async def _log_exception(req, resp, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}


def create_app(
    resources: ApiResources,
    middleware: list | None = None,
    max_upload_size: int = 100 * 1024 * 1024,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])

    multipart = falcon.media.MultipartFormHandler()
    # one byte over the limit so oversized files reach upload validation
    multipart.parse_options.max_body_part_buffer_size = max_upload_size + 1
    app.req_options.media_handlers[falcon.MEDIA_MULTIPART] = multipart

    app.add_error_handler(Exception, _log_exception)

    app.add_route("/api/health", resources.health)
    app.add_route("/api/health/ready", resources.health, suffix="ready")

    app.add_route("/api/documents", resources.documents)
    app.add_route("/api/documents/upload", resources.upload)
    app.add_route("/api/documents/upload-multiple", resources.upload, suffix="multiple")
    app.add_route("/api/documents/keywords", resources.keywords)
    app.add_route("/api/documents/{document_id}", resources.document)

    app.add_route("/api/retrieval/search", resources.search)
    app.add_route("/api/retrieval/suggestions", resources.suggestions)
    app.add_route("/api/retrieval/similar/{document_id}", resources.similar)
    app.add_route("/api/retrieval/download/{document_id}", resources.document_file)
    app.add_route("/api/retrieval/view/{document_id}", resources.document_file, suffix="view")
    app.add_route("/api/retrieval/stats", resources.stats)
    app.add_route("/api/retrieval/recent", resources.browse, suffix="recent")
    app.add_route("/api/retrieval/category/{category}", resources.browse, suffix="category")
    app.add_route("/api/retrieval/tags", resources.browse, suffix="tags")

    app.add_route(
        "/api/elasticsearch/test-connection", resources.index_admin, suffix="connection"
    )
    app.add_route("/api/elasticsearch/create-index", resources.index_admin, suffix="create")
    app.add_route("/api/elasticsearch/stats", resources.index_admin, suffix="stats")
    app.add_route("/api/elasticsearch/index-document", resources.index_document)
    return app
