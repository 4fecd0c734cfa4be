"""Retrieval API resources: search, suggestions, similar documents, browsing and file access."""

import asyncio
from pathlib import Path

import falcon
import falcon.asgi

from docsearch.application.use_cases.document.list_documents import (
    DocumentStatsUseCase,
    ListDocumentsUseCase,
)
from docsearch.application.use_cases.document.resolve_document_file import (
    ResolveDocumentFileUseCase,
)
from docsearch.application.use_cases.search.find_similar import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_SCORE,
    FindSimilarDocumentsUseCase,
)
from docsearch.application.use_cases.search.search_documents import SearchDocumentsUseCase
from docsearch.application.use_cases.search.suggest_terms import (
    DEFAULT_SUGGESTIONS,
    SuggestTermsUseCase,
)
from docsearch.domain.exceptions import SearchIndexError, ValidationError
from docsearch.domain.value_objects import FileMissing
from docsearch.interfaces.api.resources.serialization import (
    hit_to_dict,
    index_error,
    record_to_dict,
)
from docsearch.interfaces.api.validation import (
    MAX_PAGE_SIZE,
    parse_float,
    parse_int,
    parse_search_query,
    parse_suggest_field,
    parse_tags,
    validate_document_id,
)

CHUNK_SIZE = 64 * 1024


async def _iter_file(path: Path):
    """Yield the file's bytes in chunks without blocking the event loop."""
    handle = await asyncio.to_thread(path.open, "rb")
    try:
        while True:
            chunk = await asyncio.to_thread(handle.read, CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        await asyncio.to_thread(handle.close)


class SearchResource:
    """GET /api/retrieval/search - structured search with filters, facets and highlights."""

    def __init__(self, search_documents: SearchDocumentsUseCase) -> None:
        self._search_documents = search_documents

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            query = parse_search_query(req)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        result = await self._search_documents.execute(query)
        body = {
            "documents": [hit_to_dict(hit, req) for hit in result.documents],
            "total": result.total,
            "took": result.took_ms,
            "facets": result.facets,
            "size": query.size,
            "from": query.from_,
        }
        if result.error:
            body["error"] = result.error
        resp.media = body
        resp.status = falcon.HTTP_200


class SuggestionsResource:
    """GET /api/retrieval/suggestions?text=...&field=title|keywords|content&size=5."""

    def __init__(self, suggest_terms: SuggestTermsUseCase) -> None:
        self._suggest_terms = suggest_terms

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        text = (req.get_param("text") or "").strip()
        try:
            if not text:
                raise ValidationError("text is required for suggestions")
            field = parse_suggest_field(req.get_param("field"))
            size = parse_int(req.get_param("size"), "size", DEFAULT_SUGGESTIONS)
            if not 1 <= size <= MAX_PAGE_SIZE:
                raise ValidationError(f"size must be between 1 and {MAX_PAGE_SIZE}")
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        suggestions = await self._suggest_terms.execute(text, field, size)
        resp.media = {"suggestions": suggestions, "searchTerm": text, "field": field.value}
        resp.status = falcon.HTTP_200


class SimilarDocumentsResource:
    """GET /api/retrieval/similar/{document_id}."""

    def __init__(self, find_similar: FindSimilarDocumentsUseCase) -> None:
        self._find_similar = find_similar

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        try:
            validate_document_id(document_id)
            size = parse_int(req.get_param("size"), "size", DEFAULT_MAX_RESULTS)
            min_score = parse_float(req.get_param("minScore"), "minScore", DEFAULT_MIN_SCORE)
            if not 1 <= size <= MAX_PAGE_SIZE:
                raise ValidationError(f"size must be between 1 and {MAX_PAGE_SIZE}")
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        hits = await self._find_similar.execute(document_id, min_score, size)
        resp.media = {
            "similarDocuments": [hit_to_dict(hit, req) for hit in hits],
            "count": len(hits),
            "referenceDocumentId": document_id,
        }
        resp.status = falcon.HTTP_200


class DocumentFileResource:
    """GET /api/retrieval/download/{document_id} and /api/retrieval/view/{document_id}."""

    def __init__(self, resolve_file: ResolveDocumentFileUseCase) -> None:
        self._resolve_file = resolve_file

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        """Send the file as an attachment."""
        await self._send_file(resp, document_id, inline=False)

    async def on_get_view(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        """Send the file for inline display."""
        await self._send_file(resp, document_id, inline=True)

    async def _send_file(
        self, resp: falcon.asgi.Response, document_id: str, inline: bool
    ) -> None:
        try:
            validate_document_id(document_id)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            found = await self._resolve_file.execute(document_id)
        except SearchIndexError as e:
            index_error(resp, e)
            return
        if found is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        record, location = found
        if isinstance(location, FileMissing):
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document file not found", "path": str(location.attempted_path)}
            return

        size = (await asyncio.to_thread(location.path.stat)).st_size
        resp.content_type = record.mimetype or falcon.MEDIA_TEXT
        resp.content_length = size
        if inline:
            resp.viewable_as = record.original_name
        else:
            resp.downloadable_as = record.original_name
        resp.stream = _iter_file(location.path)
        resp.status = falcon.HTTP_200


class StatsResource:
    """GET /api/retrieval/stats."""

    def __init__(self, document_stats: DocumentStatsUseCase) -> None:
        self._document_stats = document_stats

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        stats = await self._document_stats.execute()
        resp.media = {
            "stats": {
                "totalDocuments": stats.total_documents,
                "totalSize": stats.total_size,
                "averageSize": stats.average_size,
                "categories": stats.categories,
                "mimeTypes": stats.mime_types,
            }
        }
        resp.status = falcon.HTTP_200


class BrowseResource:
    """GET /api/retrieval/recent, /api/retrieval/category/{category} and /api/retrieval/tags."""

    def __init__(self, list_documents: ListDocumentsUseCase) -> None:
        self._list_documents = list_documents

    async def on_get_recent(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            limit = parse_int(req.get_param("limit"), "limit", 10)
            if limit < 1:
                raise ValidationError("limit must be at least 1")
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        records = await self._list_documents.recent(limit)
        resp.media = {"documents": [record_to_dict(r, req) for r in records], "count": len(records)}
        resp.status = falcon.HTTP_200

    async def on_get_category(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        category: str,
    ) -> None:
        category = category.strip()
        if not category:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid category"}
            return
        records = await self._list_documents.execute(category=category)
        resp.media = {
            "documents": [record_to_dict(r, req) for r in records],
            "count": len(records),
            "category": category,
        }
        resp.status = falcon.HTTP_200

    async def on_get_tags(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        tags = parse_tags(req.get_param_as_list("tags"))
        if not tags:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "At least one tag is required"}
            return
        records = await self._list_documents.execute(tags=tags)
        resp.media = {
            "documents": [record_to_dict(r, req) for r in records],
            "count": len(records),
            "tags": tags,
        }
        resp.status = falcon.HTTP_200
