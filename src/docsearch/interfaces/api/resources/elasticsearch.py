"""Search index administration endpoints."""

import falcon
import falcon.asgi

from docsearch.application.ports import SearchIndex
from docsearch.application.use_cases.document.reindex_document import ReindexDocumentUseCase
from docsearch.domain.exceptions import SearchIndexError, ValidationError
from docsearch.interfaces.api.resources.serialization import index_error
from docsearch.interfaces.api.validation import validate_document_id


class IndexAdminResource:
    """GET test-connection / stats and POST create-index under /api/elasticsearch."""

    def __init__(self, search_index: SearchIndex) -> None:
        self._search_index = search_index

    async def on_get_connection(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        try:
            info = await self._search_index.ping()
        except SearchIndexError as e:
            index_error(resp, e)
            return
        resp.media = {"connected": True, **info}
        resp.status = falcon.HTTP_200

    async def on_post_create(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            created = await self._search_index.ensure_index()
        except SearchIndexError as e:
            index_error(resp, e)
            return
        resp.media = {
            "created": created,
            "message": "Index created" if created else "Index already exists",
        }
        resp.status = falcon.HTTP_201 if created else falcon.HTTP_200

    async def on_get_stats(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        stats = await self._search_index.stats()
        if stats is None:
            resp.status = falcon.HTTP_503
            resp.media = {"error": "Index statistics unavailable"}
            return
        resp.media = {"stats": stats}
        resp.status = falcon.HTTP_200


class IndexDocumentResource:
    """POST /api/elasticsearch/index-document - push a stored document to the index again."""

    def __init__(self, reindex_document: ReindexDocumentUseCase) -> None:
        self._reindex_document = reindex_document

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await req.get_media()
            document_id = validate_document_id(str(body["documentId"]))
        except (falcon.MediaMalformedError, KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            result = await self._reindex_document.execute(document_id)
        except SearchIndexError as e:
            index_error(resp, e)
            return
        if result is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.media = {"id": result.id, "result": result.result}
        resp.status = falcon.HTTP_200
