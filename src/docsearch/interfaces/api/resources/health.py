"""Health check endpoints."""

import falcon
import falcon.asgi

from docsearch.application.ports import SearchIndex
from docsearch.domain.exceptions import SearchIndexError


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, search_index: SearchIndex) -> None:
        self._search_index = search_index

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /api/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /api/health/ready - readiness (search index reachable)."""
        try:
            await self._search_index.ping()
        except SearchIndexError as e:
            resp.media = {"status": "unavailable", "error": str(e)}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
