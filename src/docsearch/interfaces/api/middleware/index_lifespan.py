"""Index lifespan middleware - prepares the index on startup, closes the client on shutdown."""

import logging
from typing import Any

from docsearch.domain.exceptions import SearchIndexError
from docsearch.infrastructure.search import ElasticsearchSearchIndex

logger = logging.getLogger(__name__)


class IndexLifespanMiddleware:
    """Ensures the search index exists at startup and releases its HTTP client at shutdown."""

    def __init__(self, search_index: ElasticsearchSearchIndex) -> None:
        self._search_index = search_index

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Create the index if missing. An unreachable index does not stop the server."""
        try:
            created = await self._search_index.ensure_index()
        except SearchIndexError as e:
            logger.warning("Search index %s not ready at startup: %s", self._search_index.index, e)
            return
        if created:
            logger.info("Search index %s created at startup", self._search_index.index)

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await self._search_index.close()
