"""Elasticsearch adapter for the SearchIndex port, spoken over the REST API with httpx."""

import logging
import re
from typing import Any

import httpx

from docsearch.application.dto.document_dto import IndexResult
from docsearch.application.dto.search_dto import SearchHit, SearchQuery, SearchResult
from docsearch.domain.entities import DocumentRecord
from docsearch.domain.exceptions import IndexUnavailable, SearchIndexError
from docsearch.domain.value_objects import SuggestField
from docsearch.infrastructure.keywords.term_extractor import normalize_text
from docsearch.infrastructure.search.index_schema import (
    INDEX_MAPPINGS,
    INDEX_SETTINGS,
    record_from_source,
    record_to_source,
)
from docsearch.infrastructure.search.query_builder import (
    DATE_FACET,
    FACET_FIELDS,
    SearchQueryBuilder,
)
from docsearch.infrastructure.search.query_model import SearchRequest

logger = logging.getLogger(__name__)

_HIGHLIGHT_TAGS = re.compile(r"</?em>")


def create_elasticsearch_client(
    base_url: str,
    username: str = "",
    password: str = "",
    api_key: str = "",
    timeout: float = 30.0,
) -> httpx.AsyncClient:
    """Create the HTTP client used to talk to Elasticsearch.

    Basic auth is used when both username and password are set; an API key
    takes precedence over basic auth.
    """
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    auth = None
    if api_key:
        headers["Authorization"] = f"ApiKey {api_key}"
    elif username and password:
        auth = httpx.BasicAuth(username, password)
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        headers=headers,
        auth=auth,
        timeout=httpx.Timeout(timeout, connect=3.0),
    )


def _error_reason(response: httpx.Response) -> str:
    try:
        error = response.json().get("error")
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(error, dict):
        return f"{error.get('type', 'error')}: {error.get('reason', '')}".strip()
    return str(error or response.reason_phrase)


def _error_type(response: httpx.Response) -> str:
    try:
        error = response.json().get("error")
    except ValueError:
        return ""
    return error.get("type", "") if isinstance(error, dict) else ""


def _total(hits: dict[str, Any]) -> int:
    total = hits.get("total", 0)
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total or 0)


def _to_hit(hit: dict[str, Any]) -> SearchHit:
    return SearchHit(
        document=record_from_source(hit["_id"], hit.get("_source") or {}),
        score=hit.get("_score"),
        highlights=hit.get("highlight") or {},
    )


def _facets(aggregations: dict[str, Any]) -> dict[str, dict[str, int]]:
    facets: dict[str, dict[str, int]] = {}
    for name in (*FACET_FIELDS, DATE_FACET):
        buckets = aggregations.get(name, {}).get("buckets", [])
        facets[name] = {
            str(b.get("key_as_string", b.get("key"))): int(b.get("doc_count", 0)) for b in buckets
        }
    return facets


class ElasticsearchSearchIndex:
    """Indexes and queries document records in a single Elasticsearch index."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        index: str,
        query_builder: SearchQueryBuilder | None = None,
    ) -> None:
        self._client = client
        self._index = index
        self._builder = query_builder or SearchQueryBuilder()
        self._index_ready = False

    @property
    def index(self) -> str:
        return self._index

    async def close(self) -> None:
        await self._client.aclose()

    async def ping(self) -> dict[str, Any]:
        """Cluster name and version; raises IndexUnavailable when unreachable."""
        response = await self._send("GET", "/")
        self._raise_for_status(response, "connection test")
        info = response.json()
        version = info.get("version", {})
        return {
            "cluster": info.get("cluster_name"),
            "version": version.get("number"),
            "lucene": version.get("lucene_version"),
        }

    async def ensure_index(self) -> bool:
        """Create the index with its mapping if missing. True when it was created now."""
        if self._index_ready:
            return False
        response = await self._send("HEAD", f"/{self._index}")
        if response.status_code == 200:
            self._index_ready = True
            return False
        if response.status_code != 404:
            self._raise_for_status(response, "index check")

        response = await self._send(
            "PUT",
            f"/{self._index}",
            json={"settings": INDEX_SETTINGS, "mappings": INDEX_MAPPINGS},
        )
        if response.status_code == 400 and _error_type(response) == "resource_already_exists_exception":
            self._index_ready = True
            return False
        self._raise_for_status(response, "index creation")
        self._index_ready = True
        logger.info("Created index %s", self._index)
        return True

    async def upsert(self, record: DocumentRecord) -> IndexResult:
        """Create or overwrite the record's index entry."""
        await self.ensure_index()
        response = await self._send(
            "PUT",
            f"/{self._index}/_doc/{record.id}",
            json=record_to_source(record),
        )
        self._raise_for_status(response, f"indexing document {record.id}")
        data = response.json()
        logger.info("Indexed document %s into %s (%s)", data.get("_id"), self._index, data.get("result"))
        return IndexResult(id=data.get("_id", record.id), result=data.get("result", ""))

    async def delete(self, document_id: str) -> bool:
        """Remove the entry; False when it was not indexed."""
        response = await self._send("DELETE", f"/{self._index}/_doc/{document_id}")
        if response.status_code == 404:
            return False
        self._raise_for_status(response, f"deleting document {document_id}")
        logger.info("Deleted document %s from %s", document_id, self._index)
        return True

    async def get_by_id(self, document_id: str) -> DocumentRecord | None:
        """The indexed record, or None when the index has no such document.

        Unreachable or failing index raises instead of reporting not-found.
        """
        response = await self._send("GET", f"/{self._index}/_doc/{document_id}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response, f"fetching document {document_id}")
        try:
            data = response.json()
        except ValueError as e:
            raise SearchIndexError(f"Invalid response fetching document {document_id}: {e}") from e
        if not data.get("found"):
            return None
        return record_from_source(data["_id"], data.get("_source") or {})

    async def search(self, query: SearchQuery) -> SearchResult:
        """Ranked documents with highlights and facets; empty with `error` set on failure."""
        request = self._builder.build(query)
        try:
            data = await self._search(request)
        except (SearchIndexError, ValueError) as e:
            logger.warning("Search failed: %s", e)
            return SearchResult.empty(str(e) or type(e).__name__)
        if data is None:
            return SearchResult(documents=[], total=0, took_ms=0)

        hits = data.get("hits", {})
        return SearchResult(
            documents=[_to_hit(hit) for hit in hits.get("hits", [])],
            total=_total(hits),
            took_ms=int(data.get("took", 0)),
            facets=_facets(data.get("aggregations", {})),
        )

    async def suggest(self, text: str, field: SuggestField, size: int) -> list[str]:
        """Up to `size` distinct completions for `text`; empty on failure."""
        if not text.strip() or size <= 0:
            return []
        request = self._builder.build_suggest(text, field, size)
        try:
            data = await self._search(request)
        except (SearchIndexError, ValueError) as e:
            logger.warning("Suggest failed: %s", e)
            return []
        if data is None:
            return []

        prefix = normalize_text(text)
        suggestions: dict[str, None] = {}
        for hit in data.get("hits", {}).get("hits", []):
            source = hit.get("_source") or {}
            if field is SuggestField.KEYWORDS:
                candidates = [k for k in source.get("keywords", []) if k.startswith(prefix)]
            elif field is SuggestField.CONTENT:
                fragments = (hit.get("highlight") or {}).get("content", [])
                candidates = [_HIGHLIGHT_TAGS.sub("", f).strip() for f in fragments]
            else:
                candidates = [source.get("title", "")]
            for candidate in candidates:
                if candidate:
                    suggestions.setdefault(candidate)
        return list(suggestions)[:size]

    async def find_similar(
        self, document_id: str, min_score: float, max_results: int
    ) -> list[SearchHit]:
        """Documents sharing significant terms with `document_id`, excluding itself."""
        request = self._builder.build_similar(document_id, min_score, max_results)
        try:
            data = await self._search(request)
        except (SearchIndexError, ValueError) as e:
            logger.warning("Similar-document search for %s failed: %s", document_id, e)
            return []
        if data is None:
            return []
        hits = [_to_hit(hit) for hit in data.get("hits", {}).get("hits", [])]
        return [hit for hit in hits if hit.document.id != document_id]

    async def stats(self) -> dict[str, Any] | None:
        try:
            response = await self._send("GET", f"/{self._index}/_stats")
            self._raise_for_status(response, "index stats")
            return response.json()
        except (SearchIndexError, ValueError) as e:
            logger.warning("Could not read stats for %s: %s", self._index, e)
            return None

    async def _search(self, request: SearchRequest) -> dict[str, Any] | None:
        """Run `_search`; None when the index does not exist yet."""
        response = await self._send("POST", f"/{self._index}/_search", json=request.to_body())
        if response.status_code == 404 and _error_type(response) == "index_not_found_exception":
            return None
        self._raise_for_status(response, "search")
        return response.json()

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            raise IndexUnavailable(f"Search index unreachable: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_error:
            raise SearchIndexError(
                f"{action} failed with HTTP {response.status_code}: {_error_reason(response)}",
                status_code=response.status_code,
            )
