"""Search index adapter, query model and query builder."""

from docsearch.infrastructure.search.elasticsearch_index import (
    ElasticsearchSearchIndex,
    create_elasticsearch_client,
)
from docsearch.infrastructure.search.query_builder import SearchQueryBuilder

__all__ = ["ElasticsearchSearchIndex", "SearchQueryBuilder", "create_elasticsearch_client"]
