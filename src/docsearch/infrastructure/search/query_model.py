"""Typed search query model.

Queries are composed from small immutable clause values and turned into the
Elasticsearch JSON body only when a request is sent (`to_dict` / `to_body`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class MatchAll:
    def to_dict(self) -> dict[str, Any]:
        return {"match_all": {}}


@dataclass(frozen=True)
class TextMatch:
    """Analyzed match over one or more fields; `fields` entries may carry `^weight`."""

    query: str
    fields: tuple[str, ...]
    match_type: str = "best_fields"
    fuzziness: str | None = None
    boost: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        if len(self.fields) == 1 and "^" not in self.fields[0]:
            body: dict[str, Any] = {"query": self.query}
            if self.fuzziness:
                body["fuzziness"] = self.fuzziness
            if self.boost != 1.0:
                body["boost"] = self.boost
            return {"match": {self.fields[0]: body}}
        body = {"query": self.query, "fields": list(self.fields), "type": self.match_type}
        if self.fuzziness:
            body["fuzziness"] = self.fuzziness
        if self.boost != 1.0:
            body["boost"] = self.boost
        return {"multi_match": body}


@dataclass(frozen=True)
class PhrasePrefix:
    """Analyzed phrase whose last word is treated as a prefix."""

    field: str
    query: str

    def to_dict(self) -> dict[str, Any]:
        return {"match_phrase_prefix": {self.field: {"query": self.query}}}


@dataclass(frozen=True)
class TermPrefix:
    """Prefix of an exact (keyword) value."""

    field: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"prefix": {self.field: {"value": self.value}}}


@dataclass(frozen=True)
class TermFilter:
    """Exact value on a non-analyzed field."""

    field: str
    value: str | int
    boost: float | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.boost is None:
            return {"term": {self.field: self.value}}
        return {"term": {self.field: {"value": self.value, "boost": self.boost}}}


@dataclass(frozen=True)
class TermsFilter:
    """Any of several exact values."""

    field: str
    values: tuple[str, ...]
    boost: float | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {self.field: list(self.values)}
        if self.boost is not None:
            body["boost"] = self.boost
        return {"terms": body}


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive range; an unset bound is open."""

    field: str
    gte: str | int | float | None = None
    lte: str | int | float | None = None

    def to_dict(self) -> dict[str, Any]:
        bounds: dict[str, Any] = {}
        if self.gte is not None:
            bounds["gte"] = self.gte
        if self.lte is not None:
            bounds["lte"] = self.lte
        return {"range": {self.field: bounds}}


@dataclass(frozen=True)
class IdsFilter:
    values: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"ids": {"values": list(self.values)}}


@dataclass(frozen=True)
class MoreLikeThis:
    """Documents sharing significant terms with the referenced documents."""

    fields: tuple[str, ...]
    like_ids: tuple[str, ...]
    min_term_freq: int = 1
    min_doc_freq: int = 1
    max_query_terms: int = 12

    def to_dict(self) -> dict[str, Any]:
        return {
            "more_like_this": {
                "fields": list(self.fields),
                "like": [{"_id": doc_id} for doc_id in self.like_ids],
                "min_term_freq": self.min_term_freq,
                "min_doc_freq": self.min_doc_freq,
                "max_query_terms": self.max_query_terms,
            }
        }


@dataclass(frozen=True)
class BoolQuery:
    """Boolean composition of clauses. Empty groups are omitted from the body."""

    must: tuple[Clause, ...] = ()
    should: tuple[Clause, ...] = ()
    filter: tuple[Clause, ...] = ()
    must_not: tuple[Clause, ...] = ()
    minimum_should_match: int | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for name in ("must", "should", "filter", "must_not"):
            clauses = getattr(self, name)
            if clauses:
                body[name] = [c.to_dict() for c in clauses]
        if self.minimum_should_match is not None:
            body["minimum_should_match"] = self.minimum_should_match
        return {"bool": body}


Clause = (
    MatchAll
    | TextMatch
    | PhrasePrefix
    | TermPrefix
    | TermFilter
    | TermsFilter
    | RangeFilter
    | IdsFilter
    | MoreLikeThis
    | BoolQuery
)


@dataclass(frozen=True)
class SortSpec:
    field: str
    order: str = "desc"

    def to_dict(self) -> dict[str, Any]:
        return {self.field: {"order": self.order}}


@dataclass(frozen=True)
class TermsAggregation:
    field: str
    size: int = 20

    def to_dict(self) -> dict[str, Any]:
        return {"terms": {"field": self.field, "size": self.size}}


@dataclass(frozen=True)
class DateHistogramAggregation:
    field: str
    calendar_interval: str = "month"
    format: str = "yyyy-MM"

    def to_dict(self) -> dict[str, Any]:
        return {
            "date_histogram": {
                "field": self.field,
                "calendar_interval": self.calendar_interval,
                "format": self.format,
                "min_doc_count": 1,
            }
        }


Aggregation = TermsAggregation | DateHistogramAggregation


@dataclass(frozen=True)
class Highlight:
    fields: tuple[str, ...]
    fragment_size: int = 150
    number_of_fragments: int = 3
    pre_tags: tuple[str, ...] = ("<em>",)
    post_tags: tuple[str, ...] = ("</em>",)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pre_tags": list(self.pre_tags),
            "post_tags": list(self.post_tags),
            "fields": {
                name: {
                    "fragment_size": self.fragment_size,
                    "number_of_fragments": self.number_of_fragments,
                }
                for name in self.fields
            },
        }


@dataclass(frozen=True)
class SearchRequest:
    """Complete `_search` request."""

    query: Clause
    size: int = 10
    from_: int = 0
    sort: tuple[SortSpec, ...] = ()
    aggregations: dict[str, Aggregation] = field(default_factory=dict)
    highlight: Highlight | None = None
    min_score: float | None = None
    source_includes: tuple[str, ...] = ()

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "query": self.query.to_dict(),
            "size": self.size,
            "from": self.from_,
        }
        if self.sort:
            body["sort"] = [s.to_dict() for s in self.sort]
        if self.aggregations:
            body["aggs"] = {name: agg.to_dict() for name, agg in self.aggregations.items()}
        if self.highlight is not None:
            body["highlight"] = self.highlight.to_dict()
        if self.min_score is not None:
            body["min_score"] = self.min_score
        if self.source_includes:
            body["_source"] = list(self.source_includes)
        return body
