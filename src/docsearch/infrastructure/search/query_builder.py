"""Builds typed search requests from search parameters."""

import mimetypes

from docsearch.application.dto.search_dto import SearchFilters, SearchQuery
from docsearch.domain.value_objects import SortField, SuggestField
from docsearch.infrastructure.keywords.term_extractor import normalize_text
from docsearch.infrastructure.search.query_model import (
    BoolQuery,
    Clause,
    DateHistogramAggregation,
    Highlight,
    IdsFilter,
    MatchAll,
    MoreLikeThis,
    PhrasePrefix,
    RangeFilter,
    SearchRequest,
    SortSpec,
    TermFilter,
    TermPrefix,
    TermsAggregation,
    TermsFilter,
    TextMatch,
)

FREE_TEXT_FIELDS = ("title^3", "content^2", "keywords^2", "filename")
SIMILARITY_FIELDS = ("title", "content", "keywords")
HIGHLIGHT_FIELDS = ("content", "title", "keywords")

SORT_FIELDS = {
    SortField.DATE: "uploadDate",
    SortField.SIZE: "size",
    SortField.FILENAME: "filename",
}

# facet name -> indexed field
FACET_FIELDS = {
    "category": "category",
    "documentType": "documentType",
    "employeeName": "employeeName.keyword",
    "mimetype": "mimetype",
}
DATE_FACET = "uploadDate"

_FILE_TYPE_MIMETYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain",
}


def file_type_to_mimetype(file_type: str) -> str:
    """Accept either a MIME type or a bare extension such as `pdf`."""
    value = file_type.strip().lower()
    if "/" in value:
        return value
    ext = value.lstrip(".")
    return _FILE_TYPE_MIMETYPES.get(ext) or mimetypes.guess_type(f"file.{ext}")[0] or value


class SearchQueryBuilder:
    """Turns search parameters into index requests. Pure; holds no state."""

    def build(self, params: SearchQuery) -> SearchRequest:
        must: list[Clause] = []
        should: list[Clause] = []

        text = (params.query or "").strip()
        if text:
            should.append(
                TextMatch(
                    query=text,
                    fields=FREE_TEXT_FIELDS,
                    match_type="best_fields",
                    fuzziness="AUTO" if params.fuzzy else None,
                    boost=2.0 if params.boost else 1.0,
                )
            )

        content = (params.content or "").strip()
        if content:
            must.append(TextMatch(query=content, fields=("content",), boost=2.0))

        keywords = tuple(dict.fromkeys(filter(None, (normalize_text(k) for k in params.keywords))))
        if keywords:
            should.append(TermsFilter(field="keywords", values=keywords, boost=1.5))

        if not must and not should:
            must.append(MatchAll())

        query = BoolQuery(
            must=tuple(must),
            should=tuple(should),
            filter=tuple(self._filters(params.filters)),
            minimum_should_match=1 if should else None,
        )
        return SearchRequest(
            query=query,
            size=params.size,
            from_=params.from_,
            sort=self._sort(params),
            aggregations=self._facets(),
            highlight=Highlight(fields=HIGHLIGHT_FIELDS) if params.highlight else None,
        )

    def build_similar(self, document_id: str, min_score: float, max_results: int) -> SearchRequest:
        """More-like-this request that never returns the reference document."""
        query = BoolQuery(
            must=(MoreLikeThis(fields=SIMILARITY_FIELDS, like_ids=(document_id,)),),
            must_not=(IdsFilter(values=(document_id,)),),
        )
        return SearchRequest(query=query, size=max_results, min_score=min_score)

    def build_suggest(self, text: str, field: SuggestField, size: int) -> SearchRequest:
        """Prefix request whose hits carry the completion candidates."""
        text = text.strip()
        if field is SuggestField.KEYWORDS:
            return SearchRequest(
                query=TermPrefix(field="keywords", value=normalize_text(text)),
                size=size,
                source_includes=("keywords",),
            )
        if field is SuggestField.CONTENT:
            return SearchRequest(
                query=PhrasePrefix(field="content", query=text),
                size=size,
                source_includes=("title",),
                highlight=Highlight(
                    fields=("content",),
                    fragment_size=50,
                    number_of_fragments=1,
                    pre_tags=("",),
                    post_tags=("",),
                ),
            )
        return SearchRequest(
            query=PhrasePrefix(field="title", query=text),
            size=size,
            source_includes=("title",),
        )

    def _filters(self, filters: SearchFilters) -> list[Clause]:
        clauses: list[Clause] = []
        if filters.category:
            clauses.append(TermFilter(field="category", value=filters.category))
        if filters.document_type:
            clauses.append(TermFilter(field="documentType", value=filters.document_type))
        if filters.employee_uuid:
            clauses.append(TermFilter(field="employeeUuid", value=filters.employee_uuid))
        if filters.file_type:
            clauses.append(TermFilter(field="mimetype", value=file_type_to_mimetype(filters.file_type)))
        if filters.tags:
            clauses.append(TermsFilter(field="tags", values=tuple(dict.fromkeys(filters.tags))))
        span = filters.date_range
        if span is not None and (span.start or span.end):
            clauses.append(
                RangeFilter(
                    field="uploadDate",
                    gte=span.start.isoformat() if span.start else None,
                    lte=span.end.isoformat() if span.end else None,
                )
            )
        return clauses

    def _sort(self, params: SearchQuery) -> tuple[SortSpec, ...]:
        field = SORT_FIELDS.get(params.sort_by)
        if field is None:
            return ()
        return (SortSpec(field=field, order=params.sort_order.value),)

    def _facets(self) -> dict:
        facets: dict = {name: TermsAggregation(field=f) for name, f in FACET_FIELDS.items()}
        facets[DATE_FACET] = DateHistogramAggregation(field="uploadDate")
        return facets
