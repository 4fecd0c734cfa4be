"""Keyword extraction."""

from docsearch.infrastructure.keywords.term_extractor import FrequencyTermExtractor

__all__ = ["FrequencyTermExtractor"]
