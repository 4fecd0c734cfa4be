"""docsearch - document keyword extraction, search and retrieval."""

__version__ = "0.1.0"
