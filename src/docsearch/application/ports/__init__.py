"""Application ports - interfaces for external adapters."""

from docsearch.application.ports.document_repository import DocumentRepository
from docsearch.application.ports.document_storage import DocumentStorage, StoredFile
from docsearch.application.ports.file_system import FileSystem
from docsearch.application.ports.path_resolver import DocumentPathResolver
from docsearch.application.ports.search_index import SearchIndex
from docsearch.application.ports.term_extractor import TermExtractor

__all__ = [
    "DocumentPathResolver",
    "DocumentRepository",
    "DocumentStorage",
    "FileSystem",
    "SearchIndex",
    "StoredFile",
    "TermExtractor",
]
