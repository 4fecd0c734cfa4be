"""In-process persistence adapters."""

from docsearch.infrastructure.persistence.memory.document_repository import (
    InMemoryDocumentRepository,
)

__all__ = ["InMemoryDocumentRepository"]
