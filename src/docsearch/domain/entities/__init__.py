"""Domain entities."""

from docsearch.domain.entities.document_record import DocumentRecord

__all__ = ["DocumentRecord"]
