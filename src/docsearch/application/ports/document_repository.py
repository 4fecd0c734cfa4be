"""Document repository port."""

from typing import Protocol

from docsearch.domain.entities import DocumentRecord


class DocumentRepository(Protocol):
    """Port for document metadata persistence."""

    async def get(self, document_id: str) -> DocumentRecord | None: ...

    async def put(self, record: DocumentRecord) -> DocumentRecord: ...

    async def delete(self, document_id: str) -> bool: ...

    async def list(self) -> list[DocumentRecord]: ...
