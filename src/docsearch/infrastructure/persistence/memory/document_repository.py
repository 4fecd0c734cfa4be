"""In-memory document repository."""

from docsearch.domain.entities import DocumentRecord


class InMemoryDocumentRepository:
    """Keeps document records in a dict keyed by id.

    Records live for the lifetime of the process. Swap for a persistent
    adapter implementing the same port to keep metadata across restarts.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, DocumentRecord] = {}

    async def get(self, document_id: str) -> DocumentRecord | None:
        return self._by_id.get(document_id)

    async def put(self, record: DocumentRecord) -> DocumentRecord:
        self._by_id[record.id] = record
        return record

    async def delete(self, document_id: str) -> bool:
        return self._by_id.pop(document_id, None) is not None

    async def list(self) -> list[DocumentRecord]:
        return list(self._by_id.values())
