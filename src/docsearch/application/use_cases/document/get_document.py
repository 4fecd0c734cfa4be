"""Get document use case."""

from docsearch.application.ports import DocumentRepository, SearchIndex
from docsearch.domain.entities import DocumentRecord


class GetDocumentUseCase:
    """Get a document record by id.

    The repository is authoritative; the index is consulted for records the
    repository no longer holds (for example after a restart of the in-memory
    store).
    """

    def __init__(self, repository: DocumentRepository, search_index: SearchIndex) -> None:
        self._repository = repository
        self._search_index = search_index

    async def execute(self, document_id: str) -> DocumentRecord | None:
        record = await self._repository.get(document_id)
        if record is not None:
            return record
        return await self._search_index.get_by_id(document_id)
