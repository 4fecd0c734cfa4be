"""List and browse document use cases."""

from docsearch.application.dto.document_dto import DocumentStats
from docsearch.application.ports import DocumentRepository
from docsearch.domain.entities import DocumentRecord


class ListDocumentsUseCase:
    """Browse stored documents, optionally narrowed by category or tags."""

    def __init__(self, repository: DocumentRepository) -> None:
        self._repository = repository

    async def execute(
        self,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> list[DocumentRecord]:
        """Documents matching `category` and any of `tags`, oldest upload first."""
        records = await self._repository.list()
        if category:
            records = [r for r in records if r.category == category]
        if tags:
            wanted = set(tags)
            records = [r for r in records if wanted.intersection(r.tags)]
        return sorted(records, key=lambda r: r.upload_date)

    async def recent(self, limit: int = 10) -> list[DocumentRecord]:
        """Most recently uploaded documents first."""
        records = await self._repository.list()
        records.sort(key=lambda r: r.upload_date, reverse=True)
        return records[:limit]


class DocumentStatsUseCase:
    """Totals and per-category / per-mimetype counts."""

    def __init__(self, repository: DocumentRepository) -> None:
        self._repository = repository

    async def execute(self) -> DocumentStats:
        records = await self._repository.list()
        categories: dict[str, int] = {}
        mime_types: dict[str, int] = {}
        for record in records:
            if record.category:
                categories[record.category] = categories.get(record.category, 0) + 1
            mime_types[record.mimetype] = mime_types.get(record.mimetype, 0) + 1
        return DocumentStats(
            total_documents=len(records),
            total_size=sum(r.size for r in records),
            categories=categories,
            mime_types=mime_types,
        )
