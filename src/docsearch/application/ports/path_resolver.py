"""Path resolver port."""

from typing import Protocol

from docsearch.domain.entities import DocumentRecord
from docsearch.domain.value_objects import FileLocation, FileMissing


class DocumentPathResolver(Protocol):
    """Port for locating a document's file on disk."""

    def resolve(self, record: DocumentRecord) -> FileLocation | FileMissing: ...
