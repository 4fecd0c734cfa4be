"""Document storage port - writes and removes uploaded bytes."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from docsearch.domain.value_objects import StoredFilename


@dataclass(frozen=True)
class StoredFile:
    """Where an upload landed."""

    path: Path
    relative_path: str


class DocumentStorage(Protocol):
    """Port for writing uploads into the persisted directory layout."""

    def save(
        self,
        data: bytes,
        stored_name: StoredFilename,
        employee_uuid: str,
    ) -> StoredFile: ...

    def remove(self, path: Path) -> bool: ...
