"""Resolves a document record to its file on disk.

Stored metadata can go stale (moved roots, separator changes, re-uploads with a
new timestamp), so resolution runs an ordered list of strategies and the first
one that finds an existing file wins:

1. the absolute ``file_path`` stored on the record;
2. ``relative_path`` resolved against the uploads root;
3. the canonical ``<root>/<year>/<employeeUuid>/<documentType>/<filename>``;
4. a scan of the canonical directory for the same stored filename under any
   timestamp.

Each strategy is a plain function of (record, root, file system), so the chain
can be tested without touching a real disk.
"""

import logging
from collections.abc import Callable
from pathlib import Path, PurePosixPath

from docsearch.application.ports import FileSystem
from docsearch.domain.entities import DocumentRecord
from docsearch.domain.value_objects import FileLocation, FileMissing, StoredFilename
from docsearch.infrastructure.storage.upload_storage import document_directory

logger = logging.getLogger(__name__)

ResolutionStrategy = Callable[[DocumentRecord, Path, FileSystem], Path | None]


def canonical_path(record: DocumentRecord, root: Path) -> Path:
    """Where the layout says the record's file lives."""
    return document_directory(root, record.year, record.employee_uuid, record.document_type) / record.filename


def normalize_relative_path(relative_path: str, root_name: str = "") -> PurePosixPath | None:
    """Platform-neutral form of a stored relative path.

    Backslashes become forward slashes, leading separators and a leading
    uploads-root segment are dropped. Paths escaping the root give None.
    """
    parts = [p for p in relative_path.replace("\\", "/").split("/") if p and p != "."]
    if parts and root_name and parts[0] == root_name:
        parts = parts[1:]
    if not parts or ".." in parts:
        return None
    return PurePosixPath(*parts)


def from_file_path(record: DocumentRecord, root: Path, fs: FileSystem) -> Path | None:
    if not record.file_path:
        return None
    path = Path(record.file_path)
    return path if fs.exists(path) else None


def from_relative_path(record: DocumentRecord, root: Path, fs: FileSystem) -> Path | None:
    if not record.relative_path:
        return None
    relative = normalize_relative_path(record.relative_path, root.name)
    if relative is None:
        return None
    path = root.joinpath(*relative.parts)
    return path if fs.exists(path) else None


def from_canonical_layout(record: DocumentRecord, root: Path, fs: FileSystem) -> Path | None:
    if not record.filename:
        return None
    path = canonical_path(record, root)
    return path if fs.exists(path) else None


def from_timestamp_scan(record: DocumentRecord, root: Path, fs: FileSystem) -> Path | None:
    """Find the same stored name with a different upload timestamp."""
    stored = StoredFilename.parse(record.filename)
    if stored is None:
        return None
    directory = canonical_path(record, root).parent
    pattern = stored.sibling_pattern()
    for entry in sorted(fs.list_dir(directory)):
        if pattern.match(entry):
            return directory / entry
    return None


DEFAULT_STRATEGIES: tuple[tuple[str, ResolutionStrategy], ...] = (
    ("file_path", from_file_path),
    ("relative_path", from_relative_path),
    ("canonical", from_canonical_layout),
    ("timestamp_scan", from_timestamp_scan),
)


class PathResolver:
    """Runs the resolution strategies in order against one uploads root."""

    def __init__(
        self,
        root: Path,
        file_system: FileSystem,
        strategies: tuple[tuple[str, ResolutionStrategy], ...] = DEFAULT_STRATEGIES,
    ) -> None:
        self._root = root
        self._fs = file_system
        self._strategies = strategies

    def resolve(self, record: DocumentRecord) -> FileLocation | FileMissing:
        for name, strategy in self._strategies:
            path = strategy(record, self._root, self._fs)
            if path is not None:
                if name == "timestamp_scan":
                    logger.warning(
                        "Document %s found by directory scan at %s; stored metadata is stale",
                        record.id,
                        path,
                    )
                return FileLocation(path=path, strategy=name)

        attempted = canonical_path(record, self._root)
        logger.warning("File for document %s not found (expected %s)", record.id, attempted)
        return FileMissing(
            attempted_path=attempted,
            message=f"File not found for document {record.id}; expected at {attempted}",
        )
