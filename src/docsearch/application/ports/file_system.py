"""File system query port."""

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Read-only queries against a file system."""

    def exists(self, path: Path) -> bool: ...

    def list_dir(self, path: Path) -> list[str]: ...
