"""Local disk implementation of the FileSystem port."""

from pathlib import Path


class LocalFileSystem:
    """Queries the local file system."""

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def list_dir(self, path: Path) -> list[str]:
        """Entry names in `path`; empty if it is not a readable directory."""
        try:
            return [entry.name for entry in path.iterdir()]
        except (FileNotFoundError, NotADirectoryError, PermissionError):
            return []
