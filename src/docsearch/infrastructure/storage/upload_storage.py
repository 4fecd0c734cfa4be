"""Writes uploads into the persisted directory layout.

Layout: ``<root>/<year>/<employeeUuid>/<documentType>/<stored filename>``.
"""

import logging
from pathlib import Path, PurePosixPath

from docsearch.application.ports import StoredFile
from docsearch.domain.value_objects import StoredFilename

logger = logging.getLogger(__name__)


def document_directory(root: Path, year: int | str, employee_uuid: str, document_type: str) -> Path:
    """Directory holding one employee's documents of one type for one year."""
    return root / str(year) / employee_uuid / document_type


class UploadStorage:
    """Stores uploaded bytes under the uploads root."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def save(self, data: bytes, stored_name: StoredFilename, employee_uuid: str) -> StoredFile:
        """Write `data` and return its absolute and root-relative location."""
        directory = document_directory(
            self._root, stored_name.year, employee_uuid, stored_name.document_type
        )
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / stored_name.name
        path.write_bytes(data)
        relative = PurePosixPath(
            stored_name.year, employee_uuid, stored_name.document_type, stored_name.name
        )
        logger.info("Stored upload %s (%d bytes)", relative, len(data))
        return StoredFile(path=path.resolve(), relative_path=str(relative))

    def remove(self, path: Path) -> bool:
        """Delete the file at `path`; False if it was already gone."""
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Removed file %s", path)
        return True
