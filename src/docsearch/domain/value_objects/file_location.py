"""Outcome of resolving a document to its file on disk."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileLocation:
    """File found; `strategy` names the resolution step that found it."""

    path: Path
    strategy: str


@dataclass(frozen=True)
class FileMissing:
    """No resolution step found the file."""

    attempted_path: Path
    message: str
