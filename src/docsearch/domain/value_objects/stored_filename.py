"""On-disk filename convention for uploaded documents.

Files are stored as ``<year>_<cedula>_<documentType>_<epochMillis>_<basename><ext>``.
The timestamp makes names unique per upload; everything else is derived from
the document metadata, so a file can be found again when only the timestamp
differs from what the record remembers.
"""

import os
import re
from dataclasses import dataclass

MISSING_CEDULA = "sincedula"

_UNSAFE_CHARS = re.compile(r"[\\/\x00]")


@dataclass(frozen=True)
class StoredFilename:
    """Parsed stored filename."""

    year: str
    cedula: str
    document_type: str
    timestamp: str
    basename: str
    extension: str

    @classmethod
    def for_upload(
        cls,
        year: int,
        cedula: str,
        document_type: str,
        timestamp_ms: int,
        original_name: str,
    ) -> "StoredFilename":
        """Build the stored name for a new upload."""
        basename, extension = os.path.splitext(os.path.basename(original_name.replace("\\", "/")))
        return cls(
            year=str(year),
            cedula=_UNSAFE_CHARS.sub("-", cedula.strip()) or MISSING_CEDULA,
            document_type=_UNSAFE_CHARS.sub("-", document_type.strip()),
            timestamp=str(timestamp_ms),
            basename=_UNSAFE_CHARS.sub("-", basename) or "documento",
            extension=extension.lower(),
        )

    @classmethod
    def parse(cls, filename: str) -> "StoredFilename | None":
        """Split a stored filename into its parts, or None if it does not follow the convention."""
        stem, extension = os.path.splitext(filename)
        parts = stem.split("_", 3)
        if len(parts) != 4:
            return None
        year, cedula, document_type, rest = parts
        timestamp, sep, basename = rest.partition("_")
        if not sep or not timestamp.isdigit() or not basename:
            return None
        return cls(
            year=year,
            cedula=cedula,
            document_type=document_type,
            timestamp=timestamp,
            basename=basename,
            extension=extension,
        )

    @property
    def name(self) -> str:
        return (
            f"{self.year}_{self.cedula}_{self.document_type}_"
            f"{self.timestamp}_{self.basename}{self.extension}"
        )

    def sibling_pattern(self) -> re.Pattern[str]:
        """Pattern matching the same document stored under any timestamp."""
        prefix = re.escape(f"{self.year}_{self.cedula}_{self.document_type}_")
        suffix = re.escape(f"_{self.basename}{self.extension}")
        return re.compile(rf"^{prefix}\d+{suffix}$")

    def __str__(self) -> str:
        return self.name
