"""Document record entity."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class DocumentRecord:
    """Uploaded document with employee metadata and extracted keywords.

    `year` is derived from `upload_date` so the two can never disagree.
    `tags` and `keywords` are de-duplicated on construction, keeping first
    occurrence order.
    """

    id: str
    filename: str
    original_name: str
    mimetype: str
    size: int
    upload_date: datetime
    employee_uuid: str
    title: str = ""
    description: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    employee_name: str = ""
    employee_cedula: str = ""
    document_type: str = ""
    extracted_text: str = ""
    keywords: list[str] = field(default_factory=list)
    file_path: str = ""
    relative_path: str = ""

    def __post_init__(self) -> None:
        self.tags = list(dict.fromkeys(t for t in self.tags if t))
        self.keywords = list(dict.fromkeys(self.keywords))

    @property
    def year(self) -> int:
        return self.upload_date.year
