"""Term extractor port."""

from typing import Protocol


class TermExtractor(Protocol):
    """Port for turning plain text into ranked keywords."""

    def extract(self, text: str) -> list[str]: ...
