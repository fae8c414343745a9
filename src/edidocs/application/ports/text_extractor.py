"""Text extractor port."""

from typing import Protocol


class TextExtractor(Protocol):
    """Extracts plain text per page from a binary document."""

    def supports(self, filename: str) -> bool: ...

    def extract_pages(self, content: bytes, filename: str) -> list[str]:
        """Page texts in page order. Raises ExtractionError on malformed input."""
        ...
