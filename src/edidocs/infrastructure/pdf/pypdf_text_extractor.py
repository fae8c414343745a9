"""Page text extraction for PDF."""

import io
from pathlib import PurePosixPath

from pypdf import PdfReader

from edidocs.domain.exceptions import ExtractionError


class PypdfTextExtractor:
    """Text extractor backed by pypdf."""

    def supports(self, filename: str) -> bool:
        return PurePosixPath(filename).suffix.lower() == ".pdf"

    def extract_pages(self, content: bytes, filename: str) -> list[str]:
        """Text of every page in order; pages without text yield ""."""
        try:
            reader = PdfReader(io.BytesIO(content))
            return [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            raise ExtractionError(filename, e) from e
