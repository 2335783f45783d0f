"""PDFPlumber text backend.

Reads the native text layer with pdfplumber. Fragments are the words
pdfplumber groups from page characters. It is slower than PyMuPDF but
copes better with tightly kerned text.
"""

import io
from typing import Any, List

import structlog

from reading_buddy.models.config import PDFBackend
from reading_buddy.services.pdf_extractors.base import (
    Fragment,
    PDFDocument,
    PDFTextBackend,
    TextFragment,
)

logger = structlog.get_logger()


class PDFPlumberDocument(PDFDocument):
    """PDFDocument over a pdfplumber.PDF."""

    def __init__(self, pdf: Any):
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def page_fragments(self, page_number: int) -> List[TextFragment]:
        page = self._pdf.pages[page_number - 1]
        return [Fragment(text=word.get("text", "")) for word in page.extract_words()]

    def close(self) -> None:
        self._pdf.close()


class PDFPlumberBackend(PDFTextBackend):
    """PDF text backend using pdfplumber library."""

    @property
    def name(self) -> PDFBackend:
        """Return the backend identifier."""
        return PDFBackend.PDFPLUMBER

    def validate_setup(self) -> bool:
        """Check if pdfplumber is installed."""
        try:
            import pdfplumber  # noqa: F401

            return True
        except ImportError:
            logger.warning("pdfplumber_not_installed")
            return False

    def open(self, data: bytes) -> PDFDocument:
        import pdfplumber

        pdf = pdfplumber.open(io.BytesIO(data))
        return PDFPlumberDocument(pdf)
