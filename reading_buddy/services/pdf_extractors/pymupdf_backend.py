"""PyMuPDF (fitz) text backend.

Reads the native text layer with PyMuPDF. Fragments are the text spans of
each line, in the order PyMuPDF lays them out. It is fast and lightweight,
which makes it the default backend.
"""

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


class PyMuPDFDocument(PDFDocument):
    """PDFDocument over a fitz.Document."""

    def __init__(self, doc: Any):
        self._doc = doc

    @property
    def page_count(self) -> int:
        return len(self._doc)

    def page_fragments(self, page_number: int) -> List[TextFragment]:
        page = self._doc.load_page(page_number - 1)
        content = page.get_text("dict")

        fragments: List[TextFragment] = []
        # Image blocks carry no "lines"
        for block in content.get("blocks", []):
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    fragments.append(Fragment(text=span.get("text", "")))
        return fragments

    def close(self) -> None:
        self._doc.close()


class PyMuPDFBackend(PDFTextBackend):
    """PDF text backend using PyMuPDF (fitz) library."""

    @property
    def name(self) -> PDFBackend:
        """Return the backend identifier."""
        return PDFBackend.PYMUPDF

    def validate_setup(self) -> bool:
        """Check if PyMuPDF is installed."""
        try:
            import fitz  # noqa: F401

            return True
        except ImportError:
            logger.warning("pymupdf_not_installed")
            return False

    def open(self, data: bytes) -> PDFDocument:
        import fitz

        doc = fitz.open(stream=data, filetype="pdf")
        return PyMuPDFDocument(doc)
