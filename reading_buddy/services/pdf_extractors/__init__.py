"""PDF text backends."""

from reading_buddy.models.config import PDFBackend
from reading_buddy.services.pdf_extractors.base import (
    Fragment,
    PDFDocument,
    PDFTextBackend,
    TextFragment,
)
from reading_buddy.services.pdf_extractors.pdfplumber_backend import PDFPlumberBackend
from reading_buddy.services.pdf_extractors.pymupdf_backend import PyMuPDFBackend

_BACKENDS = {
    PDFBackend.PYMUPDF: PyMuPDFBackend,
    PDFBackend.PDFPLUMBER: PDFPlumberBackend,
}


def get_backend(name: PDFBackend | str) -> PDFTextBackend:
    """Instantiate the backend registered under name.

    Raises:
        ValueError: Unknown backend or its library is not installed
    """
    backend_cls = _BACKENDS.get(PDFBackend(name))
    if backend_cls is None:  # pragma: no cover
        raise ValueError(f"Unknown PDF backend: {name}")

    backend = backend_cls()
    if not backend.validate_setup():
        raise ValueError(f"PDF backend '{backend.name.value}' is not installed")
    return backend


__all__ = [
    "Fragment",
    "PDFDocument",
    "PDFTextBackend",
    "TextFragment",
    "PyMuPDFBackend",
    "PDFPlumberBackend",
    "get_backend",
]
