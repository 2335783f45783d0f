"""Unit tests for the PyMuPDF and pdfplumber text backends."""

from unittest.mock import MagicMock, Mock, patch

import pytest

from reading_buddy.models.config import PDFBackend
from reading_buddy.services.pdf_extractors import (
    PDFPlumberBackend,
    PyMuPDFBackend,
    get_backend,
)


def _block(*lines):
    return {"lines": [{"spans": [{"text": t} for t in spans]} for spans in lines]}


def test_pymupdf_name():
    assert PyMuPDFBackend().name == PDFBackend.PYMUPDF


def test_pymupdf_validate_setup_success():
    with patch.dict("sys.modules", {"fitz": Mock()}):
        assert PyMuPDFBackend().validate_setup() is True


def test_pymupdf_validate_setup_failure():
    # None in sys.modules makes the import raise ImportError
    with patch.dict("sys.modules", {"fitz": None}):
        assert PyMuPDFBackend().validate_setup() is False


def test_pymupdf_reads_spans_in_order():
    mock_page = Mock()
    mock_page.get_text.return_value = {
        "blocks": [
            _block(["Once ", "upon"], ["a time"]),
            {"type": 1, "image": b"..."},
            _block(["the end"]),
        ]
    }
    mock_doc = MagicMock()
    mock_doc.__len__.return_value = 3
    mock_doc.load_page.return_value = mock_page
    mock_fitz = Mock(open=Mock(return_value=mock_doc))

    with patch.dict("sys.modules", {"fitz": mock_fitz}):
        document = PyMuPDFBackend().open(b"%PDF-1.7")

    mock_fitz.open.assert_called_once_with(stream=b"%PDF-1.7", filetype="pdf")
    assert document.page_count == 3

    fragments = document.page_fragments(2)

    mock_doc.load_page.assert_called_once_with(1)
    mock_page.get_text.assert_called_once_with("dict")
    assert [f.text for f in fragments] == ["Once ", "upon", "a time", "the end"]

    with document:
        pass
    mock_doc.close.assert_called_once()


def test_pymupdf_open_propagates_errors():
    mock_fitz = Mock(open=Mock(side_effect=RuntimeError("cannot open broken document")))

    with patch.dict("sys.modules", {"fitz": mock_fitz}):
        with pytest.raises(RuntimeError):
            PyMuPDFBackend().open(b"not a pdf")


def test_pdfplumber_name():
    assert PDFPlumberBackend().name == PDFBackend.PDFPLUMBER


def test_pdfplumber_validate_setup_failure():
    with patch.dict("sys.modules", {"pdfplumber": None}):
        assert PDFPlumberBackend().validate_setup() is False


def test_pdfplumber_reads_words():
    first = Mock()
    first.extract_words.return_value = [{"text": "Hello"}, {"text": "owl"}]
    second = Mock()
    second.extract_words.return_value = []
    mock_pdf = Mock(pages=[first, second])
    mock_pdfplumber = Mock(open=Mock(return_value=mock_pdf))

    with patch.dict("sys.modules", {"pdfplumber": mock_pdfplumber}):
        document = PDFPlumberBackend().open(b"%PDF-1.4")

    stream = mock_pdfplumber.open.call_args.args[0]
    assert stream.read() == b"%PDF-1.4"
    assert document.page_count == 2
    assert [f.text for f in document.page_fragments(1)] == ["Hello", "owl"]
    assert document.page_fragments(2) == []

    document.close()
    mock_pdf.close.assert_called_once()


def test_get_backend_by_name():
    with patch.dict("sys.modules", {"fitz": Mock()}):
        backend = get_backend("pymupdf")

    assert isinstance(backend, PyMuPDFBackend)


def test_get_backend_by_enum():
    with patch.dict("sys.modules", {"pdfplumber": Mock()}):
        backend = get_backend(PDFBackend.PDFPLUMBER)

    assert isinstance(backend, PDFPlumberBackend)


def test_get_backend_unknown_name():
    with pytest.raises(ValueError):
        get_backend("tesseract")


def test_get_backend_not_installed():
    with patch.dict("sys.modules", {"fitz": None}):
        with pytest.raises(ValueError, match="not installed"):
            get_backend("pymupdf")
