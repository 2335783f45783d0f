"""Shared fakes for extraction tests."""

from typing import Dict, List

import pytest

from reading_buddy.models.config import PDFBackend
from reading_buddy.services.document_resolver import DocumentResolver
from reading_buddy.services.pdf_extractors.base import (
    Fragment,
    PDFDocument,
    PDFTextBackend,
    TextFragment,
)
from reading_buddy.services.text_extractor import TextExtractor
from reading_buddy.utils.exceptions import UnresolvableDocumentError


class FakeDocument(PDFDocument):
    """Pages are lists of fragment strings; a None page fails to read."""

    def __init__(self, pages: List[List[str] | None]):
        self.pages = pages
        self.closed = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page_fragments(self, page_number: int) -> List[TextFragment]:
        page = self.pages[page_number - 1]
        if page is None:
            raise RuntimeError("corrupt content stream")
        return [Fragment(text=t) for t in page]

    def close(self) -> None:
        self.closed = True


class FakeBackend(PDFTextBackend):
    """Opens documents registered by their byte content."""

    def __init__(self, documents: Dict[bytes, List[List[str] | None]]):
        self.documents = documents
        self.opened: List[FakeDocument] = []

    @property
    def name(self) -> PDFBackend:
        return PDFBackend.PYMUPDF

    def validate_setup(self) -> bool:
        return True

    def open(self, data: bytes) -> PDFDocument:
        if data not in self.documents:
            raise ValueError("cannot open broken document")
        doc = FakeDocument(self.documents[data])
        self.opened.append(doc)
        return doc


class FakeResolver(DocumentResolver):
    """Maps references to bytes; unknown references are unresolvable."""

    def __init__(self, contents: Dict[str, bytes]):
        self.contents = contents
        self.fetches: List[str] = []

    async def fetch(self, reference: str) -> bytes:
        self.fetches.append(reference)
        if reference not in self.contents:
            raise UnresolvableDocumentError(reference, "unknown reference")
        return self.contents[reference]


def numbered_pages(count: int) -> List[List[str] | None]:
    return [[f"Page {n}", "text"] for n in range(1, count + 1)]


@pytest.fixture
def book_pages():
    return [
        ["Once upon", "a time"],
        ["  there was  ", "an owl."],
        [],
        ["The end"],
    ]


@pytest.fixture
def fake_backend(book_pages):
    return FakeBackend(
        {
            b"%PDF-book": book_pages,
            b"%PDF-scan": [[], [""], ["   "]],
            b"%PDF-broken-page": [["ok"], None, ["fine"]],
            b"%PDF-long": numbered_pages(150),
        }
    )


@pytest.fixture
def fake_resolver():
    return FakeResolver(
        {
            "books/owl-moon.pdf": b"%PDF-book",
            "books/scan.pdf": b"%PDF-scan",
            "books/broken-page.pdf": b"%PDF-broken-page",
            "books/long.pdf": b"%PDF-long",
            "books/garbage.pdf": b"%PDF-garbage",
        }
    )


@pytest.fixture
def extractor(fake_resolver, fake_backend):
    return TextExtractor(resolver=fake_resolver, backend=fake_backend)
