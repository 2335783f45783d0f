"""Text extraction for book PDFs.

This service:
1. Resolves a document reference to PDF bytes
2. Opens the bytes with a PDF text backend
3. Validates the requested page range
4. Builds per-page text and word counts
5. Formats a range of pages for the quiz generator

Failures abort the whole call: no partial results are returned.
"""

import time
from typing import List, Optional

import structlog

from reading_buddy.models.text_extraction import BookTextContent, PageRange, PageText
from reading_buddy.observability.metrics import (
    EXTRACTION_DURATION,
    PAGES_EXTRACTED,
    TEXT_EXTRACTIONS,
)
from reading_buddy.services.document_resolver import DocumentResolver
from reading_buddy.services.pdf_extractors.base import PDFDocument, PDFTextBackend
from reading_buddy.utils.exceptions import (
    ExtractionFailure,
    InvalidRangeError,
    UnresolvableDocumentError,
)

logger = structlog.get_logger()


def format_range_text(content: BookTextContent) -> str:
    """Format pages as "[Page N]" blocks separated by blank lines.

    An empty result formats to an empty string.
    """
    return "\n\n".join(f"[Page {p.page_number}]\n{p.text}" for p in content.pages)


class TextExtractor:
    """Extracts per-page text from book PDFs

    The backend and resolver are injected so the host decides where
    documents live and which PDF library reads them.
    """

    def __init__(self, resolver: DocumentResolver, backend: PDFTextBackend):
        """Initialize text extractor

        Args:
            resolver: Maps document references to PDF bytes
            backend: PDF library used to read page text
        """
        self.resolver = resolver
        self.backend = backend

    async def extract(
        self, reference: str, page_range: Optional[PageRange] = None
    ) -> BookTextContent:
        """Extract text from a book PDF

        Args:
            reference: Document reference (public URL or local path)
            page_range: Optional inclusive range; whole document if omitted

        Returns:
            BookTextContent with pages in ascending order

        Raises:
            UnresolvableDocumentError: Reference cannot be resolved
            InvalidRangeError: Range is outside the document
            ExtractionFailure: Document or a page could not be read
        """
        start_time = time.time()
        backend_name = self.backend.name.value

        logger.info(
            "text_extraction_started",
            reference=reference,
            backend=backend_name,
            start=page_range.start if page_range else None,
            end=page_range.end if page_range else None,
        )

        try:
            data = await self.resolver.fetch(reference)
            with self._open(data) as document:
                total_pages = document.page_count
                start = page_range.start if page_range else 1
                end = page_range.end if page_range else total_pages
                self._validate_range(start, end, total_pages)
                pages = self._extract_pages(document, start, end)
        except InvalidRangeError as e:
            TEXT_EXTRACTIONS.labels(status="invalid_range", method="none").inc()
            logger.warning("text_extraction_invalid_range", error=str(e))
            raise
        except UnresolvableDocumentError as e:
            TEXT_EXTRACTIONS.labels(status="unresolvable", method="none").inc()
            logger.warning("text_extraction_unresolvable", error=str(e))
            raise
        except ExtractionFailure as e:
            TEXT_EXTRACTIONS.labels(status="failed", method="none").inc()
            logger.error(
                "text_extraction_failed",
                reference=reference,
                page_number=e.page_number,
                error=str(e),
            )
            raise

        content = BookTextContent.from_pages(pages)
        duration = time.time() - start_time

        TEXT_EXTRACTIONS.labels(
            status="success", method=content.extraction_method.value
        ).inc()
        PAGES_EXTRACTED.labels(backend=backend_name).inc(content.total_pages)
        EXTRACTION_DURATION.labels(backend=backend_name).observe(duration)

        logger.info(
            "text_extraction_success",
            reference=reference,
            pages=content.total_pages,
            words=content.total_words,
            method=content.extraction_method.value,
            duration_seconds=round(duration, 3),
        )
        if content.total_words < 100:
            logger.warning(
                "text_extraction_low_word_count",
                reference=reference,
                words=content.total_words,
                hint="document may be image-based",
            )

        return content

    async def extract_page_range_text(
        self, reference: str, start_page: int, end_page: int
    ) -> str:
        """Extract an inclusive page range and format it for the quiz generator"""
        content = await self.extract(
            reference, PageRange(start=start_page, end=end_page)
        )
        return format_range_text(content)

    def _open(self, data: bytes) -> PDFDocument:
        try:
            return self.backend.open(data)
        except Exception as e:
            raise ExtractionFailure(f"Failed to open PDF: {e}", cause=e) from e

    @staticmethod
    def _validate_range(start: int, end: int, total_pages: int) -> None:
        if start < 1 or end > total_pages or start > end:
            raise InvalidRangeError(start, end, total_pages)

    def _extract_pages(
        self, document: PDFDocument, start: int, end: int
    ) -> List[PageText]:
        pages: List[PageText] = []
        for page_number in range(start, end + 1):
            try:
                fragments = document.page_fragments(page_number)
                text = " ".join(fragment.text for fragment in fragments)
            except Exception as e:
                raise ExtractionFailure(
                    f"Failed to read page text: {e}",
                    page_number=page_number,
                    cause=e,
                ) from e
            pages.append(PageText.from_text(page_number, text))
        return pages
