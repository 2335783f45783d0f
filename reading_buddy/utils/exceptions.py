"""Custom exceptions for book content processing

This module defines the exception hierarchy for the reading core:
- Base exception for all core errors
- Specific exceptions for each stage (resolution, range checks, extraction,
  quiz response parsing, rate limiting)

All exceptions inherit from ReadingBuddyError to allow catching every
core error in a single except block when needed.
"""

from typing import Optional


class ReadingBuddyError(Exception):
    """Base exception for all reading core errors

    Use this to catch any error raised by the core:
    ```python
    try:
        await extractor.extract(book.pdf_url)
    except ReadingBuddyError as e:
        logger.error("extraction_failed", error=str(e))
    ```
    """

    pass


class InvalidRangeError(ReadingBuddyError):
    """Requested page range is out of bounds for the document

    Raised when:
    - start page is below 1
    - end page is beyond the document's last page
    - start page is after end page

    Never retried: the document will not grow new pages.
    """

    def __init__(self, start: int, end: int, total_pages: int) -> None:
        super().__init__(
            f"Invalid page range: {start}-{end} (total pages: {total_pages})"
        )
        self.start = start
        self.end = end
        self.total_pages = total_pages


class UnresolvableDocumentError(ReadingBuddyError):
    """Document reference cannot be mapped to retrievable content

    Raised when:
    - Reference is empty or malformed
    - Public URL does not map to an object key
    - Local file does not exist
    - Storage reports the object as missing (404)
    """

    def __init__(self, reference: Optional[str], reason: str) -> None:
        super().__init__(f"Cannot resolve document '{reference}': {reason}")
        self.reference = reference
        self.reason = reason


class ExtractionFailure(ReadingBuddyError):
    """Reading or parsing the document failed

    Raised when:
    - PDF bytes cannot be opened by the backend
    - Text content of any page in the range cannot be read

    The whole call is aborted; no partial result is returned.
    """

    def __init__(
        self,
        message: str,
        page_number: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        if page_number is not None:
            message = f"Page {page_number}: {message}"
        super().__init__(message)
        self.page_number = page_number
        self.cause = cause


class DocumentFetchError(ExtractionFailure):
    """Document bytes could not be downloaded from storage

    Raised when:
    - Storage returns a non-200, non-404 status
    - Network timeout or connection error
    - Object exceeds the configured size limit
    """

    pass


class QuizParseError(ReadingBuddyError):
    """Quiz generator response could not be turned into a quiz

    Raised when:
    - Response is not valid JSON
    - Response has no questions
    - A question has no options
    """

    pass


class RateLimitError(ReadingBuddyError):
    """Rate limit exceeded with retry-after metadata.

    Raised when:
    - A requester exhausted its window for an expensive operation
    """

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after
