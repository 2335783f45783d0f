"""Abstract base classes for PDF text backends.

A backend opens raw PDF bytes and exposes each page as a list of text
fragments. The text extractor joins fragments into page text, so every
backend only has to describe its own fragment model.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Protocol

import structlog

from reading_buddy.models.config import PDFBackend

logger = structlog.get_logger()


class TextFragment(Protocol):
    """A run of text as laid out on a page."""

    @property
    def text(self) -> str: ...


@dataclass(frozen=True)
class Fragment:
    """Plain TextFragment implementation used by the bundled backends."""

    text: str


class PDFDocument(ABC):
    """An opened PDF. Close it, or use it as a context manager."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError("Subclasses must implement page_count")

    @abstractmethod
    def page_fragments(self, page_number: int) -> List[TextFragment]:
        """
        Return the text fragments of a page, in reading order.

        Args:
            page_number: 1-indexed page number

        Raises:
            Backend-specific exceptions; the extractor wraps them.
        """
        raise NotImplementedError("Subclasses must implement page_fragments()")

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError("Subclasses must implement close()")

    def __enter__(self) -> "PDFDocument":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PDFTextBackend(ABC):
    """
    Abstract base class for PDF text backends.

    All concrete backends must implement:
    - open(): Load PDF bytes into a PDFDocument
    - validate_setup(): Check if backend library is available
    - name property: Return backend identifier
    """

    @abstractmethod
    def open(self, data: bytes) -> PDFDocument:
        """
        Open PDF bytes.

        Raises:
            Backend-specific exceptions for corrupt or non-PDF data.
        """
        raise NotImplementedError("Subclasses must implement open()")

    @abstractmethod
    def validate_setup(self) -> bool:
        """Check if this backend's library is installed."""
        raise NotImplementedError("Subclasses must implement validate_setup()")

    @property
    @abstractmethod
    def name(self) -> PDFBackend:
        """Return the backend identifier."""
        raise NotImplementedError("Subclasses must implement name property")
