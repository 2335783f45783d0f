"""Text extraction data models.

This module defines the per-page text records produced by the text
extractor and the aggregate result handed to the range formatter and
persisted by the host application.
"""

from enum import Enum
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExtractionMethod(str, Enum):
    """How page text was obtained."""

    PDF_TEXT = "pdf-text"
    OCR = "ocr"
    HYBRID = "hybrid"


class PageRange(BaseModel):
    """Inclusive, 1-indexed page range

    Bounds are checked against the document by the extractor, which
    reports violations as InvalidRangeError.
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens in trimmed text."""
    return len(text.split())


class PageText(BaseModel):
    """One page's extracted content"""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    page_number: int = Field(..., ge=1)
    text: str = ""
    word_count: int = Field(default=0, ge=0)

    @classmethod
    def from_text(cls, page_number: int, text: str) -> "PageText":
        """Build a page record from raw text, trimming and counting words."""
        trimmed = text.strip()
        return cls(
            page_number=page_number,
            text=trimmed,
            word_count=count_words(trimmed),
        )


class BookTextContent(BaseModel):
    """Extraction result over a page range."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    pages: List[PageText] = Field(default_factory=list)
    total_pages: int = Field(default=0, ge=0)
    total_words: int = Field(default=0, ge=0)
    extraction_method: ExtractionMethod = ExtractionMethod.OCR

    @classmethod
    def from_pages(cls, pages: List[PageText]) -> "BookTextContent":
        """Aggregate pages, deriving counts and the extraction method.

        Pages are ordered by page number. The method is PDF_TEXT when any
        page carries text, otherwise OCR (likely an image-only scan).
        """
        ordered = sorted(pages, key=lambda p: p.page_number)
        has_text = any(p.text for p in ordered)
        return cls(
            pages=ordered,
            total_pages=len(ordered),
            total_words=sum(p.word_count for p in ordered),
            extraction_method=(
                ExtractionMethod.PDF_TEXT if has_text else ExtractionMethod.OCR
            ),
        )

    def to_storage_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape stored in the books table."""
        return self.model_dump(by_alias=True, mode="json")
