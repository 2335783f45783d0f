"""Correlation IDs for tracing one book operation through the logs.

The ID lives in a ContextVar, so it follows an extraction across awaits
without being passed around. CLI commands open one scope per invocation;
a host application opens one per request.

Usage:
    from reading_buddy.observability.context import (
        correlation_id_context,
        new_correlation_id,
    )

    with correlation_id_context(new_correlation_id("extract")):
        await extractor.extract(book.pdf_url)
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

_current_id: ContextVar[Optional[str]] = ContextVar(
    "reading_buddy_correlation_id", default=None
)


def new_correlation_id(operation: Optional[str] = None) -> str:
    """Generate an ID such as ``extract-1f3a9c2e7b40``."""
    suffix = uuid.uuid4().hex[:12]
    return f"{operation}-{suffix}" if operation else suffix


def set_correlation_id(corr_id: Optional[str] = None) -> str:
    """Set the ID for the current context, generating one if omitted."""
    corr_id = corr_id or new_correlation_id()
    _current_id.set(corr_id)
    return corr_id


def get_correlation_id() -> Optional[str]:
    return _current_id.get()


def clear_correlation_id() -> None:
    _current_id.set(None)


@contextmanager
def correlation_id_context(corr_id: Optional[str] = None) -> Iterator[str]:
    """Scope an ID to a block and restore the outer one afterwards."""
    corr_id = corr_id or new_correlation_id()
    reset_token = _current_id.set(corr_id)
    try:
        yield corr_id
    finally:
        _current_id.reset(reset_token)
