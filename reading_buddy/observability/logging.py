"""structlog setup for the reading core.

Every entry carries the active correlation ID and, when a component logger
is used, the component name. Entries are written to stderr so commands can
print JSON on stdout.

Usage:
    from reading_buddy.observability.logging import configure_logging, get_logger

    configure_logging(level="INFO")
    logger = get_logger("text_extractor")
    logger.info("text_extraction_started", reference="books/owl-moon.pdf")
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from reading_buddy.models.config import LoggingSettings
from reading_buddy.observability.context import get_correlation_id


def add_correlation_id_processor(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ``correlation_id`` to the entry ("none" outside any scope)."""
    event_dict["correlation_id"] = get_correlation_id() or "none"
    return event_dict


def _build_processors(json_output: bool, add_timestamp: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_correlation_id_processor,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors.append(
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return processors


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level name; unknown names fall back to INFO
        json_output: JSON lines when True, colored console output otherwise
        add_timestamp: Add an ISO ``timestamp`` field
    """
    min_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=_build_processors(json_output, add_timestamp),
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: LoggingSettings) -> None:
    configure_logging(level=settings.level, json_output=settings.json_output)


def get_logger(component: Optional[str] = None, **initial_context: Any) -> Any:
    """Logger bound to a component name and any extra fields."""
    logger = structlog.get_logger()
    if component:
        initial_context = {"component": component, **initial_context}
    return logger.bind(**initial_context) if initial_context else logger


def bind_context(**context: Any) -> None:
    """Attach fields (e.g. ``book_id``) to every entry in this context."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
