"""Observability for the reading core.

Provides:
- Correlation ID context management for request tracing
- Structured logging with context propagation
- Prometheus metrics for monitoring

Usage:
    from reading_buddy.observability import set_correlation_id, get_logger

    set_correlation_id()
    logger = get_logger("quiz_planner")
    logger.info("quiz_requests_built", count=3)
"""

from reading_buddy.observability.context import (
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
    correlation_id_context,
    new_correlation_id,
)
from reading_buddy.observability.logging import (
    get_logger,
    configure_logging,
    configure_from_settings,
    add_correlation_id_processor,
)
from reading_buddy.observability.metrics import (
    TEXT_EXTRACTIONS,
    PAGES_EXTRACTED,
    DOCUMENT_FETCHES,
    RATE_LIMIT_DECISIONS,
    EXTRACTION_DURATION,
    get_metrics_text,
)

__all__ = [
    # Context
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "correlation_id_context",
    "new_correlation_id",
    # Logging
    "get_logger",
    "configure_logging",
    "configure_from_settings",
    "add_correlation_id_processor",
    # Metrics
    "TEXT_EXTRACTIONS",
    "PAGES_EXTRACTED",
    "DOCUMENT_FETCHES",
    "RATE_LIMIT_DECISIONS",
    "EXTRACTION_DURATION",
    "get_metrics_text",
]
