"""Prometheus metrics for the reading core.

Defines counters and histograms for monitoring:
- Text extraction throughput, latency and method mix
- Document fetches from object storage
- Rate limiter decisions

Usage:
    from reading_buddy.observability.metrics import TEXT_EXTRACTIONS

    TEXT_EXTRACTIONS.labels(status="success", method="pdf-text").inc()

    with EXTRACTION_DURATION.labels(backend="pymupdf").time():
        extract()
"""

from prometheus_client import (
    Counter,
    Histogram,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# Private registry keeps the host application's default registry clean
REGISTRY = CollectorRegistry(auto_describe=True)

TEXT_EXTRACTIONS = Counter(
    name="reading_buddy_text_extractions_total",
    documentation="Total text extraction calls",
    labelnames=["status", "method"],  # success/invalid_range/unresolvable/failed
    registry=REGISTRY,
)

PAGES_EXTRACTED = Counter(
    name="reading_buddy_pages_extracted_total",
    documentation="Total pages whose text was extracted",
    labelnames=["backend"],
    registry=REGISTRY,
)

DOCUMENT_FETCHES = Counter(
    name="reading_buddy_document_fetches_total",
    documentation="Total document fetch attempts",
    labelnames=["source", "status"],  # local/object_storage, success/failed
    registry=REGISTRY,
)

RATE_LIMIT_DECISIONS = Counter(
    name="reading_buddy_rate_limit_decisions_total",
    documentation="Rate limiter outcomes",
    labelnames=["rule", "outcome"],  # allowed, rejected
    registry=REGISTRY,
)

EXTRACTION_DURATION = Histogram(
    name="reading_buddy_extraction_duration_seconds",
    documentation="Time spent extracting text for one call",
    labelnames=["backend"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
    registry=REGISTRY,
)


def get_metrics_text() -> bytes:
    """Generate Prometheus metrics in text exposition format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Content-Type header value for a metrics response."""
    return CONTENT_TYPE_LATEST
