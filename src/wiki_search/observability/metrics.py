"""Prometheus metrics for search latency, outcomes and index size."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


REGISTRY = CollectorRegistry(auto_describe=True)

SEARCH_LATENCY = Histogram(
    "wiki_search_latency_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
    registry=REGISTRY,
)

SEARCH_REQUESTS = Counter(
    "wiki_search_requests_total",
    "Search queries by outcome (hit, miss, empty)",
    ["outcome"],
    registry=REGISTRY,
)

HTTP_REQUESTS = Counter(
    "wiki_http_requests_total",
    "HTTP requests by route and status",
    ["route", "status"],
    registry=REGISTRY,
)

INDEX_DOC_COUNT = Gauge(
    "wiki_index_document_count",
    "Documents in the search index",
    registry=REGISTRY,
)

INDEX_TERM_COUNT = Gauge(
    "wiki_index_term_count",
    "Distinct terms in the search index",
    registry=REGISTRY,
)


@contextmanager
def track_latency(histogram: Histogram) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get content type for metrics endpoint."""
    return CONTENT_TYPE_LATEST
