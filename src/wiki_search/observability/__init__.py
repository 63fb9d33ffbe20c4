"""Observability module: structured logging, Prometheus metrics and OpenTelemetry tracing."""

from wiki_search.observability.context import bind_trace_context, get_trace_context, reset_trace_context
from wiki_search.observability.logging import JsonFormatter, configure_logging
from wiki_search.observability.metrics import (
    HTTP_REQUESTS,
    INDEX_DOC_COUNT,
    INDEX_TERM_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from wiki_search.observability.tracing import TraceContextMiddleware, create_span, get_tracer, init_tracing


__all__ = [
    "HTTP_REQUESTS",
    "INDEX_DOC_COUNT",
    "INDEX_TERM_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_REQUESTS",
    "JsonFormatter",
    "TraceContextMiddleware",
    "bind_trace_context",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "reset_trace_context",
    "track_latency",
]
