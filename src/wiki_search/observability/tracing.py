"""OpenTelemetry tracing with a Starlette middleware for trace ids."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import SpanKind, Status, StatusCode

from wiki_search.observability.context import (
    bind_trace_context,
    new_span_id,
    new_trace_id,
    reset_trace_context,
    update_span_id,
)


if TYPE_CHECKING:
    from collections.abc import Generator

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

TRACE_HEADER = b"x-trace-id"

_tracer_holder: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(service_name: str = "starmc-wiki-search") -> TracerProvider:
    """Initialize an OpenTelemetry tracer provider for this process."""
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    trace.set_tracer_provider(provider)
    _tracer_holder["tracer"] = trace.get_tracer(__name__)
    logger.info("Tracing initialized for service: %s", service_name)
    return provider


def get_tracer() -> Tracer:
    """Get the configured tracer, falling back to the global provider."""
    if _tracer_holder["tracer"] is None:
        _tracer_holder["tracer"] = trace.get_tracer(__name__)
    return _tracer_holder["tracer"]  # type: ignore[return-value]


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Generator[Span, None, None]:
    """Create a traced span and mirror its span id into the log context."""
    tracer = get_tracer()
    with tracer.start_as_current_span(name, kind=kind) as span:
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)

        ctx = span.get_span_context()
        if ctx.is_valid:
            update_span_id(format(ctx.span_id, "016x"))

        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise


class TraceContextMiddleware:
    """ASGI middleware binding a trace id (from ``x-trace-id`` or fresh) per request."""

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        trace_id = headers.get(TRACE_HEADER, b"").decode() or new_trace_id()
        path = scope.get("path", "")
        method = scope.get("method", "GET")
        token = bind_trace_context(trace_id, new_span_id(), path=path)

        async def send_with_trace_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [*message.get("headers", []), (TRACE_HEADER, trace_id.encode())]
            await send(message)

        try:
            with create_span(
                f"{method} {path}",
                kind=SpanKind.SERVER,
                attributes={"http.method": method, "http.target": path, "wiki.trace_id": trace_id},
            ):
                await self.app(scope, receive, send_with_trace_id)
        finally:
            reset_trace_context(token)
