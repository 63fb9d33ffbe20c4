"""Per-request trace context shared by the log formatter and tracing helpers."""

from __future__ import annotations

from contextvars import ContextVar, Token
from uuid import uuid4


_trace_context: ContextVar[dict | None] = ContextVar("wiki_trace_context", default=None)


def new_trace_id() -> str:
    """Return a 32-char hex trace ID."""
    return uuid4().hex


def new_span_id() -> str:
    """Return a 16-char hex span ID."""
    return uuid4().hex[:16]


def get_trace_context() -> dict:
    """Return the active context, starting a fresh trace if none is bound."""
    ctx = _trace_context.get()
    if not ctx or not ctx.get("trace_id"):
        ctx = {"trace_id": new_trace_id(), "span_id": new_span_id()}
        _trace_context.set(ctx)
    return ctx


def bind_trace_context(trace_id: str, span_id: str, **extra: object) -> Token:
    """Bind a context for the current request; pass the token to ``reset_trace_context``."""
    return _trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def reset_trace_context(token: Token) -> None:
    _trace_context.reset(token)


def update_span_id(span_id: str) -> None:
    """Swap the span id, keeping the trace id and any extras."""
    ctx = _trace_context.get() or {}
    _trace_context.set({**ctx, "span_id": span_id})
