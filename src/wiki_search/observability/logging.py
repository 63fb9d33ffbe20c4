"""Log formatting for the wiki search service.

Every line carries the trace id bound by ``TraceContextMiddleware`` so a slow
``/search`` request can be followed from the access log into the index and
snippet code. JSON output is the default; the plain format is meant for a
developer terminal.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import Any, TextIO

import orjson

from wiki_search.observability.context import get_trace_context


# Attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED_RECORD_KEYS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_RECORD_KEYS and not key.startswith("_")
    }


def _encode_fallback(value: Any) -> Any:
    # orjson handles str/int/float/list/dict/dataclasses natively
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    if isinstance(value, (Path, Exception)):
        return str(value)
    return repr(value)


class JsonFormatter(logging.Formatter):
    """One JSON object per line with trace ids, request path and redacted extras."""

    REDACT_KEYS = frozenset({"password", "token", "api_key", "secret", "authorization"})
    MAX_MESSAGE_LEN = 2000
    MAX_EXTRA_LEN = 500

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_trace_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._clip(record.getMessage(), self.MAX_MESSAGE_LEN),
            "trace_id": ctx.get("trace_id", ""),
            "span_id": ctx.get("span_id", ""),
        }

        # wiki_search.search.indexer -> indexer
        _, dot, component = record.name.rpartition(".")
        if dot:
            entry["component"] = component

        path = ctx.get("path")
        if path:
            entry["path"] = path

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in _record_extras(record).items():
            entry[key] = self._scrub(key, value)

        return orjson.dumps(entry, default=_encode_fallback).decode("utf-8")

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        return text if len(text) <= limit else text[:limit] + "..."

    def _scrub(self, key: str, value: Any) -> Any:
        if key.lower() in self.REDACT_KEYS:
            return "[REDACTED]"
        if isinstance(value, str):
            return self._clip(value, self.MAX_EXTRA_LEN)
        return value


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
    access_log: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Install a single root handler and apply level overrides.

    Calling this again replaces the previous handler, so the CLI can route
    logs to stderr after the server defaults have been applied.

    Args:
        level: Root log level name (case-insensitive); unknown names mean INFO
        json_output: ``JsonFormatter`` when True, ``PLAIN_FORMAT`` otherwise
        logger_levels: Per-logger overrides, e.g. ``{"wiki_search.search": "debug"}``
        access_log: Leave ``uvicorn.access`` at the root level instead of WARNING
        stream: Destination stream (default: stdout)
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)

    if not access_log:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    for name, name_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(_resolve_level(name_level))


def _resolve_level(name: str) -> int:
    resolved = logging.getLevelName(name.upper())
    return resolved if isinstance(resolved, int) else logging.INFO
