"""Snippet extraction and term highlighting.

A snippet is a fixed window of raw page text around the first matched query
term. The window is HTML-escaped before any markup is inserted, then every
query term is wrapped in ``<mark>``.

Two highlight modes exist:
- ``sequential``: wrap term by term with a case-insensitive regex. A later
  term can re-match text inside an earlier term's wrapping (for example the
  ``mark`` inside ``<mark>``); this is the reference behavior.
- ``single_pass``: collect spans for all terms against the escaped snippet,
  drop overlaps (earliest, then longest wins) and wrap once.
"""

from __future__ import annotations

from collections.abc import Sequence
import re
from typing import Literal


HighlightMode = Literal["sequential", "single_pass"]

SNIPPET_LEAD_CHARS = 60
SNIPPET_WINDOW_CHARS = 120

_HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}
_HTML_ESCAPE_PATTERN = re.compile(r"[&<>]")


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``; quotes and markdown pass through."""

    return _HTML_ESCAPE_PATTERN.sub(lambda match: _HTML_ESCAPES[match.group(0)], text)


def find_first_match(text: str, terms: Sequence[str]) -> int:
    """Return the first occurrence of the first term (in term order) that occurs, else -1."""

    lowered = text.lower()
    for term in terms:
        if not term:
            continue
        position = lowered.find(term.lower())
        if position >= 0:
            return position
    return -1


def extract_window(
    text: str,
    position: int,
    *,
    lead: int = SNIPPET_LEAD_CHARS,
    window: int = SNIPPET_WINDOW_CHARS,
) -> str:
    """Slice ``lead`` chars before ``position`` up to ``window`` chars after it.

    A negative ``position`` means nothing matched: the first ``window`` chars
    are returned.
    """

    start = max(0, position - lead)
    end = min(len(text), position + window if position >= 0 else window)
    return text[start:end]


def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(re.escape(term), re.IGNORECASE)


def highlight_terms_sequential(snippet: str, terms: Sequence[str]) -> str:
    """Wrap every case-insensitive occurrence of each term, one term at a time."""

    result = snippet
    for term in terms:
        if not term:
            continue
        result = _term_pattern(term).sub(lambda match: f"<mark>{match.group(0)}</mark>", result)
    return result


def highlight_terms_single_pass(snippet: str, terms: Sequence[str]) -> str:
    """Wrap non-overlapping matches of all terms in one pass over the snippet."""

    matches: list[tuple[int, int]] = []
    for term in terms:
        if not term:
            continue
        matches.extend((match.start(), match.end()) for match in _term_pattern(term).finditer(snippet))

    if not matches:
        return snippet

    # Earliest start first, longer match first on ties
    matches.sort(key=lambda span: (span[0], -(span[1] - span[0])))

    selected: list[tuple[int, int]] = []
    last_end = -1
    for start, end in matches:
        if start < last_end:
            continue
        selected.append((start, end))
        last_end = end

    parts: list[str] = []
    cursor = 0
    for start, end in selected:
        parts.append(snippet[cursor:start])
        parts.append(f"<mark>{snippet[start:end]}</mark>")
        cursor = end
    parts.append(snippet[cursor:])
    return "".join(parts)


def build_snippet(
    content: str,
    terms: Sequence[str],
    *,
    mode: HighlightMode = "sequential",
    lead: int = SNIPPET_LEAD_CHARS,
    window: int = SNIPPET_WINDOW_CHARS,
) -> str:
    """Build an escaped, highlighted snippet of ``content`` for ``terms``.

    This is the main entry point for snippet generation.

    Args:
        content: Raw page text (markdown is not interpreted).
        terms: Query terms; the first one found anchors the window.
        mode: ``sequential`` or ``single_pass`` highlighting.
        lead: Characters kept before the anchor.
        window: Characters kept after the anchor (or from the start when no term matches).

    Returns:
        HTML fragment safe to inject as trusted markup.
    """

    position = find_first_match(content, terms)
    escaped = escape_html(extract_window(content, position, lead=lead, window=window))
    if mode == "single_pass":
        return highlight_terms_single_pass(escaped, terms)
    if mode == "sequential":
        return highlight_terms_sequential(escaped, terms)
    msg = f"Unknown highlight mode '{mode}'. Available: ['sequential', 'single_pass']"
    raise ValueError(msg)
