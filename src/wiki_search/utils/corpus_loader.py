"""Load the wiki corpus from a directory of markdown pages.

Every ``*.md`` file below the docs root becomes one Document. The slug is the
page's path relative to the root without the ``.md`` suffix, so
``docs/guides/join.md`` is served at ``/wiki/guides/join``. Files are visited
in sorted path order so document ids are stable across restarts.
"""

from __future__ import annotations

from datetime import date, datetime
import logging
from pathlib import Path
from typing import Any

from wiki_search.domain.model import Document, PageMetadata
from wiki_search.utils.front_matter import parse_front_matter


logger = logging.getLogger(__name__)

_TITLE_PREFIX = "# "


def slug_for_path(path: Path, docs_root: Path) -> str:
    """Return the POSIX relative path of ``path`` without its ``.md`` suffix."""

    return path.relative_to(docs_root).with_suffix("").as_posix()


def parse_title(content: str, fallback: str) -> str:
    """Return the first level-one heading, or ``fallback`` if there is none."""

    for line in content.split("\n"):
        stripped = line.strip()
        if stripped.startswith(_TITLE_PREFIX):
            return stripped[1:].strip()
    return fallback


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _as_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(tag.strip() for tag in value.split(",") if tag.strip())
    if isinstance(value, (list, tuple)):
        return tuple(str(tag) for tag in value)
    return (str(value),)


def build_document(raw: str, slug: str) -> Document:
    """Create a Document from raw page text (front matter optional)."""

    front_matter, body = parse_front_matter(raw)
    title = _as_text(front_matter.get("title")) or parse_title(body, slug)
    metadata = PageMetadata(
        category=_as_text(front_matter.get("category")),
        last_updated=_as_text(front_matter.get("last_updated")),
        tags=_as_tags(front_matter.get("tags")),
    )
    return Document(slug=slug, title=title, content=body, metadata=metadata)


def load_documents(docs_dir: Path | str) -> list[Document]:
    """Load every markdown page below ``docs_dir`` in sorted path order.

    A missing directory yields an empty corpus rather than an error so the
    service can still start and answer queries with no results.
    """

    docs_root = Path(docs_dir)
    if not docs_root.is_dir():
        logger.warning("Docs directory %s does not exist; serving an empty corpus", docs_root)
        return []

    paths = sorted(path for path in docs_root.rglob("*.md") if path.is_file())
    documents = [
        build_document(path.read_text(encoding="utf-8-sig"), slug_for_path(path, docs_root)) for path in paths
    ]
    logger.info("Loaded %d wiki pages from %s", len(documents), docs_root)
    return documents
