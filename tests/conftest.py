"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


# Complete test environment that overrides every config value
TEST_ENV = {
    "DOCS_DIR": str(REPO_ROOT / "tests" / "fixtures" / "missing-docs"),
    "SITE_NAME": "Test Wiki",
    "WIKI_BASE_PATH": "/wiki",
    "DEFAULT_PAGE_SIZE": "20",
    "MAX_PAGE_SIZE": "100",
    "HIGHLIGHT_MODE": "sequential",
    "HOST": "127.0.0.1",
    "PORT": "8080",
    "LOG_LEVEL": "info",
    "LOG_JSON": "true",
    "ACCESS_LOG": "false",
}


# Set environment variables immediately when conftest.py is loaded
for key, value in TEST_ENV.items():
    os.environ[key] = value

from tests.fixtures.wiki_corpus import WIKI_PAGES
from wiki_search.domain.model import Document
from wiki_search.search.search_index import SearchIndex, get_search_index


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset environment variables to test defaults before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    # Keep a developer's .env from leaking into Settings()
    monkeypatch.chdir(REPO_ROOT / "tests")


@pytest.fixture(autouse=True)
def clear_index_cache():
    """Drop memoized process-wide indexes between tests."""
    get_search_index.cache_clear()
    yield
    get_search_index.cache_clear()


@pytest.fixture
def wiki_documents() -> list[Document]:
    return list(WIKI_PAGES)


@pytest.fixture
def search_index(wiki_documents) -> SearchIndex:
    return SearchIndex(wiki_documents)


@pytest.fixture
def write_page(tmp_path):
    """Write a markdown page below tmp_path/docs and return the docs root."""
    docs_root = tmp_path / "docs"

    def _write(relative: str, text: str) -> Path:
        path = docs_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return docs_root

    return _write
