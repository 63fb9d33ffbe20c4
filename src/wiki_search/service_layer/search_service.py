"""Search service orchestration layer.

Wraps the pure SearchIndex with the concerns the engine itself stays free
of: tracing spans, Prometheus metrics and request logging. The HTTP app and
the CLI both talk to this service, never to the index directly.
"""

import logging

from wiki_search.config import Settings
from wiki_search.domain.model import Document
from wiki_search.domain.search import SearchPage
from wiki_search.observability.metrics import (
    INDEX_DOC_COUNT,
    INDEX_TERM_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    track_latency,
)
from wiki_search.observability.tracing import create_span
from wiki_search.search.search_index import SearchIndex, get_search_index


logger = logging.getLogger(__name__)


class SearchService:
    """High-level search API for the HTTP and CLI surfaces."""

    def __init__(self, index: SearchIndex):
        self.index = index
        INDEX_DOC_COUNT.set(index.document_count)
        INDEX_TERM_COUNT.set(index.vocabulary_size)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchService":
        """Use the process-wide index for the configured docs directory."""
        return cls(get_search_index(settings.docs_dir, settings.highlight_mode))

    def search(self, query: str, page: int = 1, page_size: int = 20) -> SearchPage:
        """Run a query and record latency and outcome.

        Args:
            query: Raw user query
            page: 1-based page number
            page_size: Results per page

        Returns:
            SearchPage from the underlying index, unchanged
        """
        with (
            create_span("wiki.search", attributes={"search.page": page, "search.page_size": page_size}) as span,
            track_latency(SEARCH_LATENCY),
        ):
            result = self.index.search(query, page, page_size)
            span.set_attribute("search.total", result.total)

        if result.total:
            outcome = "hit"
        elif self.index.tokenize_query(query):
            outcome = "miss"
        else:
            # No searchable terms, e.g. a single CJK character
            outcome = "empty"
        SEARCH_REQUESTS.labels(outcome=outcome).inc()

        logger.debug("Search completed: %d of %d results (page %d)", len(result.results), result.total, page)
        return result

    def get_document(self, slug: str) -> Document | None:
        return self.index.get_document(slug)

    def health(self) -> dict[str, int]:
        return {
            "documents": self.index.document_count,
            "terms": self.index.vocabulary_size,
        }
