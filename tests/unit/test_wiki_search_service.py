"""Unit tests for the search service layer."""

import pytest

from wiki_search.config import Settings
from wiki_search.observability.metrics import REGISTRY
from wiki_search.search.search_index import SearchIndex, get_search_index
from wiki_search.service_layer import SearchService


pytestmark = pytest.mark.unit


def _outcome_count(outcome: str) -> float:
    return REGISTRY.get_sample_value("wiki_search_requests_total", {"outcome": outcome}) or 0.0


@pytest.fixture
def service(search_index: SearchIndex) -> SearchService:
    return SearchService(search_index)


class TestSearchService:
    def test_search_returns_index_result_unchanged(self, service, search_index):
        assert service.search("红石", 1, 5) == search_index.search("红石", 1, 5)

    @pytest.mark.parametrize(
        ("query", "outcome"),
        [("server", "hit"), ("zzqxj", "miss"), ("  ", "empty"), ("红", "empty"), ("，。", "empty")],
    )
    def test_search_records_outcome(self, service, query, outcome):
        before = _outcome_count(outcome)

        service.search(query)

        assert _outcome_count(outcome) == before + 1

    def test_search_observes_latency(self, service):
        before = REGISTRY.get_sample_value("wiki_search_latency_seconds_count") or 0.0

        service.search("server")

        assert REGISTRY.get_sample_value("wiki_search_latency_seconds_count") == before + 1

    def test_index_size_gauges_are_set(self, service):
        assert REGISTRY.get_sample_value("wiki_index_document_count") == 10
        assert REGISTRY.get_sample_value("wiki_index_term_count") == service.index.vocabulary_size

    def test_get_document(self, service):
        assert service.get_document("join").title == "加入教程"
        assert service.get_document("nope") is None

    def test_health(self, service, search_index):
        assert service.health() == {"documents": 10, "terms": search_index.vocabulary_size}


class TestFromSettings:
    def test_uses_memoized_index(self, write_page, monkeypatch):
        docs_root = write_page("faq.md", "# FAQ\n\nOutdated server?")
        monkeypatch.setenv("DOCS_DIR", str(docs_root))
        settings = Settings()

        first = SearchService.from_settings(settings)
        second = SearchService.from_settings(settings)

        assert first.index is second.index
        assert first.index is get_search_index(str(docs_root), "sequential")
        assert first.search("server").results[0].slug == "faq"
