"""Tests for app.py - Main ASGI application."""

from unittest.mock import patch

import pytest
from starlette.applications import Starlette
from starlette.testclient import TestClient

from wiki_search.app import create_app, main
from wiki_search.config import Settings


pytestmark = pytest.mark.unit


@pytest.fixture
def client(wiki_documents):
    with TestClient(create_app(documents=wiki_documents)) as test_client:
        yield test_client


class TestCreateApp:
    """Test the create_app function."""

    def test_create_app_with_explicit_documents(self, wiki_documents):
        app = create_app(documents=wiki_documents)

        assert isinstance(app, Starlette)
        assert app.state.search_service.index.document_count == 10
        assert isinstance(app.state.settings, Settings)

    def test_create_app_loads_docs_dir_from_settings(self, write_page, monkeypatch):
        docs_root = write_page("join.md", "# 加入教程\n\n如何加入服务器")
        monkeypatch.setenv("DOCS_DIR", str(docs_root))

        app = create_app()

        assert app.state.search_service.index.document_count == 1

    def test_missing_docs_dir_serves_empty_corpus(self):
        with TestClient(create_app()) as client:
            response = client.get("/search", params={"q": "server"})

        assert response.status_code == 200
        assert response.json()["total"] == 0


class TestSearchEndpoint:
    def test_search_returns_ranked_results_with_links(self, client):
        response = client.get("/search", params={"q": "加入", "page_size": 5})

        assert response.status_code == 200
        body = response.json()
        assert body["query"] == "加入"
        assert body["page"] == 1
        assert body["page_size"] == 5
        assert body["total"] >= 1
        join = next(hit for hit in body["results"] if hit["slug"] == "join")
        assert join["url"] == "/wiki/join"
        assert "<mark>加入</mark>" in join["snippet"]
        assert set(join) == {"slug", "title", "score", "snippet", "url"}

    def test_search_uses_default_page_size(self, client):
        body = client.get("/search", params={"q": "服务器"}).json()

        assert body["page_size"] == 20
        assert len(body["results"]) == body["total"]

    def test_empty_query_returns_no_results(self, client):
        body = client.get("/search").json()

        assert body["total"] == 0
        assert body["results"] == []

    def test_pagination(self, client):
        first = client.get("/search", params={"q": "server", "page": 1, "page_size": 2}).json()
        second = client.get("/search", params={"q": "server", "page": 2, "page_size": 2}).json()

        assert len(first["results"]) == 2
        assert first["results"][0]["slug"] != second["results"][0]["slug"]
        assert first["total"] == second["total"]

    @pytest.mark.parametrize(
        ("params", "message"),
        [
            ({"q": "x", "page": "0"}, "Invalid page"),
            ({"q": "x", "page": "abc"}, "Invalid page"),
            ({"q": "x", "page_size": "0"}, "Invalid page_size"),
            ({"q": "x", "page_size": "101"}, "Invalid page_size"),
        ],
    )
    def test_invalid_pagination_is_rejected(self, client, params, message):
        response = client.get("/search", params=params)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": message}


class TestPageEndpoint:
    def test_page_returns_content_and_metadata(self, client):
        response = client.get("/wiki/redstone")

        assert response.status_code == 200
        body = response.json()
        assert body["slug"] == "redstone"
        assert body["title"] == "红石限制说明"
        assert body["content"].startswith("# 红石与生电限制")
        assert body["metadata"]["category"] == "进阶指南"
        assert body["metadata"]["last_updated"] == "2025-12-08"

    def test_unknown_page_is_404(self, client):
        response = client.get("/wiki/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Page not found"}

    def test_nested_slugs_and_custom_base_path(self, write_page, monkeypatch):
        docs_root = write_page("guides/join.md", "# Join\n\nConnect to mc.star-mc.top")
        monkeypatch.setenv("DOCS_DIR", str(docs_root))
        monkeypatch.setenv("WIKI_BASE_PATH", "/docs/")

        with TestClient(create_app()) as client:
            page = client.get("/docs/guides/join")
            search = client.get("/search", params={"q": "connect"}).json()

        assert page.status_code == 200
        assert page.json()["title"] == "Join"
        assert search["results"][0]["url"] == "/docs/guides/join"


class TestOperationalEndpoints:
    def test_health_reports_index_size(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["site_name"] == "Test Wiki"
        assert body["documents"] == 10
        assert body["terms"] > 0

    def test_metrics_exposes_search_counters(self, client):
        client.get("/search", params={"q": "server"})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "wiki_search_requests_total" in response.text
        assert 'wiki_http_requests_total{route="search",status="200"}' in response.text
        assert "wiki_index_document_count" in response.text

    def test_trace_id_header_is_echoed(self, client):
        response = client.get("/health", headers={"x-trace-id": "abc123"})

        assert response.headers["x-trace-id"] == "abc123"

    def test_trace_id_is_generated_when_absent(self, client):
        response = client.get("/health")

        assert len(response.headers["x-trace-id"]) == 32


class TestMain:
    def test_main_runs_uvicorn_with_settings(self):
        with (
            patch("uvicorn.run") as mock_run,
            patch("wiki_search.app.configure_logging") as mock_logging,
            patch("wiki_search.app.init_tracing") as mock_tracing,
        ):
            main()

        mock_logging.assert_called_once_with("info", True, access_log=False)
        mock_tracing.assert_called_once()
        _, kwargs = mock_run.call_args
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8080
        assert kwargs["log_config"] is None
        assert kwargs["access_log"] is False

    def test_main_enables_access_log_from_settings(self, monkeypatch):
        monkeypatch.setenv("ACCESS_LOG", "true")

        with (
            patch("uvicorn.run") as mock_run,
            patch("wiki_search.app.configure_logging") as mock_logging,
            patch("wiki_search.app.init_tracing"),
        ):
            main()

        assert mock_logging.call_args.kwargs["access_log"] is True
        assert mock_run.call_args.kwargs["access_log"] is True
