"""Main ASGI application entry point.

Routes:
    GET /search?q=&page=&page_size=  → ranked, highlighted results
    GET /wiki/{slug}                 → raw page (markdown) and metadata
    GET /health                      → index size
    GET /metrics                     → Prometheus exposition

Usage:
    python -m wiki_search.app

    # Or point at another corpus
    DOCS_DIR=/srv/wiki/docs python -m wiki_search.app
"""

from collections.abc import Sequence
import logging

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .config import Settings
from .domain.model import Document
from .observability.logging import configure_logging
from .observability.metrics import HTTP_REQUESTS, get_metrics, get_metrics_content_type
from .observability.tracing import TraceContextMiddleware, init_tracing
from .runtime.health import build_health_endpoint
from .search.search_index import SearchIndex
from .service_layer.search_service import SearchService


logger = logging.getLogger(__name__)


def _parse_int_param(
    request: Request,
    name: str,
    *,
    default: int,
    min_value: int,
    max_value: int | None = None,
) -> tuple[int | None, JSONResponse | None]:
    raw_value = request.query_params.get(name)
    if raw_value is None or raw_value == "":
        return default, None
    try:
        parsed = int(raw_value)
    except ValueError:
        return None, JSONResponse({"success": False, "message": f"Invalid {name}"}, status_code=400)
    if parsed < min_value or (max_value is not None and parsed > max_value):
        return None, JSONResponse({"success": False, "message": f"Invalid {name}"}, status_code=400)
    return parsed, None


def _build_search_endpoint(service: SearchService, settings: Settings):
    async def search_endpoint(request: Request) -> JSONResponse:
        page, error = _parse_int_param(request, "page", default=1, min_value=1)
        if error is None:
            page_size, error = _parse_int_param(
                request,
                "page_size",
                default=settings.default_page_size,
                min_value=1,
                max_value=settings.max_page_size,
            )
        if error is not None:
            HTTP_REQUESTS.labels(route="search", status="400").inc()
            return error

        query = request.query_params.get("q", "")
        result = service.search(query, page, page_size)
        HTTP_REQUESTS.labels(route="search", status="200").inc()
        return JSONResponse(
            {
                "query": query,
                "page": result.page,
                "page_size": result.page_size,
                "total": result.total,
                "results": [
                    {**hit.model_dump(), "url": settings.result_url(hit.slug)} for hit in result.results
                ],
            }
        )

    return search_endpoint


def _build_page_endpoint(service: SearchService):
    async def page_endpoint(request: Request) -> JSONResponse:
        slug = request.path_params["slug"]
        document = service.get_document(slug)
        if document is None:
            HTTP_REQUESTS.labels(route="wiki", status="404").inc()
            return JSONResponse({"success": False, "message": "Page not found"}, status_code=404)
        HTTP_REQUESTS.labels(route="wiki", status="200").inc()
        return JSONResponse(
            {
                "slug": document.slug,
                "title": document.title,
                "content": document.content,
                "metadata": document.metadata.to_dict(),
            }
        )

    return page_endpoint


async def metrics_endpoint(_: Request) -> Response:
    return Response(get_metrics(), media_type=get_metrics_content_type())


def create_app(settings: Settings | None = None, documents: Sequence[Document] | None = None) -> Starlette:
    """Build the Starlette app.

    Args:
        settings: Runtime configuration (default: read from the environment)
        documents: Explicit corpus; when omitted the process-wide index for
            ``settings.docs_dir`` is used

    Returns:
        Starlette application with the index already built
    """
    settings = settings or Settings()
    if documents is None:
        service = SearchService.from_settings(settings)
    else:
        service = SearchService(SearchIndex(documents, highlight_mode=settings.highlight_mode))

    routes = [
        Route("/search", endpoint=_build_search_endpoint(service, settings), methods=["GET"]),
        Route(
            f"{settings.wiki_base_path.rstrip('/')}/{{slug:path}}",
            endpoint=_build_page_endpoint(service),
            methods=["GET"],
        ),
        Route("/health", endpoint=build_health_endpoint(service, settings), methods=["GET"]),
        Route("/metrics", endpoint=metrics_endpoint, methods=["GET"]),
    ]

    app = Starlette(
        debug=settings.log_level.lower() == "debug",
        routes=routes,
        middleware=[Middleware(TraceContextMiddleware)],
    )
    app.state.search_service = service
    app.state.settings = settings

    logger.info("Wiki search initialized with %d documents", service.index.document_count)
    return app


def main() -> None:
    """Main entry point for the wiki search server."""
    import uvicorn

    settings = Settings()
    configure_logging(settings.log_level, settings.log_json, access_log=settings.access_log)
    init_tracing()

    app = create_app(settings)

    logger.info("Starting server on %s:%d", settings.host, settings.port)
    logger.info("Health check: http://%s:%d/health", settings.host, settings.port)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=settings.access_log,
        log_config=None,  # Don't let uvicorn override our logging config
    )


if __name__ == "__main__":
    main()
