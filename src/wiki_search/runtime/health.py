"""Health endpoint factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse


if TYPE_CHECKING:
    from starlette.requests import Request

    from wiki_search.config import Settings
    from wiki_search.service_layer.search_service import SearchService


def build_health_endpoint(service: SearchService, settings: Settings):
    """Return a coroutine function reporting index size for the configured site."""

    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "healthy",
                "site_name": settings.site_name,
                **service.health(),
            }
        )

    return health_check
