"""Service layer - use-case orchestration around the search engine."""

from .search_service import SearchService


__all__ = ["SearchService"]
