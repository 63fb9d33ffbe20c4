"""Centralized configuration for the wiki search service using Pydantic Settings."""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    All environment variables are validated at startup with proper types.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Corpus
    docs_dir: str = Field(default="docs", description="Directory containing the wiki markdown pages")
    site_name: str = Field(default="舵星归途 StarMC", description="Community name reported by /health")
    wiki_base_path: str = Field(default="/wiki", description="Path prefix used to link search results")

    # Search
    default_page_size: int = Field(default=20, ge=1, description="Results per page when the caller omits it")
    max_page_size: int = Field(default=100, ge=1, description="Largest page size accepted from callers")
    highlight_mode: Literal["sequential", "single_pass"] = Field(
        default="sequential",
        description="sequential: wrap term by term; single_pass: wrap non-overlapping spans once",
    )

    # Server settings
    host: str = Field(default="127.0.0.1", description="HTTP server host")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP server port")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON log lines")
    access_log: bool = Field(default=False, description="Log every HTTP request through uvicorn.access")

    @model_validator(mode="after")
    def _check_page_sizes(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"DEFAULT_PAGE_SIZE ({self.default_page_size}) must not exceed MAX_PAGE_SIZE ({self.max_page_size})"
            )
        return self

    def result_url(self, slug: str) -> str:
        """Build the link for a search hit, e.g. ``/wiki/join``."""
        return f"{self.wiki_base_path.rstrip('/')}/{slug}"
