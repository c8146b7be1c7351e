"""Centralized configuration for site-search using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every variable carries the ``SITE_SEARCH_`` prefix, e.g.
    ``SITE_SEARCH_CORPUS_PATH=public/search.json``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SITE_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Corpus
    corpus_path: Path | None = Field(default=None, description="Local search.json file loaded at startup")

    # Excerpts
    excerpt_max_length: int = Field(default=150, ge=10, description="Maximum visible characters in an excerpt")
    excerpt_context_before: int = Field(default=50, ge=0, description="Characters kept before the first match")
    excerpt_context_after: int = Field(default=100, ge=0, description="Characters kept after the first match")

    # Fallback scorer
    fallback_result_limit: int = Field(default=10, ge=1, description="Maximum results returned by substring fallback")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Tracing
    service_name: str = Field(default="site-search", description="Service name reported on traces")

    @model_validator(mode="after")
    def _check_excerpt_window(self) -> "Settings":
        if self.excerpt_context_before >= self.excerpt_max_length:
            raise ValueError(
                "SITE_SEARCH_EXCERPT_CONTEXT_BEFORE must be smaller than SITE_SEARCH_EXCERPT_MAX_LENGTH "
                "so the match itself fits inside the excerpt window."
            )
        return self

    def has_corpus_path(self) -> bool:
        """Check whether a corpus file should be loaded at startup."""
        return self.corpus_path is not None
