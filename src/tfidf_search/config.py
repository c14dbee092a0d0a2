"""Centralized configuration for tfidf-search using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``TFIDF_SEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TFIDF_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    # Indexing and ranking
    analyzer: str = Field(default="simple", description="Analyzer used for documents and queries")
    dedupe_query_terms: bool = Field(
        default=False,
        description="Score each distinct query term once instead of once per occurrence",
    )
    default_limit: int | None = Field(default=None, ge=1, description="Maximum results per query (unlimited if unset)")

    # Observability
    metrics_enabled: bool = Field(default=True, description="Record Prometheus metrics for index operations")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return normalized

    @field_validator("analyzer")
    @classmethod
    def _validate_analyzer(cls, value: str) -> str:
        from tfidf_search.search.analyzers import get_analyzer

        get_analyzer(value)
        return value.lower()
