from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Generative-language integration (Gemini)
    # IMPORTANT: credentials are never logged; prompts and answers are never logged.
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "gemini_api_key"),
        description="Gemini API key. Takes precedence over GOOGLE_API_KEY when non-empty.",
    )
    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "google_api_key"),
        description="Fallback Gemini API key name.",
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        validation_alias=AliasChoices("GEMINI_MODEL", "gemini_model"),
        description="Gemini model identifier used for answer generation.",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias=AliasChoices("GEMINI_BASE_URL", "gemini_base_url"),
        description="Base URL for the Gemini API (override for proxies/emulators).",
    )
    gemini_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("GEMINI_TIMEOUT_SECONDS", "gemini_timeout_seconds"),
        description="Timeout for Gemini API requests (seconds).",
    )

    # Query log store (Supabase / PostgREST). Logging is skipped unless both are set.
    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_URL", "supabase_url"),
        description="Supabase project URL used for query logging.",
    )
    supabase_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "SUPABASE_SERVICE_ROLE_KEY",
            "SUPABASE_KEY",
            "supabase_key",
        ),
        description="Supabase key sent as both `apikey` and bearer token.",
    )
    query_log_table: str = Field(
        default="ai_queries",
        validation_alias=AliasChoices("QUERY_LOG_TABLE", "query_log_table"),
        description="Table receiving query/response records.",
    )
    query_log_source: str = Field(
        default="profile-qa",
        validation_alias=AliasChoices("QUERY_LOG_SOURCE", "query_log_source"),
        description="Value written to the `source` column of each record.",
    )
    query_log_timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        validation_alias=AliasChoices("QUERY_LOG_TIMEOUT_SECONDS", "query_log_timeout_seconds"),
        description="Timeout for query log writes (seconds).",
    )

    @property
    def generation_api_key(self) -> str | None:
        # First non-empty key wins; an empty GEMINI_API_KEY falls through to GOOGLE_API_KEY.
        return self.gemini_api_key or self.google_api_key or None

    @property
    def query_log_enabled(self) -> bool:
        return bool(self.supabase_url) and bool(self.supabase_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
