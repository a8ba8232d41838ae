"""
wikimasters.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, persistence, cache and email layers.
- Hide secrets from repr/logging (JWT secret, provider API keys).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WIKI_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and dev tokens.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "wikimasters"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth (tokens are issued by the identity provider; dev tokens only outside prod)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "wikimasters-auth"
    jwt_audience: str = "wikimasters-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./wikimasters.db"

    # Cache
    redis_url: str = "redis://localhost:6379/0"
    articles_cache_key: str = "articles:all"
    articles_cache_ttl_seconds: int = 60

    # Pageviews
    pageview_milestones: list[int] = Field(default_factory=lambda: [10, 50, 100, 1000, 10000])
    notification_drain_timeout_seconds: float = 5.0

    # Email (Resend HTTP API)
    resend_api_key: str | None = Field(default=None, repr=False)
    resend_base_url: str = "https://api.resend.com"
    email_from: str = "Wikimasters <onboarding@resend.dev>"
    public_base_url: str = "http://localhost:3000"

    # Summaries (OpenAI-compatible chat completions API)
    summary_api_key: str | None = Field(default=None, repr=False)
    summary_base_url: str = "https://api.openai.com/v1"
    summary_model: str = "gpt-5-nano"

    http_timeout_seconds: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()
