"""API configuration via environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    database_url: str = "postgresql+asyncpg://localhost:5432/wanderwise"
    redis_url: str = "redis://localhost:6379/0"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Flight lookup wait protocol (seconds)
    flight_poll_interval: float = Field(default=1.0, gt=0)
    flight_max_wait: float = Field(default=60.0, gt=0)
    # Wake waiters through Redis pub/sub; False means plain polling.
    flight_completion_signals: bool = True

    # Cache TTLs in seconds
    article_cache_ttl: int = 3600  # 1 hour
    opinion_cache_ttl: int = 86400  # 1 day

    # Celery
    celery_broker_url: str = "redis://localhost:6379/1"
    flight_queue: str = "flight_search"

    # Providers
    nytimes_api_key: str = ""
    anthropic_api_key: str = ""
    opinion_model: str = "claude-haiku-4-5-20251001"

    model_config = SettingsConfigDict(
        env_prefix="API_", env_file=".env", extra="ignore"
    )


settings = ApiSettings()
