"""Worker configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkerSettings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WORKER_", env_file=".env", extra="ignore"
    )

    # Redis (shared flight cache, progress + completion channels)
    redis_url: str = "redis://localhost:6379/0"

    # Celery
    celery_broker_url: str = "redis://localhost:6379/1"
    celery_result_backend: str = "redis://localhost:6379/2"
    flight_queue: str = "flight_search"

    # Lifetime of a cached flight search result, in seconds. This is the
    # only place the flight result TTL is defined.
    flight_cache_ttl: int = 3600

    # Queue redelivery policy for failed jobs
    job_max_retries: int = 3
    job_retry_backoff_max: int = 60

    # Amadeus Self-Service API
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_hostname: str = "test"  # "test" or "production"
    amadeus_max_results: int = 20
    currency: str = "USD"

    log_level: str = "INFO"


settings = WorkerSettings()
