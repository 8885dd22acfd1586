"""Celery tasks for flight searches."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import redis.asyncio as aioredis

from wanderwise_core.cache import RedisFlightCache
from wanderwise_core.errors import CacheUnavailableError, FlightFetchError
from wanderwise_core.progress import ProgressChannel
from wanderwise_core.schemas import SearchRequest
from wanderwise_core.signals import RedisSignals

from .celery_app import app
from .config import settings
from .worker import FlightSearchWorker

if TYPE_CHECKING:
    from wanderwise_core.outcomes import JobOutcome

    from .base import FlightSource

logger = logging.getLogger(__name__)

# Errors the queue redelivers; anything else fails the job immediately.
RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    FlightFetchError,
    CacheUnavailableError,
)


def build_worker(redis_conn: aioredis.Redis, source: FlightSource) -> FlightSearchWorker:
    """Wire a worker to the shared Redis cache and channels."""
    return FlightSearchWorker(
        cache=RedisFlightCache(redis_conn),
        source=source,
        progress=ProgressChannel(redis_conn),
        signals=RedisSignals(redis_conn),
        cache_ttl=settings.flight_cache_ttl,
        retryable=RETRYABLE_ERRORS,
    )


async def run_job(
    request: SearchRequest,
    *,
    final_attempt: bool = True,
    source: FlightSource | None = None,
) -> JobOutcome:
    """Process one search request against the configured Redis."""
    if source is None:
        from .amadeus import AmadeusFlightSource

        source = AmadeusFlightSource()
    redis_conn = aioredis.from_url(settings.redis_url, decode_responses=True)
    try:
        worker = build_worker(redis_conn, source)
        return await worker.process(request, final_attempt=final_attempt)
    finally:
        await source.close()
        await redis_conn.aclose()


@app.task(
    name="wanderwise_worker.tasks.find_flights",
    bind=True,
    autoretry_for=RETRYABLE_ERRORS,
    max_retries=settings.job_max_retries,
    retry_backoff=True,
    retry_backoff_max=settings.job_retry_backoff_max,
    retry_jitter=True,
)
def find_flights(self, job: dict[str, Any]) -> dict[str, Any]:  # type: ignore[override]
    """Fetch flights for a queued search job and cache them."""
    request = SearchRequest.from_job(job)
    final_attempt = self.request.retries >= self.max_retries
    logger.info(
        "Received job (attempt %d/%d)",
        self.request.retries + 1,
        self.max_retries + 1,
        extra={"request_id": request.request_id},
    )
    outcome = asyncio.run(run_job(request, final_attempt=final_attempt))
    return {"outcome": type(outcome).__name__, "key": outcome.key}
