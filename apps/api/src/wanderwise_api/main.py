"""FastAPI application factory."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from wanderwise_api.config import settings

# Propagate DB URL so wanderwise_db.database picks it up via os.getenv.
os.environ.setdefault("DATABASE_URL", settings.database_url)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wanderwise_api.cache.redis_client import close_redis, init_redis
from wanderwise_api.clients.nytimes import NYTimesClient
from wanderwise_api.queue.dispatcher import CeleryJobQueue
from wanderwise_api.routers import flights, progress, trips
from wanderwise_api.schemas.common import StatusResponse
from wanderwise_api.services.article_service import ArticleService
from wanderwise_api.services.flight_lookup import FlightLookupService
from wanderwise_api.services.opinion_service import OpinionService
from wanderwise_core.cache import RedisFlightCache
from wanderwise_core.log_config import configure_logging
from wanderwise_core.progress import ProgressChannel
from wanderwise_core.signals import PollingSignals, RedisSignals

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage startup / shutdown resources."""
    configure_logging(settings.log_level)
    redis_conn = await init_redis(settings.redis_url)

    signals = (
        RedisSignals(redis_conn)
        if settings.flight_completion_signals
        else PollingSignals()
    )
    app.state.flight_lookup = FlightLookupService(
        cache=RedisFlightCache(redis_conn),
        queue=CeleryJobQueue(settings.celery_broker_url, settings.flight_queue),
        signals=signals,
        poll_interval=settings.flight_poll_interval,
        max_wait=settings.flight_max_wait,
    )
    app.state.progress_channel = ProgressChannel(redis_conn)

    nytimes = NYTimesClient(api_key=settings.nytimes_api_key)
    app.state.article_service = ArticleService(nytimes, settings.article_cache_ttl)
    app.state.opinion_service = OpinionService(
        api_key=settings.anthropic_api_key,
        model=settings.opinion_model,
        cache_ttl=settings.opinion_cache_ttl,
    )
    yield
    await nytimes.close()
    await app.state.opinion_service.close()
    await close_redis()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(
        title="WanderWise API",
        version="0.1.0",
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_model=StatusResponse, tags=["status"])
    async def root() -> StatusResponse:
        return StatusResponse(status="ok", message="WanderWise API v1 at /api/v1/")

    # Routers
    _prefix = "/api/v1"
    app.include_router(flights.router, prefix=_prefix)
    app.include_router(trips.router, prefix=_prefix)
    app.include_router(progress.router, prefix=_prefix)

    return app


app = create_app()
