"""FastAPI dependency injection providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request
from fastapi.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from wanderwise_api.services.article_service import ArticleService  # noqa: TC001
from wanderwise_api.services.opinion_service import OpinionService  # noqa: TC001
from wanderwise_api.services.trip_service import TripService
from wanderwise_db.database import get_db as _db_dependency

if TYPE_CHECKING:
    from wanderwise_api.services.flight_lookup import FlightLookupService
    from wanderwise_core.progress import ProgressChannel

# Re-export the DB dependency unchanged.
get_db = _db_dependency


def get_flight_lookup(request: Request) -> FlightLookupService:
    """The process-wide lookup service (it owns the in-flight registry)."""
    return request.app.state.flight_lookup


def get_article_service(request: Request) -> ArticleService:
    return request.app.state.article_service


def get_opinion_service(request: Request) -> OpinionService:
    return request.app.state.opinion_service


def get_progress_channel(conn: HTTPConnection) -> ProgressChannel:
    return conn.app.state.progress_channel


def get_trip_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    articles: Annotated[ArticleService, Depends(get_article_service)],
    opinions: Annotated[OpinionService, Depends(get_opinion_service)],
) -> TripService:
    return TripService(db, articles, opinions)
