"""Trip report assembly.

Flights are mandatory and come from the lookup the router already ran.
Everything else (history, country, news, opinion) is best effort: a
failing enrichment is logged and left empty in the report.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from wanderwise_core.errors import ProviderError
from wanderwise_core.log_config import bind_request
from wanderwise_db.repositories import AirportRepository, FlightRepository

from ..schemas.trips import HistoricalStats, TripReport
from .analysis_service import AnalysisService

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from wanderwise_core.outcomes import Success
    from wanderwise_core.schemas import SearchRequest

    from ..schemas.trips import Article
    from .article_service import ArticleService
    from .opinion_service import OpinionService

logger = logging.getLogger(__name__)


class TripService:
    """Builds a :class:`TripReport` around a successful flight lookup."""

    def __init__(
        self,
        db: AsyncSession,
        articles: ArticleService,
        opinions: OpinionService,
    ) -> None:
        self._db = db
        self._articles = articles
        self._opinions = opinions

    async def build_report(self, request: SearchRequest, result: Success) -> TripReport:
        log = bind_request(logger, request.request_id)
        origin = request.origin_code
        destination = request.destination_code

        # Cached results were already recorded when first fetched.
        if not result.cached:
            try:
                await FlightRepository(self._db).create_many(result.flights)
            except SQLAlchemyError as exc:
                log.warning("Could not record flight history: %s", exc)
                await self._db.rollback()

        try:
            history = await AnalysisService(self._db).route_stats(origin, destination)
        except SQLAlchemyError as exc:
            log.warning("Price history unavailable: %s", exc)
            history = HistoricalStats()

        try:
            country = await AirportRepository(self._db).find_country(destination)
        except SQLAlchemyError as exc:
            log.warning("Country lookup failed for %s: %s", destination, exc)
            country = None

        articles: list[Article] | None
        try:
            articles = await self._articles.recent_articles(country or destination)
        except ProviderError as exc:
            log.warning("Articles unavailable: %s", exc)
            articles = None

        opinion: str | None
        try:
            opinion = await self._opinions.trip_opinion(
                origin,
                destination,
                request.departure_date.month,
                history.average_price,
                [a.title for a in articles or []],
            )
        except ProviderError as exc:
            log.warning("Opinion unavailable: %s", exc)
            opinion = None

        return TripReport(
            request_id=request.request_id,
            origin=origin,
            destination=destination,
            departure_date=request.departure_date.isoformat(),
            flights=result.flights,
            cached=result.cached,
            country=country,
            history=history,
            articles=articles,
            opinion=opinion,
        )
