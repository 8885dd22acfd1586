"""Historical price analysis for a route."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wanderwise_db.repositories import FlightRepository

from ..schemas.trips import HistoricalStats

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class AnalysisService:
    """Aggregates stored flight prices."""

    def __init__(self, db: AsyncSession) -> None:
        self._flights = FlightRepository(db)

    async def route_stats(self, origin: str, destination: str) -> HistoricalStats:
        average = await self._flights.average_price(origin, destination)
        lowest = await self._flights.lowest_price(origin, destination)
        return HistoricalStats(
            average_price=round(average, 2) if average is not None else None,
            lowest_price=lowest,
        )
