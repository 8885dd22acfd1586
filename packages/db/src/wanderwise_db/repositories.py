"""Query helpers over the flights and airports tables."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from .models import Airport, FlightRecord

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from wanderwise_core.schemas import FlightOffer

logger = logging.getLogger(__name__)


class FlightRepository:
    """Append and aggregate historical flight prices."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_many(self, offers: list[FlightOffer]) -> int:
        """Insert one row per offer. Returns the number of rows added."""
        rows = [
            FlightRecord(
                offer_id=o.id,
                origin=o.origin,
                destination=o.destination,
                departure_date=o.departure_date,
                price=o.price,
                currency=o.currency,
                airline=o.airline,
                duration_minutes=o.duration_minutes,
                departure_time=o.departure_time,
                arrival_time=o.arrival_time,
            )
            for o in offers
        ]
        if rows:
            self._session.add_all(rows)
            await self._session.flush()
            logger.debug("Stored %d flight records", len(rows))
        return len(rows)

    async def average_price(self, origin: str, destination: str) -> float | None:
        """Mean price on the route, or *None* without history."""
        stmt = select(func.avg(FlightRecord.price)).where(
            FlightRecord.origin == origin,
            FlightRecord.destination == destination,
        )
        value = (await self._session.execute(stmt)).scalar_one_or_none()
        return float(value) if value is not None else None

    async def lowest_price(self, origin: str, destination: str) -> float | None:
        """Cheapest price ever stored on the route, or *None*."""
        stmt = select(func.min(FlightRecord.price)).where(
            FlightRecord.origin == origin,
            FlightRecord.destination == destination,
        )
        value = (await self._session.execute(stmt)).scalar_one_or_none()
        return float(value) if value is not None else None


class AirportRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_country(self, code: str) -> str | None:
        stmt = select(Airport.country).where(Airport.code == code.upper())
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def upsert_many(self, airports: list[dict[str, str]]) -> int:
        """Insert airports whose code is not present yet."""
        existing = set(
            (await self._session.execute(select(Airport.code))).scalars().all()
        )
        new = [Airport(**a) for a in airports if a["code"] not in existing]
        if new:
            self._session.add_all(new)
            await self._session.flush()
        return len(new)
