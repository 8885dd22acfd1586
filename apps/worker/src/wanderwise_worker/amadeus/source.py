"""Amadeus flight source: the worker's external fetcher."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from wanderwise_worker.base import FlightSource
from wanderwise_worker.config import settings

from .client import AmadeusClient
from .response_parser import parse_flight_offers

if TYPE_CHECKING:
    from wanderwise_core.schemas import FlightOffer, SearchRequest

logger = logging.getLogger(__name__)


class AmadeusFlightSource(FlightSource):
    """Search one-way offers via the Amadeus ``Flight Offers Search`` API.

    Requires ``WORKER_AMADEUS_CLIENT_ID`` and ``WORKER_AMADEUS_CLIENT_SECRET``.
    Errors propagate as :class:`FlightFetchError`; retrying is left to the
    job queue.
    """

    def __init__(self, client: AmadeusClient | None = None) -> None:
        self._client = client or AmadeusClient()

    async def find(self, request: SearchRequest) -> list[FlightOffer]:
        start = time.monotonic()
        raw_offers = await self._client.search_flight_offers(
            origin=request.origin_code,
            destination=request.destination_code,
            departure_date=request.departure_date.isoformat(),
            adults=request.passenger_count,
            currency_code=settings.currency,
            max_results=settings.amadeus_max_results,
        )
        offers = parse_flight_offers(raw_offers, default_currency=settings.currency)
        logger.info(
            "Amadeus returned %d offers for %s-%s in %dms",
            len(offers),
            request.origin_code,
            request.destination_code,
            int((time.monotonic() - start) * 1000),
            extra={"request_id": request.request_id},
        )
        return offers

    async def health_check(self) -> bool:
        return await self._client.health_check()

    async def close(self) -> None:
        await self._client.close()
