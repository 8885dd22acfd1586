"""Amadeus Self-Service API client wrapper.

Uses the official ``amadeus`` Python SDK, which handles the OAuth2 token
lifecycle. The SDK is synchronous, so calls run in a thread via
``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from amadeus import Client, ResponseError

from wanderwise_core.errors import FlightFetchError
from wanderwise_worker.config import settings

logger = logging.getLogger(__name__)


class AmadeusClient:
    """Async-friendly wrapper around the Amadeus Python SDK."""

    def __init__(
        self,
        *,
        client_id: str | None = None,
        client_secret: str | None = None,
        hostname: str | None = None,
    ) -> None:
        self._client_id = client_id or settings.amadeus_client_id
        self._client_secret = client_secret or settings.amadeus_client_secret
        self._hostname = hostname or settings.amadeus_hostname
        self._sdk: Client | None = None

    def _ensure_sdk(self) -> Client:
        if self._sdk is None:
            if not self._client_id or not self._client_secret:
                msg = (
                    "WORKER_AMADEUS_CLIENT_ID and WORKER_AMADEUS_CLIENT_SECRET "
                    "must be set in environment or .env"
                )
                raise FlightFetchError(msg)
            self._sdk = Client(
                client_id=self._client_id,
                client_secret=self._client_secret,
                hostname=self._hostname,
            )
            logger.info("Amadeus SDK initialised (hostname=%s)", self._hostname)
        return self._sdk

    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        *,
        adults: int = 1,
        currency_code: str = "USD",
        max_results: int = 20,
    ) -> list[dict[str, Any]]:
        """Search for one-way offers using GET /v2/shopping/flight-offers.

        Raises:
            FlightFetchError: The SDK reported an error or could not connect.
        """
        sdk = self._ensure_sdk()
        params: dict[str, Any] = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "adults": adults,
            "currencyCode": currency_code,
            "max": max_results,
        }

        def _call() -> list[dict[str, Any]]:
            resp = sdk.shopping.flight_offers_search.get(**params)
            return resp.data  # type: ignore[no-any-return]

        try:
            return await asyncio.to_thread(_call)
        except ResponseError as exc:
            logger.error("Amadeus flight search failed: %s", exc)
            msg = f"Amadeus search {origin}-{destination} on {departure_date} failed: {exc}"
            raise FlightFetchError(msg) from exc

    async def health_check(self) -> bool:
        """Verify Amadeus API credentials are valid."""
        try:
            sdk = self._ensure_sdk()
        except FlightFetchError:
            return False

        def _call() -> bool:
            try:
                resp = sdk.reference_data.airlines.get(airlineCodes="BR")
                return bool(resp.data)
            except ResponseError:
                return False

        return await asyncio.to_thread(_call)

    async def close(self) -> None:
        """Drop the SDK instance; it manages its own HTTP lifecycle."""
        self._sdk = None
