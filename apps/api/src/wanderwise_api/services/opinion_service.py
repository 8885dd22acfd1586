"""Cached wrapper around the Claude travel opinion."""

from __future__ import annotations

import logging

import anthropic

from wanderwise_core.cache_keys import opinion_key
from wanderwise_core.errors import ProviderError
from wanderwise_ml import get_travel_opinion

from ..cache.redis_client import cache_get, cache_set

logger = logging.getLogger(__name__)


class OpinionService:
    """Opinions for the app's lifetime, all sent through one API client."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        cache_ttl: int,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._cache_ttl = cache_ttl
        if client is None and api_key:
            client = anthropic.AsyncAnthropic(api_key=api_key)
        self._client = client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def trip_opinion(
        self,
        origin: str,
        destination: str,
        month: int,
        average_price: float | None,
        headlines: list[str],
    ) -> str:
        """Opinion for one route and month, reused for a day.

        Raises:
            ProviderError: If the model is not configured or the call fails.
        """
        key = opinion_key(origin, destination, month)
        cached = await cache_get(key)
        if cached is not None:
            return str(cached)

        if self._client is None:
            msg = "Anthropic API key is not configured"
            raise ProviderError(msg)

        text = await get_travel_opinion(
            origin,
            destination,
            month,
            average_price,
            headlines,
            api_key=self._api_key,
            model=self._model,
            client=self._client,
        )
        await cache_set(key, text, self._cache_ttl)
        logger.info("Generated opinion for %s-%s in month %d", origin, destination, month)
        return text
