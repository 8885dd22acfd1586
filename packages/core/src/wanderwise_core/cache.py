"""Shared flight-result cache on top of Redis.

This is the only state the API and the worker share: the API reads it,
only the worker writes it. Every operation is a single atomic command on
one key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from redis.exceptions import RedisError

from .errors import CacheUnavailableError
from .schemas.flight import dump_offers, load_offers

if TYPE_CHECKING:
    import redis.asyncio as redis

    from .schemas import FlightOffer

logger = logging.getLogger(__name__)


class FlightCache(Protocol):
    """Key/value store of flight offers with per-entry expiry."""

    async def get(self, key: str) -> list[FlightOffer] | None: ...

    async def set(self, key: str, offers: list[FlightOffer], ttl: int) -> None: ...

    async def exists(self, key: str) -> bool: ...


class RedisFlightCache:
    """:class:`FlightCache` backed by plain Redis strings with ``EX``."""

    def __init__(self, redis_conn: redis.Redis) -> None:
        self._redis = redis_conn

    async def get(self, key: str) -> list[FlightOffer] | None:
        """Return the cached offers, or *None* when the key is absent."""
        try:
            raw = await self._redis.get(key)
        except RedisError as exc:
            msg = f"cache read failed for {key}: {exc}"
            raise CacheUnavailableError(msg) from exc
        if raw is None:
            return None
        return load_offers(raw)

    async def set(self, key: str, offers: list[FlightOffer], ttl: int) -> None:
        """Write (or overwrite) *key*; Redis expires it after *ttl* seconds."""
        if ttl <= 0:
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        try:
            await self._redis.set(key, dump_offers(offers), ex=ttl)
        except RedisError as exc:
            msg = f"cache write failed for {key}: {exc}"
            raise CacheUnavailableError(msg) from exc
        logger.debug("Cached %d offers under %s (ttl=%ds)", len(offers), key, ttl)

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self._redis.exists(key))
        except RedisError as exc:
            msg = f"cache lookup failed for {key}: {exc}"
            raise CacheUnavailableError(msg) from exc
