"""Per-request progress channel over Redis pub/sub.

Delivery is best effort: events are not stored, late subscribers get no
replay, and a failed publish is logged and dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from .cache_keys import progress_channel
from .errors import CacheUnavailableError
from .schemas import ProgressEvent

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import redis.asyncio as redis

logger = logging.getLogger(__name__)


class ProgressChannel:
    """Publish and subscribe to ``progress:<request_id>`` topics."""

    def __init__(self, redis_conn: redis.Redis) -> None:
        self._redis = redis_conn

    async def publish(
        self, request_id: str, message: str, *, terminal: bool = False
    ) -> ProgressEvent:
        event = ProgressEvent(request_id=request_id, message=message, terminal=terminal)
        try:
            await self._redis.publish(
                progress_channel(request_id), event.model_dump_json()
            )
        except RedisError as exc:
            logger.warning("Dropped progress event for %s: %s", request_id, exc)
        return event

    async def subscribe(self, request_id: str) -> AsyncIterator[ProgressEvent]:
        """Yield events for *request_id* in publish order until a terminal one.

        Raises:
            CacheUnavailableError: If Redis fails while subscribing or reading.
        """
        pubsub = self._redis.pubsub()
        channel = progress_channel(request_id)
        try:
            await pubsub.subscribe(channel)
        except RedisError as exc:
            await pubsub.aclose()
            msg = f"could not subscribe to {channel}: {exc}"
            raise CacheUnavailableError(msg) from exc
        try:
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                event = ProgressEvent.model_validate_json(message["data"])
                yield event
                if event.terminal:
                    break
        except RedisError as exc:
            msg = f"progress channel {channel} failed: {exc}"
            raise CacheUnavailableError(msg) from exc
        finally:
            try:
                await pubsub.unsubscribe(channel)
            except RedisError:
                logger.debug("Unsubscribe from %s failed", channel, exc_info=True)
            await pubsub.aclose()
