"""Completion signals: wake lookup waiters when the worker finishes a key.

Signals are an optimisation over polling, not a source of truth. A waiter
must still read the cache after being woken, and a lost signal only means
the waiter notices the result at its next poll.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Literal, Protocol

from redis.exceptions import RedisError

from .cache_keys import ready_channel
from .errors import CacheUnavailableError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from contextlib import AbstractAsyncContextManager

    import redis.asyncio as redis
    from redis.asyncio.client import PubSub

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompletionSignal:
    """What the worker announces for a cache key.

    ``failed`` is only sent once the job will not be redelivered again.
    """

    status: Literal["stored", "failed"]
    reason: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class CompletionListener(Protocol):
    async def wait(self, timeout: float) -> CompletionSignal | None:
        """Wait up to *timeout* seconds; *None* means nothing arrived."""
        ...


class CompletionSignals(Protocol):
    def listen(self, key: str) -> AbstractAsyncContextManager[CompletionListener]: ...

    async def notify(self, key: str, signal: CompletionSignal) -> None: ...


class _SleepingListener:
    async def wait(self, timeout: float) -> CompletionSignal | None:
        await asyncio.sleep(timeout)
        return None


class PollingSignals:
    """No-op signals: waiters simply sleep one poll interval at a time."""

    @asynccontextmanager
    async def listen(self, key: str) -> AsyncIterator[CompletionListener]:
        yield _SleepingListener()

    async def notify(self, key: str, signal: CompletionSignal) -> None:
        return None


class _RedisListener:
    def __init__(self, pubsub: PubSub) -> None:
        self._pubsub = pubsub

    async def wait(self, timeout: float) -> CompletionSignal | None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while (remaining := deadline - loop.time()) > 0:
            try:
                message = await self._pubsub.get_message(
                    ignore_subscribe_messages=True, timeout=remaining
                )
            except RedisError as exc:
                msg = f"completion channel failed: {exc}"
                raise CacheUnavailableError(msg) from exc
            if message is None:
                continue
            try:
                return CompletionSignal(**json.loads(message["data"]))
            except (TypeError, ValueError):
                logger.warning("Ignoring malformed completion signal: %r", message)
        return None


class RedisSignals:
    """:class:`CompletionSignals` over Redis pub/sub (``ready:<key>``)."""

    def __init__(self, redis_conn: redis.Redis) -> None:
        self._redis = redis_conn

    @asynccontextmanager
    async def listen(self, key: str) -> AsyncIterator[CompletionListener]:
        """Subscribe to *key*'s channel for the duration of the block.

        Enter the block before publishing the job so a fast worker cannot
        announce completion before anyone is listening.
        """
        pubsub = self._redis.pubsub()
        channel = ready_channel(key)
        try:
            await pubsub.subscribe(channel)
        except RedisError as exc:
            await pubsub.aclose()
            msg = f"could not subscribe to {channel}: {exc}"
            raise CacheUnavailableError(msg) from exc
        try:
            yield _RedisListener(pubsub)
        finally:
            try:
                await pubsub.unsubscribe(channel)
            except RedisError:
                logger.debug("Unsubscribe from %s failed", channel, exc_info=True)
            await pubsub.aclose()

    async def notify(self, key: str, signal: CompletionSignal) -> None:
        """Announce *signal*; failures are logged, never raised."""
        try:
            await self._redis.publish(ready_channel(key), json.dumps(asdict(signal)))
        except RedisError as exc:
            logger.warning("Could not announce %s for %s: %s", signal.status, key, exc)
