"""Cache-aside flight lookup.

A lookup returns cached flights immediately, or publishes a search job
and waits, up to a deadline, for a worker to fill the cache. Waiting is a
loop of "check the cache, then wait for a completion signal for at most one
poll interval". A signal only shortens the wait; the cache stays the single
source of truth, so with no signals at all this is plain interval polling.

Concurrent lookups for the same fingerprint in this process share one
publish-and-wait task, so only the first of them publishes a job.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from wanderwise_core.cache_keys import flight_search_key
from wanderwise_core.errors import CacheUnavailableError
from wanderwise_core.log_config import bind_request
from wanderwise_core.outcomes import (
    FetchFailure,
    PublishFailure,
    StoreFailure,
    Success,
    Timeout,
)

if TYPE_CHECKING:
    from wanderwise_core.cache import FlightCache
    from wanderwise_core.log_config import RequestLoggerAdapter
    from wanderwise_core.outcomes import LookupOutcome
    from wanderwise_core.schemas import SearchRequest
    from wanderwise_core.signals import CompletionListener, CompletionSignals

    from ..queue.dispatcher import JobQueue

logger = logging.getLogger(__name__)


class FlightLookupService:
    """Resolve a :class:`SearchRequest` to flights through the shared cache.

    One instance is shared by all requests of an API process; it holds the
    in-flight registry.
    """

    def __init__(
        self,
        *,
        cache: FlightCache,
        queue: JobQueue,
        signals: CompletionSignals,
        poll_interval: float = 1.0,
        max_wait: float = 60.0,
        log: logging.Logger | None = None,
    ) -> None:
        if poll_interval <= 0 or max_wait <= 0:
            msg = "poll_interval and max_wait must be positive"
            raise ValueError(msg)
        self._cache = cache
        self._queue = queue
        self._signals = signals
        self._poll_interval = poll_interval
        self._max_wait = max_wait
        self._log = log or logger
        self._inflight: dict[str, asyncio.Task[LookupOutcome]] = {}

    @property
    def inflight_keys(self) -> list[str]:
        return list(self._inflight)

    async def find_flights(self, request: SearchRequest) -> LookupOutcome:
        """Return cached flights, or publish a job and wait for them."""
        key = flight_search_key(request)
        log = bind_request(self._log, request.request_id)

        try:
            cached = await self._cache.get(key)
        except CacheUnavailableError as exc:
            log.error("Flight cache unavailable: %s", exc)
            return StoreFailure(str(exc))
        if cached is not None:
            log.info("Cache hit for %s (%d flights)", key, len(cached))
            return Success(cached, cached=True)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._publish_and_wait(key, request, log))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        else:
            log.info("Joining in-flight lookup for %s", key)

        # A cancelled caller must not cancel the wait other callers share.
        outcome = await asyncio.shield(task)
        log.info("Lookup for %s finished: %s", key, type(outcome).__name__)
        return outcome

    def _forget(self, key: str, task: asyncio.Task[LookupOutcome]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _publish_and_wait(
        self, key: str, request: SearchRequest, log: RequestLoggerAdapter
    ) -> LookupOutcome:
        try:
            # Listen before publishing so an early signal cannot be missed.
            async with self._signals.listen(key) as listener:
                job_id = await self._queue.publish(request)
                if job_id is None:
                    log.error("Could not publish flight job for %s", key)
                    return PublishFailure(f"could not queue flight search for {key}")
                log.info("Cache miss for %s; waiting on job %s", key, job_id)
                return await self._wait_for_result(key, listener, log)
        except CacheUnavailableError as exc:
            log.error("Flight cache unavailable while waiting: %s", exc)
            return StoreFailure(str(exc))

    async def _wait_for_result(
        self, key: str, listener: CompletionListener, log: RequestLoggerAdapter
    ) -> LookupOutcome:
        loop = asyncio.get_running_loop()
        started = loop.time()
        deadline = started + self._max_wait

        while True:
            flights = await self._cache.get(key)
            if flights is not None:
                log.info(
                    "Flights for %s ready after %.1fs", key, loop.time() - started
                )
                return Success(flights)

            remaining = deadline - loop.time()
            if remaining <= 0:
                log.warning("Timed out after %.1fs waiting for %s", self._max_wait, key)
                return Timeout(key=key, waited=self._max_wait)

            signal = await listener.wait(min(self._poll_interval, remaining))
            if signal is not None and signal.failed:
                log.error("Flight search for %s failed: %s", key, signal.reason)
                return FetchFailure(signal.reason or "flight search failed")
