"""Flight search worker: one job in, one cache entry (maybe) out.

Per job::

    received -> checking-cache -> already-cached            (done)
                               -> fetching -> stored        (done)
                                           -> no results    (done, nothing cached)
                                           -> error         (reported, re-raised;
                                                             terminal only when final)

The worker never retries on its own. Errors propagate so the job queue's
redelivery policy decides what happens next; duplicate deliveries are
absorbed by the cache existence check.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wanderwise_core.cache_keys import flight_search_key
from wanderwise_core.log_config import bind_request
from wanderwise_core.outcomes import AlreadyCached, NoResults, Stored
from wanderwise_core.signals import CompletionSignal

from .reporter import JobReporter

if TYPE_CHECKING:
    from wanderwise_core.cache import FlightCache
    from wanderwise_core.outcomes import JobOutcome
    from wanderwise_core.schemas import SearchRequest
    from wanderwise_core.signals import CompletionSignals

    from .base import FlightSource
    from .reporter import ProgressPublisher

logger = logging.getLogger(__name__)


class FlightSearchWorker:
    """Fetches flights for queued search jobs and fills the shared cache."""

    def __init__(
        self,
        *,
        cache: FlightCache,
        source: FlightSource,
        progress: ProgressPublisher,
        signals: CompletionSignals,
        cache_ttl: int,
        retryable: tuple[type[Exception], ...] = (),
        log: logging.Logger | None = None,
    ) -> None:
        if cache_ttl <= 0:
            msg = f"cache_ttl must be positive, got {cache_ttl}"
            raise ValueError(msg)
        self._cache = cache
        self._source = source
        self._progress = progress
        self._signals = signals
        self._cache_ttl = cache_ttl
        self._retryable = retryable
        self._log = log or logger

    async def process(
        self, request: SearchRequest, *, final_attempt: bool = True
    ) -> JobOutcome:
        """Run one job to a terminal state.

        *final_attempt* tells the worker whether the queue still has
        redeliveries left. Errors of a *retryable* type are announced to
        waiters only on the final attempt; any other error is always final.
        """
        key = flight_search_key(request)
        log = bind_request(self._log, request.request_id)
        reporter = JobReporter(self._progress, request.request_id)
        route = f"{request.origin_code}-{request.destination_code} on {request.departure_date}"

        log.info("Processing flight search %s", key)
        await reporter.report(f"Searching flights {route}")

        try:
            if await self._cache.exists(key):
                log.info("Results already cached for %s", key)
                await reporter.finish(f"Flights {route} already cached")
                return AlreadyCached(key)

            await reporter.report("Querying flight provider")
            offers = await self._source.find(request)

            if not offers:
                log.warning("No flights found for %s", key)
                await reporter.finish(f"No results: no flights found for {route}")
                return NoResults(key)

            await self._cache.set(key, offers, self._cache_ttl)
        except Exception as exc:
            log.error("Error processing %s: %s", key, exc)
            if final_attempt or not isinstance(exc, self._retryable):
                await reporter.finish(f"Error: {exc}")
                await self._signals.notify(
                    key, CompletionSignal(status="failed", reason=str(exc))
                )
            else:
                # Redelivery follows; observers keep listening.
                await reporter.report(f"Error: {exc} (will retry)")
            raise

        log.info("Cached %d flights under %s", len(offers), key)
        await self._signals.notify(key, CompletionSignal(status="stored"))
        await reporter.finish(f"Found {len(offers)} flights {route}")
        return Stored(key, len(offers))
