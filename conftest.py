"""Shared fixtures: in-memory stand-ins for Redis, Celery and the provider."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from wanderwise_core.errors import CacheUnavailableError
from wanderwise_core.schemas import FlightOffer, ProgressEvent, SearchRequest
from wanderwise_worker.base import FlightSource

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from wanderwise_core.signals import CompletionSignal


class InMemoryFlightCache:
    """FlightCache keeping entries and their TTLs in dicts."""

    def __init__(self) -> None:
        self.entries: dict[str, list[FlightOffer]] = {}
        self.ttls: dict[str, int] = {}
        self.get_calls = 0
        self.set_calls = 0
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            msg = "redis is down"
            raise CacheUnavailableError(msg)

    async def get(self, key: str) -> list[FlightOffer] | None:
        self.get_calls += 1
        self._check()
        offers = self.entries.get(key)
        return list(offers) if offers is not None else None

    async def set(self, key: str, offers: list[FlightOffer], ttl: int) -> None:
        self._check()
        if ttl <= 0:
            msg = "ttl must be positive"
            raise ValueError(msg)
        self.set_calls += 1
        self.entries[key] = list(offers)
        self.ttls[key] = ttl

    async def exists(self, key: str) -> bool:
        self._check()
        return key in self.entries


class RecordingJobQueue:
    """JobQueue that records requests and can hand them to a fake worker."""

    def __init__(self) -> None:
        self.published: list[SearchRequest] = []
        self.fail = False
        self.on_publish: Callable[[SearchRequest], Awaitable[object]] | None = None
        self._tasks: set[asyncio.Task] = set()

    async def publish(self, request: SearchRequest) -> str | None:
        if self.fail:
            return None
        self.published.append(request)
        if self.on_publish is not None:
            task = asyncio.create_task(self.on_publish(request))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return f"job-{len(self.published)}"


class _QueueListener:
    def __init__(self, queue: asyncio.Queue[CompletionSignal]) -> None:
        self._queue = queue

    async def wait(self, timeout: float) -> CompletionSignal | None:
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except TimeoutError:
            return None


class InMemorySignals:
    """CompletionSignals delivered through one asyncio.Queue per listener."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, CompletionSignal]] = []
        self._listeners: dict[str, list[asyncio.Queue]] = defaultdict(list)

    @asynccontextmanager
    async def listen(self, key: str) -> AsyncIterator[_QueueListener]:
        queue: asyncio.Queue[CompletionSignal] = asyncio.Queue()
        self._listeners[key].append(queue)
        try:
            yield _QueueListener(queue)
        finally:
            self._listeners[key].remove(queue)

    async def notify(self, key: str, signal: CompletionSignal) -> None:
        self.sent.append((key, signal))
        for queue in self._listeners.get(key, []):
            queue.put_nowait(signal)


class RecordingProgress:
    def __init__(self) -> None:
        self.events: list[ProgressEvent] = []

    async def publish(
        self, request_id: str, message: str, *, terminal: bool = False
    ) -> ProgressEvent:
        event = ProgressEvent(request_id=request_id, message=message, terminal=terminal)
        self.events.append(event)
        return event

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.events]


class FakeFlightSource(FlightSource):
    def __init__(
        self,
        offers: list[FlightOffer] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.offers = offers or []
        self.error = error
        self.calls = 0
        self.closed = False

    async def find(self, request: SearchRequest) -> list[FlightOffer]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.offers)

    async def health_check(self) -> bool:
        return self.error is None

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def departure_date() -> date:
    return date(2025, 5, 1)


@pytest.fixture
def make_request(departure_date: date):
    """Factory fixture for SearchRequest instances (TPE -> LAX by default)."""

    def _make(
        origin: str = "TPE",
        destination: str = "LAX",
        passengers: int = 1,
        when: date | None = None,
    ) -> SearchRequest:
        return SearchRequest(
            origin_code=origin,
            destination_code=destination,
            departure_date=when or departure_date,
            passenger_count=passengers,
        )

    return _make


@pytest.fixture
def make_offers(departure_date: date):
    """Factory fixture for *n* TPE -> LAX offers with increasing prices."""

    def _make(n: int, origin: str = "TPE", destination: str = "LAX") -> list[FlightOffer]:
        base = datetime.combine(departure_date, datetime.min.time(), tzinfo=UTC)
        return [
            FlightOffer(
                id=str(i + 1),
                origin=origin,
                destination=destination,
                departure_date=departure_date,
                price=400.0 + 50 * i,
                airline=("BR", "CI", "UA")[i % 3],
                duration_minutes=700 + 10 * i,
                departure_time=base + timedelta(hours=8 + i),
                arrival_time=base + timedelta(hours=20 + i),
            )
            for i in range(n)
        ]

    return _make


@pytest.fixture
def flight_cache() -> InMemoryFlightCache:
    return InMemoryFlightCache()


@pytest.fixture
def job_queue() -> RecordingJobQueue:
    return RecordingJobQueue()


@pytest.fixture
def signals() -> InMemorySignals:
    return InMemorySignals()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def make_source():
    """Factory fixture for a scripted FlightSource."""
    return FakeFlightSource
