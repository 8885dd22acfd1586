"""Lookup and worker wired together through shared in-memory fakes."""

from __future__ import annotations

import contextlib

import pytest

from wanderwise_api.services.flight_lookup import FlightLookupService
from wanderwise_core.outcomes import FetchFailure, Success
from wanderwise_worker.worker import FlightSearchWorker

pytestmark = pytest.mark.timeout(10)


@pytest.fixture
def wire(flight_cache, job_queue, signals, progress):
    """Return a lookup service whose published jobs run on a worker."""

    def _wire(source, *, final_attempt=True) -> FlightLookupService:
        worker = FlightSearchWorker(
            cache=flight_cache,
            source=source,
            progress=progress,
            signals=signals,
            cache_ttl=3600,
        )

        async def _deliver(request):
            # Errors are the queue's business; the lookup sees the signal.
            with contextlib.suppress(Exception):
                await worker.process(request, final_attempt=final_attempt)

        job_queue.on_publish = _deliver
        return FlightLookupService(
            cache=flight_cache,
            queue=job_queue,
            signals=signals,
            poll_interval=0.5,
            max_wait=5.0,
        )

    return _wire


async def test_tpe_to_lax(wire, make_source, make_request, make_offers, job_queue, progress):
    offers = make_offers(3)
    source = make_source(offers)
    lookup = wire(source)
    request = make_request("TPE", "LAX")

    first = await lookup.find_flights(request)
    second = await lookup.find_flights(make_request("TPE", "LAX"))

    assert first == Success(offers)
    assert [f.id for f in first.flights] == ["1", "2", "3"]
    assert second == Success(offers, cached=True)
    assert len(job_queue.published) == 1
    assert source.calls == 1
    assert progress.events[-1].message == "Found 3 flights TPE-LAX on 2025-05-01"
    assert progress.events[-1].request_id == request.request_id


async def test_provider_failure_reaches_the_caller(wire, make_source, make_request):
    lookup = wire(make_source(error=RuntimeError("quota exceeded")))

    outcome = await lookup.find_flights(make_request())

    assert outcome == FetchFailure("quota exceeded")
