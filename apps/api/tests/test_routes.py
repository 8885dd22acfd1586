"""HTTP contract of the flight, trip and progress endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from wanderwise_api import dependencies
from wanderwise_api.dependencies import (
    get_flight_lookup,
    get_progress_channel,
    get_trip_service,
)
from wanderwise_api.main import create_app
from wanderwise_api.schemas.trips import HistoricalStats, TripReport
from wanderwise_core.outcomes import (
    FetchFailure,
    PublishFailure,
    StoreFailure,
    Success,
    Timeout,
)
from wanderwise_core.schemas import ProgressEvent

if TYPE_CHECKING:
    from wanderwise_core.outcomes import LookupOutcome
    from wanderwise_core.schemas import SearchRequest

SEARCH_BODY = {
    "originCode": "tpe",
    "destinationCode": "LAX",
    "departureDate": "2025-05-01",
    "passengerCount": 1,
}


class StubLookup:
    def __init__(self, outcome: LookupOutcome) -> None:
        self.outcome = outcome
        self.requests: list[SearchRequest] = []

    async def find_flights(self, request: SearchRequest) -> LookupOutcome:
        self.requests.append(request)
        return self.outcome


class StubTrips:
    def __init__(self) -> None:
        self.calls = 0

    async def build_report(self, request: SearchRequest, result: Success) -> TripReport:
        self.calls += 1
        return TripReport(
            request_id=request.request_id,
            origin=request.origin_code,
            destination=request.destination_code,
            departure_date=request.departure_date.isoformat(),
            flights=result.flights,
            cached=result.cached,
            country="United States",
            history=HistoricalStats(average_price=450.0, lowest_price=400.0),
            articles=None,
            opinion="Go in spring.",
        )


class StubProgress:
    async def subscribe(self, request_id: str):
        yield ProgressEvent(request_id=request_id, message="Searching flights")
        yield ProgressEvent(request_id=request_id, message="Found 3 flights", terminal=True)


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def use_lookup(app):
    def _use(outcome: LookupOutcome) -> StubLookup:
        lookup = StubLookup(outcome)
        app.dependency_overrides[get_flight_lookup] = lambda: lookup
        return lookup

    return _use


def test_status(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


class TestFlightSearch:
    def test_success(self, client, use_lookup, make_offers):
        offers = make_offers(3)
        lookup = use_lookup(Success(offers))

        resp = client.post("/api/v1/flights/search", json=SEARCH_BODY)

        assert resp.status_code == 200
        body = resp.json()
        assert body["cache_key"] == "flights:TPE:LAX:2025-05-01:1"
        assert body["total"] == 3
        assert body["cached"] is False
        assert [f["id"] for f in body["flights"]] == ["1", "2", "3"]
        assert body["request_id"] == lookup.requests[0].request_id

    def test_cached_flag(self, client, use_lookup, make_offers):
        use_lookup(Success(make_offers(1), cached=True))

        resp = client.post("/api/v1/flights/search", json=SEARCH_BODY)

        assert resp.json()["cached"] is True

    def test_each_call_gets_its_own_request_id(self, client, use_lookup, make_offers):
        lookup = use_lookup(Success(make_offers(1)))

        client.post("/api/v1/flights/search", json=SEARCH_BODY)
        client.post("/api/v1/flights/search", json=SEARCH_BODY)

        ids = {r.request_id for r in lookup.requests}
        assert len(ids) == 2

    def test_client_chosen_request_id_is_kept(self, client, use_lookup, make_offers):
        lookup = use_lookup(Success(make_offers(1)))

        resp = client.post(
            "/api/v1/flights/search", json={**SEARCH_BODY, "requestId": "trip-42"}
        )

        assert resp.status_code == 200
        assert lookup.requests[0].request_id == "trip-42"
        assert resp.json()["request_id"] == "trip-42"

    def test_rejects_malformed_request_id(self, client, use_lookup):
        lookup = use_lookup(Timeout(key="x", waited=1.0))

        resp = client.post(
            "/api/v1/flights/search", json={**SEARCH_BODY, "requestId": "bad id!"}
        )

        assert resp.status_code == 422
        assert lookup.requests == []

    def test_timeout_means_try_again_later(self, client, use_lookup):
        use_lookup(Timeout(key="flights:TPE:LAX:2025-05-01:1", waited=60.0))

        resp = client.post("/api/v1/flights/search", json=SEARCH_BODY)

        assert resp.status_code == 202
        assert resp.json()["status"] == "processing"
        assert int(resp.headers["Retry-After"]) >= 1

    @pytest.mark.parametrize(
        ("outcome", "status_code", "code"),
        [
            (PublishFailure("broker down"), 503, "queue_unavailable"),
            (StoreFailure("redis down"), 503, "cache_unavailable"),
            (FetchFailure("provider down"), 502, "flight_search_failed"),
        ],
    )
    def test_failures(self, client, use_lookup, outcome, status_code, code):
        use_lookup(outcome)

        resp = client.post("/api/v1/flights/search", json=SEARCH_BODY)

        assert resp.status_code == status_code
        assert resp.json()["code"] == code
        assert resp.json()["detail"] == outcome.reason

    def test_rejects_bad_airport_code(self, client, use_lookup):
        lookup = use_lookup(Timeout(key="x", waited=1.0))

        resp = client.post(
            "/api/v1/flights/search", json={**SEARCH_BODY, "originCode": "TPEX"}
        )

        assert resp.status_code == 422
        assert lookup.requests == []


class TestTrips:
    def test_report(self, app, client, use_lookup, make_offers):
        use_lookup(Success(make_offers(3)))
        trips = StubTrips()
        app.dependency_overrides[get_trip_service] = lambda: trips

        resp = client.post("/api/v1/trips", json=SEARCH_BODY)

        assert resp.status_code == 200
        body = resp.json()
        assert body["origin"] == "TPE"
        assert body["country"] == "United States"
        assert len(body["flights"]) == 3
        assert body["articles"] is None
        assert trips.calls == 1

    def test_lookup_failure_skips_enrichment(self, app, client, use_lookup):
        use_lookup(FetchFailure("provider down"))
        trips = StubTrips()
        app.dependency_overrides[get_trip_service] = lambda: trips

        resp = client.post("/api/v1/trips", json=SEARCH_BODY)

        assert resp.status_code == 502
        assert trips.calls == 0


def test_progress_websocket_relays_until_terminal(app, client):
    app.dependency_overrides[get_progress_channel] = StubProgress

    with client.websocket_connect("/api/v1/progress/req-1") as ws:
        first = ws.receive_json()
        last = ws.receive_json()

    assert first["message"] == "Searching flights"
    assert first["request_id"] == "req-1"
    assert last["terminal"] is True


def _dependency_calls(dependant) -> set:
    calls = set()
    for sub in dependant.dependencies:
        calls.add(sub.call)
        calls |= _dependency_calls(sub)
    return calls


def test_every_provider_is_wired_to_a_route(app):
    used = set()
    for route in app.routes:
        if hasattr(route, "dependant"):
            used |= _dependency_calls(route.dependant)

    providers = {
        getattr(dependencies, name)
        for name in dir(dependencies)
        if name.startswith("get_") and callable(getattr(dependencies, name))
    }
    assert providers
    assert providers <= used
