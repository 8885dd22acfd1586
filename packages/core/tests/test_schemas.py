"""Tests for shared schemas."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from wanderwise_core.schemas import FlightOffer, ProgressEvent, SearchRequest
from wanderwise_core.schemas.flight import dump_offers, load_offers


class TestSearchRequest:
    def test_job_payload_uses_camel_case(self):
        request = SearchRequest(
            origin_code="tpe",
            destination_code="lax",
            departure_date=date(2025, 5, 1),
            request_id="r-1",
        )

        assert request.to_job() == {
            "originCode": "TPE",
            "destinationCode": "LAX",
            "departureDate": "2025-05-01",
            "passengerCount": 1,
            "requestId": "r-1",
        }

    def test_from_job_accepts_json_text(self):
        request = SearchRequest.from_job(
            '{"originCode": "TPE", "destinationCode": "LAX",'
            ' "departureDate": "2025-05-01", "passengerCount": 2, "requestId": "r-2"}'
        )

        assert request.passenger_count == 2
        assert request.request_id == "r-2"
        assert SearchRequest.from_job(request.to_job()) == request

    def test_request_ids_are_unique(self):
        a = SearchRequest(origin_code="TPE", destination_code="LAX", departure_date=date(2025, 5, 1))
        b = SearchRequest(origin_code="TPE", destination_code="LAX", departure_date=date(2025, 5, 1))
        assert a.request_id != b.request_id

    @pytest.mark.parametrize(
        "overrides",
        [
            {"origin_code": "TP"},
            {"destination_code": "LAXX"},
            {"origin_code": "12A"},
            {"passenger_count": 0},
            {"passenger_count": 10},
        ],
    )
    def test_rejects_invalid(self, overrides):
        fields = {
            "origin_code": "TPE",
            "destination_code": "LAX",
            "departure_date": date(2025, 5, 1),
        }
        with pytest.raises(ValidationError):
            SearchRequest(**{**fields, **overrides})

    def test_is_immutable(self):
        request = SearchRequest(
            origin_code="TPE", destination_code="LAX", departure_date=date(2025, 5, 1)
        )
        with pytest.raises(ValidationError):
            request.origin_code = "NRT"


def test_offer_list_keeps_order():
    when = datetime(2025, 5, 1, 8, tzinfo=UTC)
    offers = [
        FlightOffer(
            id=offer_id,
            origin="TPE",
            destination="LAX",
            departure_date=when.date(),
            price=price,
            airline="BR",
            duration_minutes=720,
            departure_time=when,
            arrival_time=when,
        )
        for offer_id, price in [("b", 900.0), ("a", 400.0), ("c", 650.5)]
    ]

    assert [o.id for o in load_offers(dump_offers(offers))] == ["b", "a", "c"]


def test_progress_event_defaults():
    event = ProgressEvent(request_id="r", message="hi")
    assert event.terminal is False
    assert event.timestamp.tzinfo is not None
