"""Tests for trip report assembly."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from wanderwise_api.schemas.trips import Article
from wanderwise_api.services.trip_service import TripService
from wanderwise_core.errors import ProviderError
from wanderwise_core.outcomes import Success


def _scalar(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class StubArticles:
    def __init__(self, articles=None, error=None):
        self.articles = articles or []
        self.error = error
        self.keywords: list[str] = []

    async def recent_articles(self, keyword):
        self.keywords.append(keyword)
        if self.error is not None:
            raise self.error
        return self.articles


class StubOpinions:
    def __init__(self, text="Spring is a fine time to visit.", error=None):
        self.text = text
        self.error = error
        self.calls: list[tuple] = []

    async def trip_opinion(self, origin, destination, month, average_price, headlines):
        self.calls.append((origin, destination, month, average_price, headlines))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def session():
    """AsyncSession double answering average, lowest, then country."""
    db = MagicMock()
    db.flush = AsyncMock()
    db.execute = AsyncMock(
        side_effect=[
            _scalar(Decimal("512.3456")),
            _scalar(Decimal("420.00")),
            _scalar("United States"),
        ]
    )
    return db


@pytest.fixture
def articles():
    return StubArticles(
        [
            Article(title="LA reopens its beaches", url="https://example.com/a"),
            Article(title="Wildfire season ends", url="https://example.com/b"),
        ]
    )


async def test_full_report(session, articles, make_request, make_offers):
    opinions = StubOpinions()
    request = make_request()
    offers = make_offers(3)

    report = await TripService(session, articles, opinions).build_report(
        request, Success(offers)
    )

    assert report.flights == offers
    assert report.country == "United States"
    assert report.history.average_price == 512.35
    assert report.history.lowest_price == 420.0
    assert articles.keywords == ["United States"]
    assert report.opinion == "Spring is a fine time to visit."
    assert opinions.calls == [
        (
            "TPE",
            "LAX",
            5,
            512.35,
            ["LA reopens its beaches", "Wildfire season ends"],
        )
    ]
    (rows,) = session.add_all.call_args.args
    assert [r.offer_id for r in rows] == ["1", "2", "3"]


async def test_cached_flights_are_not_recorded_again(
    session, articles, make_request, make_offers
):
    report = await TripService(session, articles, StubOpinions()).build_report(
        make_request(), Success(make_offers(2), cached=True)
    )

    assert report.cached is True
    session.add_all.assert_not_called()


async def test_provider_failures_leave_fields_empty(session, make_request, make_offers):
    articles = StubArticles(error=ProviderError("news API key is not configured"))
    opinions = StubOpinions(error=ProviderError("model unavailable"))

    report = await TripService(session, articles, opinions).build_report(
        make_request(), Success(make_offers(1))
    )

    assert report.articles is None
    assert report.opinion is None
    assert opinions.calls[0][4] == []
    assert len(report.flights) == 1


async def test_database_failure_degrades(articles, make_request, make_offers):
    db = MagicMock()
    db.flush = AsyncMock(side_effect=SQLAlchemyError("db down"))
    db.rollback = AsyncMock()
    db.execute = AsyncMock(side_effect=SQLAlchemyError("db down"))

    report = await TripService(db, articles, StubOpinions()).build_report(
        make_request(), Success(make_offers(1))
    )

    assert report.history.average_price is None
    assert report.history.lowest_price is None
    assert report.country is None
    assert articles.keywords == ["LAX"]
    assert report.opinion is not None
    db.rollback.assert_awaited_once()
