"""Trip report schemas."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel

from wanderwise_core.schemas import FlightOffer


class Article(BaseModel):
    """One news article about the destination."""

    title: str
    url: str
    published_at: datetime | None = None
    snippet: str | None = None


class HistoricalStats(BaseModel):
    """Price history for a route; *None* when nothing is stored yet."""

    average_price: float | None = None
    lowest_price: float | None = None


class TripReport(BaseModel):
    """Everything the client shows for a planned trip."""

    request_id: str
    origin: str
    destination: str
    departure_date: str
    flights: list[FlightOffer]
    cached: bool = False
    country: str | None = None
    history: HistoricalStats
    articles: list[Article] | None = None
    opinion: str | None = None
