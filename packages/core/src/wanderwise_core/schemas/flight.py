"""Flight offer DTO exchanged through the shared cache."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003

from pydantic import BaseModel, Field, TypeAdapter


class FlightOffer(BaseModel):
    """One priced flight returned by the flight search provider."""

    id: str
    origin: str = Field(description="IATA airport code")
    destination: str = Field(description="IATA airport code")
    departure_date: date
    price: float
    currency: str = "USD"
    airline: str = Field(description="IATA carrier code")
    duration_minutes: int
    departure_time: datetime
    arrival_time: datetime
    stops: int = 0


_OFFER_LIST = TypeAdapter(list[FlightOffer])


def dump_offers(offers: list[FlightOffer]) -> str:
    """Serialise an ordered list of offers to JSON text."""
    return _OFFER_LIST.dump_json(offers).decode()


def load_offers(raw: str | bytes) -> list[FlightOffer]:
    """Inverse of :func:`dump_offers`; preserves order."""
    return _OFFER_LIST.validate_json(raw)
