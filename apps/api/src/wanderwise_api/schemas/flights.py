"""Flight search request / response schemas."""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wanderwise_core.schemas import FlightOffer, SearchRequest
from wanderwise_core.schemas.search import IataCode


class FlightSearchBody(BaseModel):
    """Inbound search parameters from the client (snake_case or camelCase)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    origin_code: IataCode
    destination_code: IataCode
    departure_date: date
    passenger_count: int = Field(default=1, ge=1, le=9)
    # Lets a client open the progress stream before posting the search.
    request_id: str | None = Field(
        default=None, min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_-]+$"
    )

    def to_search_request(self) -> SearchRequest:
        """Build the request, generating an id unless the client sent one."""
        extra = {"request_id": self.request_id} if self.request_id else {}
        return SearchRequest(
            origin_code=self.origin_code,
            destination_code=self.destination_code,
            departure_date=self.departure_date,
            passenger_count=self.passenger_count,
            **extra,
        )


class FlightSearchResponse(BaseModel):
    """Flights for one search."""

    request_id: str
    cache_key: str
    flights: list[FlightOffer]
    total: int
    cached: bool = False
