"""Search request schema shared by the API and the worker."""

from __future__ import annotations

import uuid
from datetime import date  # noqa: TC003
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_request_id() -> str:
    """Generate an identifier for a newly received request."""
    return uuid.uuid4().hex


def _normalize_code(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().upper()
    return value


IataCode = Annotated[
    str,
    Field(pattern=r"^[A-Z]{3}$", description="IATA airport code"),
    BeforeValidator(_normalize_code),
]


class SearchRequest(BaseModel):
    """One-way flight search parameters.

    ``request_id`` is assigned once at ingress and travels with the job,
    the progress events and the log lines of everything the search causes.
    On the job queue the request is serialised with camelCase keys
    (``originCode``, ``destinationCode``, ``departureDate``,
    ``passengerCount``, ``requestId``).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    origin_code: IataCode
    destination_code: IataCode
    departure_date: date
    passenger_count: int = Field(default=1, ge=1, le=9)
    request_id: str = Field(default_factory=new_request_id, min_length=1)

    def to_job(self) -> dict[str, Any]:
        """Serialise as a job payload for the queue."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_job(cls, payload: dict[str, Any] | str) -> SearchRequest:
        """Rebuild a request from a queue payload (dict or JSON text)."""
        if isinstance(payload, str):
            return cls.model_validate_json(payload)
        return cls.model_validate(payload)
