"""Typed outcomes of a flight lookup and of a worker job."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schemas import FlightOffer


@dataclass(frozen=True, slots=True)
class Success:
    """Flights are available; ``cached`` is True when no job was needed."""

    flights: list[FlightOffer]
    cached: bool = False


@dataclass(frozen=True, slots=True)
class Timeout:
    """No result appeared before the wait deadline. Try again later."""

    key: str
    waited: float


@dataclass(frozen=True, slots=True)
class PublishFailure:
    reason: str


@dataclass(frozen=True, slots=True)
class FetchFailure:
    reason: str


@dataclass(frozen=True, slots=True)
class StoreFailure:
    reason: str


type LookupOutcome = Success | Timeout | PublishFailure | FetchFailure | StoreFailure


@dataclass(frozen=True, slots=True)
class Stored:
    """Worker fetched flights and wrote them to the cache."""

    key: str
    count: int


@dataclass(frozen=True, slots=True)
class AlreadyCached:
    key: str


@dataclass(frozen=True, slots=True)
class NoResults:
    """Provider answered with no flights; nothing was cached."""

    key: str


type JobOutcome = Stored | AlreadyCached | NoResults
