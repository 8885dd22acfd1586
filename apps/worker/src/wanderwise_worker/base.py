"""Abstract base class for flight search providers."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wanderwise_core.schemas import FlightOffer, SearchRequest


class FlightSource(abc.ABC):
    """A third-party flight search the worker can call."""

    @abc.abstractmethod
    async def find(self, request: SearchRequest) -> list[FlightOffer]:
        """Return offers for *request* in provider order.

        An empty list means "no matching flights" and is not an error.

        Raises:
            FlightFetchError: The provider could not be queried.
        """

    @abc.abstractmethod
    async def health_check(self) -> bool:
        """Return True if the provider is reachable."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release any held resources."""
