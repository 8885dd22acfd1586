"""Exception hierarchy shared by the API and the worker."""

from __future__ import annotations


class WanderWiseError(Exception):
    """Base class for all WanderWise errors."""


class CacheUnavailableError(WanderWiseError):
    """The shared cache (Redis) could not be read or written."""


class FlightFetchError(WanderWiseError):
    """The flight search provider failed to answer."""


class ProviderError(WanderWiseError):
    """A supporting data provider (news, AI opinion) failed."""
