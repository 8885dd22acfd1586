"""Cache key and channel builders for consistent namespacing."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schemas import SearchRequest

FLIGHTS_PREFIX = "flights"


def _code(value: str) -> str:
    return value.strip().upper()


def flight_search_key(request: SearchRequest) -> str:
    """Fingerprint a search: ``flights:<origin>:<destination>:<date>:<passengers>``.

    Codes are whitespace-stripped and upper-cased, the date is ISO formatted
    and the passenger count is a plain integer, so two requests collide
    exactly when they describe the same search. The request id is not part
    of the key.
    """
    return ":".join(
        (
            FLIGHTS_PREFIX,
            _code(request.origin_code),
            _code(request.destination_code),
            request.departure_date.isoformat(),
            str(int(request.passenger_count)),
        )
    )


def ready_channel(key: str) -> str:
    """Pub/sub channel on which completion of *key* is announced."""
    return f"ready:{key}"


def progress_channel(request_id: str) -> str:
    """Pub/sub channel carrying progress events for one request."""
    return f"progress:{request_id}"


def articles_key(keyword: str) -> str:
    """Build cache key for news article lookups."""
    digest = hashlib.md5(keyword.strip().lower().encode()).hexdigest()
    return f"articles:{digest}"


def opinion_key(origin: str, destination: str, month: int) -> str:
    """Build cache key for AI travel opinions."""
    return f"opinion:{_code(origin)}:{_code(destination)}:{month}"
