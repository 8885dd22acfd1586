"""Parse Amadeus flight-offers responses into FlightOffer objects."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime

from wanderwise_core.schemas import FlightOffer

logger = logging.getLogger(__name__)

# ISO-8601 duration -> minutes (e.g. "PT13H5M" -> 785)
_DURATION_RE = re.compile(r"P(?:(\d+)D)?T?(?:(\d+)H)?(?:(\d+)M)?")


def parse_duration(iso_dur: str) -> int:
    """Convert an ISO-8601 duration string to minutes (0 if unparseable)."""
    m = _DURATION_RE.fullmatch(iso_dur or "")
    if not m:
        return 0
    days, hours, minutes = (int(g or 0) for g in m.groups())
    return days * 1440 + hours * 60 + minutes


def _parse_dt(dt_str: str) -> datetime | None:
    """Parse an Amadeus local datetime; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(dt_str)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_flight_offers(
    offers: list[dict],
    default_currency: str = "USD",
) -> list[FlightOffer]:
    """Convert the ``data`` array of a Flight Offers Search response.

    One :class:`FlightOffer` per offer, built from its first (outbound)
    itinerary. Offers without segments, price or parseable times are
    skipped. Provider order is preserved.
    """
    parsed: list[FlightOffer] = []

    for offer in offers:
        itineraries = offer.get("itineraries", [])
        if not itineraries:
            continue
        itin = itineraries[0]
        segments = itin.get("segments", [])
        if not segments:
            continue

        first_seg = segments[0]
        last_seg = segments[-1]
        dep_time = _parse_dt(first_seg.get("departure", {}).get("at", ""))
        arr_time = _parse_dt(last_seg.get("arrival", {}).get("at", ""))
        if dep_time is None or arr_time is None:
            logger.debug("Skipping offer %s: bad segment times", offer.get("id"))
            continue

        price_data = offer.get("price", {})
        total = price_data.get("grandTotal") or price_data.get("total")
        if not total:
            continue

        airline = (offer.get("validatingAirlineCodes") or [None])[0] or first_seg.get(
            "carrierCode", ""
        )

        parsed.append(
            FlightOffer(
                id=str(offer.get("id", len(parsed) + 1)),
                origin=first_seg.get("departure", {}).get("iataCode", ""),
                destination=last_seg.get("arrival", {}).get("iataCode", ""),
                departure_date=dep_time.date(),
                price=float(total),
                currency=price_data.get("currency", default_currency),
                airline=airline,
                duration_minutes=parse_duration(itin.get("duration", "")),
                departure_time=dep_time,
                arrival_time=arr_time,
                stops=len(segments) - 1,
            )
        )

    logger.info("Parsed %d of %d Amadeus flight offers", len(parsed), len(offers))
    return parsed
