"""Flight search router."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from wanderwise_api.config import settings
from wanderwise_api.dependencies import get_flight_lookup
from wanderwise_api.responses import LOOKUP_ERROR_RESPONSES, failure_response
from wanderwise_api.schemas.flights import FlightSearchBody, FlightSearchResponse
from wanderwise_api.services.flight_lookup import FlightLookupService
from wanderwise_core.cache_keys import flight_search_key
from wanderwise_core.outcomes import Success

router = APIRouter(prefix="/flights", tags=["flights"])

LookupDep = Annotated[FlightLookupService, Depends(get_flight_lookup)]


@router.post(
    "/search",
    response_model=FlightSearchResponse,
    responses=LOOKUP_ERROR_RESPONSES,
)
async def search_flights(
    body: FlightSearchBody,
    lookup: LookupDep,
) -> FlightSearchResponse | JSONResponse:
    """Return flights from the cache, fetching them through a worker on a miss."""
    request = body.to_search_request()
    outcome = await lookup.find_flights(request)
    if not isinstance(outcome, Success):
        return failure_response(
            outcome, request.request_id, settings.flight_poll_interval
        )
    return FlightSearchResponse(
        request_id=request.request_id,
        cache_key=flight_search_key(request),
        flights=outcome.flights,
        total=len(outcome.flights),
        cached=outcome.cached,
    )
