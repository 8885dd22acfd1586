"""Trip report router."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from wanderwise_api.config import settings
from wanderwise_api.dependencies import get_flight_lookup, get_trip_service
from wanderwise_api.responses import LOOKUP_ERROR_RESPONSES, failure_response
from wanderwise_api.schemas.flights import FlightSearchBody
from wanderwise_api.schemas.trips import TripReport
from wanderwise_api.services.flight_lookup import FlightLookupService
from wanderwise_api.services.trip_service import TripService
from wanderwise_core.outcomes import Success

router = APIRouter(prefix="/trips", tags=["trips"])

LookupDep = Annotated[FlightLookupService, Depends(get_flight_lookup)]
TripDep = Annotated[TripService, Depends(get_trip_service)]


@router.post("", response_model=TripReport, responses=LOOKUP_ERROR_RESPONSES)
async def plan_trip(
    body: FlightSearchBody,
    lookup: LookupDep,
    trips: TripDep,
) -> TripReport | JSONResponse:
    """Flights plus price history, destination news and an AI opinion."""
    request = body.to_search_request()
    outcome = await lookup.find_flights(request)
    if not isinstance(outcome, Success):
        return failure_response(
            outcome, request.request_id, settings.flight_poll_interval
        )
    return await trips.build_report(request, outcome)
