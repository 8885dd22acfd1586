"""Map non-successful lookup outcomes to HTTP responses."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from fastapi import status
from fastapi.responses import JSONResponse

from wanderwise_core.outcomes import (
    FetchFailure,
    PublishFailure,
    StoreFailure,
    Timeout,
)

from .schemas.common import ErrorResponse, ProcessingResponse

if TYPE_CHECKING:
    from wanderwise_core.outcomes import LookupOutcome

LOOKUP_ERROR_RESPONSES: dict[int | str, dict] = {
    status.HTTP_202_ACCEPTED: {"model": ProcessingResponse},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
}


def _error(status_code: int, detail: str, code: str, request_id: str) -> JSONResponse:
    body = ErrorResponse(detail=detail, code=code, request_id=request_id)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def failure_response(
    outcome: LookupOutcome, request_id: str, retry_after: float
) -> JSONResponse:
    """Build the response for any outcome other than ``Success``."""
    match outcome:
        case Timeout(key=key):
            seconds = max(1, math.ceil(retry_after))
            body = ProcessingResponse(
                message=f"Still searching flights for {key}; try again shortly",
                request_id=request_id,
                retry_after=seconds,
            )
            return JSONResponse(
                status_code=status.HTTP_202_ACCEPTED,
                content=body.model_dump(),
                headers={"Retry-After": str(seconds)},
            )
        case PublishFailure(reason=reason):
            return _error(
                status.HTTP_503_SERVICE_UNAVAILABLE, reason, "queue_unavailable", request_id
            )
        case StoreFailure(reason=reason):
            return _error(
                status.HTTP_503_SERVICE_UNAVAILABLE, reason, "cache_unavailable", request_id
            )
        case FetchFailure(reason=reason):
            return _error(
                status.HTTP_502_BAD_GATEWAY, reason, "flight_search_failed", request_id
            )
        case _:
            msg = f"not a failure outcome: {outcome!r}"
            raise TypeError(msg)
