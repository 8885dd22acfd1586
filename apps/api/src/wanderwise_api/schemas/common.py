"""Shared response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error payload."""

    detail: str
    code: str | None = None
    request_id: str | None = None


class ProcessingResponse(BaseModel):
    """Returned when results are still being fetched; the client retries later."""

    status: Literal["processing"] = "processing"
    message: str
    request_id: str
    retry_after: int


class StatusResponse(BaseModel):
    status: str
    message: str
