"""Progress events published by the worker."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class ProgressEvent(BaseModel):
    """Human-readable status update for one request.

    ``terminal`` marks the last event a job emits (stored, empty, cached
    or failed) so observers know when to stop listening.
    """

    request_id: str
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    terminal: bool = False
