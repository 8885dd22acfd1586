"""Publish flight search jobs to the Celery worker pool."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Protocol

from celery import Celery

if TYPE_CHECKING:
    from wanderwise_core.schemas import SearchRequest

logger = logging.getLogger(__name__)

FIND_FLIGHTS_TASK = "wanderwise_worker.tasks.find_flights"


class JobQueue(Protocol):
    async def publish(self, request: SearchRequest) -> str | None:
        """Hand *request* to the workers; the job id, or *None* on failure."""
        ...


class CeleryJobQueue:
    """:class:`JobQueue` that sends ``find_flights`` tasks by name.

    Only the task name is shared with the worker; there is no reply
    channel, results come back through the flight cache.
    """

    def __init__(self, broker_url: str, queue: str) -> None:
        self._celery = Celery(broker=broker_url)
        self._queue = queue

    def _send(self, request: SearchRequest) -> str:
        result = self._celery.send_task(
            FIND_FLIGHTS_TASK,
            args=[request.to_job()],
            queue=self._queue,
        )
        return result.id  # type: ignore[return-value]

    async def publish(self, request: SearchRequest) -> str | None:
        """Send a job; returns the Celery task id, or *None* on failure."""
        try:
            task_id = await asyncio.to_thread(self._send, request)
        except Exception:
            logger.exception(
                "Failed to publish flight job",
                extra={"request_id": request.request_id},
            )
            return None
        logger.info(
            "Published flight job %s",
            task_id,
            extra={"request_id": request.request_id},
        )
        return task_id
