"""Report job progress to whoever is watching the request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from wanderwise_core.schemas import ProgressEvent


class ProgressPublisher(Protocol):
    async def publish(
        self, request_id: str, message: str, *, terminal: bool = False
    ) -> ProgressEvent: ...


class JobReporter:
    """Publishes progress events for one request id."""

    def __init__(self, publisher: ProgressPublisher, request_id: str) -> None:
        self._publisher = publisher
        self.request_id = request_id

    async def report(self, message: str) -> None:
        await self._publisher.publish(self.request_id, message)

    async def finish(self, message: str) -> None:
        """Publish the job's terminal event."""
        await self._publisher.publish(self.request_id, message, terminal=True)
