"""WebSocket relay of per-request progress events."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from wanderwise_api.dependencies import get_progress_channel
from wanderwise_core.errors import CacheUnavailableError
from wanderwise_core.progress import ProgressChannel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["progress"])

ProgressDep = Annotated[ProgressChannel, Depends(get_progress_channel)]


async def _relay(websocket: WebSocket, channel: ProgressChannel, request_id: str) -> None:
    async for event in channel.subscribe(request_id):
        await websocket.send_json(event.model_dump(mode="json"))


async def _watch_disconnect(websocket: WebSocket) -> None:
    # Client messages are ignored; reading is how a disconnect is noticed.
    while True:
        await websocket.receive_text()


@router.websocket("/progress/{request_id}")
async def progress_stream(
    websocket: WebSocket, request_id: str, channel: ProgressDep
) -> None:
    """Forward events until the job reports a terminal one, then close.

    Subscribe here before posting the search with the same ``requestId``;
    events published earlier are not replayed.
    """
    await websocket.accept()
    relay = asyncio.create_task(_relay(websocket, channel, request_id))
    watcher = asyncio.create_task(_watch_disconnect(websocket))
    done, pending = await asyncio.wait(
        {relay, watcher}, return_when=asyncio.FIRST_COMPLETED
    )
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)

    if watcher in done:
        exc = watcher.exception()
        if isinstance(exc, WebSocketDisconnect):
            logger.info("Progress client left", extra={"request_id": request_id})
            return
        raise exc  # type: ignore[misc]

    exc = relay.exception()
    if isinstance(exc, CacheUnavailableError):
        logger.error(
            "Progress stream failed: %s", exc, extra={"request_id": request_id}
        )
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return
    if exc is not None:
        raise exc
    await websocket.close()
