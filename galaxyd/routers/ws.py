"""WebSocket broadcast endpoint.

Each connected client receives every broadcast event as one JSON text frame.
Frames sent by the client are read and discarded so the connection stays
healthy.
"""

import asyncio
import json
import logging
import uuid

from fastapi import APIRouter
from fastapi import WebSocket
from fastapi import WebSocketDisconnect

from ..services.broadcast import BroadcastService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stream"])


async def _forward_events(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        event = await queue.get()
        await websocket.send_text(json.dumps(event["data"]))


async def _drain_incoming(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/ws")
async def websocket_stream(websocket: WebSocket) -> None:
    """Stream broadcast events to one WebSocket subscriber.

    Connection lifecycle:
    - Connect: Accepts and subscribes to the broadcast channel
    - Disconnect or send failure: Unsubscribes; other subscribers are unaffected
    """
    connection_id = uuid.uuid4().hex[:8]
    await websocket.accept()
    queue = BroadcastService.subscribe()
    logger.info(f"WebSocket subscriber connected: {connection_id}")

    sender = asyncio.create_task(_forward_events(websocket, queue))
    receiver = asyncio.create_task(_drain_incoming(websocket))
    try:
        done, pending = await asyncio.wait({sender, receiver}, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        for task in done:
            exc = task.exception()
            if exc is not None and not isinstance(exc, WebSocketDisconnect):
                logger.warning(f"WebSocket subscriber {connection_id} failed: {exc}")
    finally:
        for task in (sender, receiver):
            if not task.done():
                task.cancel()
        BroadcastService.unsubscribe(queue)
        logger.info(f"WebSocket subscriber disconnected: {connection_id}")
