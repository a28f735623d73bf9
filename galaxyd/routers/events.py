"""SSE mirror of the broadcast stream.

Serves the same events as ``/ws`` for clients that prefer Server-Sent Events.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from datetime import UTC
from datetime import datetime

from fastapi import APIRouter
from sse_starlette import ServerSentEvent
from sse_starlette.sse import EventSourceResponse

from ..services.broadcast import get_broadcaster
from ..streaming import EventQueueEmitter

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/events", tags=["events"])

KEEPALIVE_SECONDS = 30.0


async def broadcast_events(emitter: EventQueueEmitter) -> AsyncIterator[ServerSentEvent]:
    """Generate SSE events from the broadcast channel.

    Subscribes on first iteration and unsubscribes when the generator is
    closed or cancelled.

    Args:
        emitter: Broadcast channel to read from

    Yields:
        ``connected`` once, then one event per broadcast (event name = type),
        with ``keepalive`` events while the channel is quiet
    """
    queue = emitter.subscribe()

    try:
        yield ServerSentEvent(
            data=json.dumps({"timestamp": datetime.now(UTC).isoformat()}),
            event="connected",
        )

        logger.info("SSE stream connected")

        while True:
            try:
                # Wait for events with timeout (allows keepalive + cancellation)
                event = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                yield ServerSentEvent(
                    data=json.dumps(event["data"]),
                    event=event["event"],
                )

            except TimeoutError:
                yield ServerSentEvent(
                    data=json.dumps({"timestamp": datetime.now(UTC).isoformat()}),
                    event="keepalive",
                )

    except asyncio.CancelledError:
        # Client disconnected (normal)
        logger.info("SSE stream disconnected")

    except Exception as e:
        logger.error(f"SSE stream error: {e}")
        yield ServerSentEvent(
            data=json.dumps({"error": str(e), "timestamp": datetime.now(UTC).isoformat()}),
            event="error",
        )

    finally:
        emitter.unsubscribe(queue)
        logger.info("Unsubscribed from broadcast channel")


@router.get("")
async def event_stream() -> EventSourceResponse:
    """SSE stream of agent events.

    Connection lifecycle:
    - Connect: Subscribes to the broadcast channel
    - Disconnect: Unsubscribes from it

    Returns:
        SSE EventSourceResponse streaming agent events

    Events:
        - connected: Initial connection established
        - keepalive: Periodic heartbeat (every 30s)
        - session_start: A session began
        - tool_use: A session used a tool on a file
        - error: Stream error occurred
    """
    return EventSourceResponse(broadcast_events(get_broadcaster()))
