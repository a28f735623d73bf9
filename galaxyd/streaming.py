"""Fan-out utilities for galaxyd.

Every WebSocket or SSE subscriber owns one queue; emitting an event puts it on
all of them so a slow subscriber never blocks the others.
"""

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)


class EventQueueEmitter:
    """Emitter that queues events for async consumption.

    Allows multiple subscribers to receive every emitted event.
    Each subscriber gets their own unbounded queue to prevent blocking.
    """

    def __init__(self: "EventQueueEmitter") -> None:
        self.queues: list[asyncio.Queue[dict[str, Any]]] = []
        self._lock = asyncio.Lock()

    @property
    def subscriber_count(self) -> int:
        return len(self.queues)

    def subscribe(self: "EventQueueEmitter") -> asyncio.Queue[dict[str, Any]]:
        """Create new subscriber queue.

        Returns:
            asyncio.Queue that will receive all emitted events
        """
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.queues.append(queue)
        logger.debug(f"Subscriber added ({len(self.queues)} total)")
        return queue

    async def emit(self: "EventQueueEmitter", event_type: str, data: dict[str, Any]) -> None:
        """Emit event to all subscriber queues.

        Args:
            event_type: Event type identifier (e.g., "tool_use")
            data: Event payload
        """
        event = {"event": event_type, "data": data}
        async with self._lock:
            for queue in list(self.queues):
                try:
                    queue.put_nowait(event)
                except Exception as e:
                    logger.error(f"Failed to emit event to queue: {e}")

    def unsubscribe(self: "EventQueueEmitter", queue: asyncio.Queue[dict[str, Any]]) -> None:
        """Remove subscriber queue.

        Args:
            queue: Queue to remove
        """
        if queue in self.queues:
            self.queues.remove(queue)
            logger.debug(f"Subscriber removed ({len(self.queues)} left)")
