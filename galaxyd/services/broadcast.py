"""Broadcast service for agent events.

This service provides a singleton EventQueueEmitter that every WebSocket and
SSE subscriber reads from. Publishing stamps each event with the server time.
"""

import asyncio
from datetime import UTC
from datetime import datetime
from typing import Any

from galaxy_library.models.events import SessionStart
from galaxy_library.models.events import ToolUse

from ..streaming import EventQueueEmitter


def server_timestamp() -> str:
    """Current UTC time as RFC 3339 with a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BroadcastService:
    """Singleton service for agent event fan-out."""

    _instance: EventQueueEmitter | None = None

    @classmethod
    def get_instance(cls) -> EventQueueEmitter:
        """Get the singleton EventQueueEmitter instance."""
        if cls._instance is None:
            cls._instance = EventQueueEmitter()
        return cls._instance

    @classmethod
    async def publish(cls, event: SessionStart | ToolUse) -> dict[str, Any]:
        """Timestamp an event and emit it to all subscribers.

        Args:
            event: The event to broadcast

        Returns:
            The JSON payload that was broadcast
        """
        stamped = event.model_copy(update={"timestamp": server_timestamp()})
        payload = stamped.model_dump(mode="json", exclude_none=True)
        await cls.get_instance().emit(stamped.type, payload)
        return payload

    @classmethod
    def subscribe(cls) -> asyncio.Queue:
        """Subscribe to the event stream.

        Returns:
            A queue that will receive all broadcast events
        """
        return cls.get_instance().subscribe()

    @classmethod
    def unsubscribe(cls, queue: asyncio.Queue) -> None:
        cls.get_instance().unsubscribe(queue)


def get_broadcaster() -> EventQueueEmitter:
    """Convenience function for dependency injection.

    Returns:
        The singleton EventQueueEmitter instance
    """
    return BroadcastService.get_instance()
