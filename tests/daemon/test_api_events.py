"""
Tests for the SSE mirror and the fan-out emitter behind it.
"""

import asyncio
import json

import pytest

from galaxy_library.models.events import SessionStart
from galaxy_library.models.events import ToolUse
from galaxyd.main import app
from galaxyd.routers import events as events_module
from galaxyd.routers.events import broadcast_events
from galaxyd.services.broadcast import BroadcastService
from galaxyd.services.broadcast import get_broadcaster
from galaxyd.services.broadcast import server_timestamp
from galaxyd.streaming import EventQueueEmitter


@pytest.mark.unit
class TestEventQueueEmitter:
    """Test per-subscriber queues."""

    async def test_emit_reaches_every_subscriber(self) -> None:
        """Test each queue receives its own copy."""
        emitter = EventQueueEmitter()
        first = emitter.subscribe()
        second = emitter.subscribe()

        await emitter.emit("tool_use", {"session_id": "s1"})

        assert first.get_nowait() == {"event": "tool_use", "data": {"session_id": "s1"}}
        assert second.get_nowait() == {"event": "tool_use", "data": {"session_id": "s1"}}

    async def test_unsubscribed_queue_gets_nothing(self) -> None:
        """Test removal stops delivery and is idempotent."""
        emitter = EventQueueEmitter()
        queue = emitter.subscribe()
        emitter.unsubscribe(queue)
        emitter.unsubscribe(queue)

        await emitter.emit("session_start", {})

        assert queue.empty()
        assert emitter.subscriber_count == 0

    async def test_slow_subscriber_does_not_block(self) -> None:
        """Test an unread queue keeps growing while others drain."""
        emitter = EventQueueEmitter()
        slow = emitter.subscribe()
        fast = emitter.subscribe()

        for i in range(100):
            await emitter.emit("tool_use", {"n": i})
            assert (await asyncio.wait_for(fast.get(), timeout=1.0))["data"]["n"] == i

        assert slow.qsize() == 100


@pytest.mark.unit
class TestBroadcastService:
    """Test the singleton broadcast channel."""

    def test_singleton(self) -> None:
        """Test get_broadcaster always returns the same emitter."""
        assert get_broadcaster() is get_broadcaster()
        assert BroadcastService.get_instance() is get_broadcaster()

    async def test_publish_stamps_server_time(self) -> None:
        """Test the server timestamp replaces any client-supplied one."""
        queue = BroadcastService.subscribe()

        payload = await BroadcastService.publish(SessionStart(session_id="s1", timestamp="1999-01-01T00:00:00Z"))

        assert payload["timestamp"] != "1999-01-01T00:00:00Z"
        assert payload["timestamp"].endswith("Z")
        assert queue.get_nowait() == {"event": "session_start", "data": payload}

    def test_server_timestamp_format(self) -> None:
        """Test RFC 3339 with milliseconds and a Z suffix."""
        stamp = server_timestamp()

        assert stamp.endswith("Z")
        assert "T" in stamp
        assert len(stamp.split(".")[1]) == 4


@pytest.mark.unit
class TestSSEStream:
    """Test the SSE mirror of the broadcast channel."""

    async def test_connected_then_broadcasts(self) -> None:
        """Test the first frame is connected and broadcasts follow with their type as name."""
        emitter = get_broadcaster()
        stream = broadcast_events(emitter)

        first = await anext(stream)
        assert first.event == "connected"
        assert "timestamp" in json.loads(first.data)
        assert emitter.subscriber_count == 1

        payload = await BroadcastService.publish(ToolUse(session_id="s1", tool_name="Read", file_path="/repo/a.py"))
        frame = await asyncio.wait_for(anext(stream), timeout=1.0)

        assert frame.event == "tool_use"
        assert json.loads(frame.data) == payload
        await stream.aclose()

    async def test_close_unsubscribes(self) -> None:
        """Test a closed stream leaves the broadcast channel."""
        emitter = get_broadcaster()
        stream = broadcast_events(emitter)
        await anext(stream)

        await stream.aclose()

        assert emitter.subscriber_count == 0

    async def test_keepalive_while_quiet(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a quiet channel produces keepalive frames."""
        monkeypatch.setattr(events_module, "KEEPALIVE_SECONDS", 0.01)
        stream = broadcast_events(get_broadcaster())
        await anext(stream)

        frame = await asyncio.wait_for(anext(stream), timeout=1.0)

        assert frame.event == "keepalive"
        await stream.aclose()

    def test_route_in_openapi(self) -> None:
        """Test /api/v1/events is served by the app."""
        assert "/api/v1/events" in app.openapi()["paths"]
