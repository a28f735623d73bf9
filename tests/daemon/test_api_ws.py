"""
Integration tests for the WebSocket broadcast endpoint.
"""

import pytest
from fastapi.testclient import TestClient

from galaxy_library.models.events import SessionStart
from galaxy_library.models.events import ToolUse
from galaxy_library.models.events import parse_agent_event
from galaxyd.main import app
from galaxyd.services.broadcast import get_broadcaster


@pytest.mark.integration
class TestWebSocketStream:
    """Test fan-out to WebSocket subscribers."""

    def test_subscriber_receives_posted_event(self) -> None:
        """Test a hook POST arrives as one JSON frame."""
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                response = client.post(
                    "/edit",
                    json={"session_id": "s1", "tool_name": "Edit", "tool_input": {"file_path": "/repo/a.py"}},
                )
                assert response.json()["subscribers"] == 1

                frame = ws.receive_json()

        assert frame["type"] == "tool_use"
        assert frame["tool_name"] == "Edit"
        assert frame["file_path"] == "/repo/a.py"
        assert frame["timestamp"].endswith("Z")

    def test_every_subscriber_gets_every_event(self) -> None:
        """Test two subscribers both receive the same events in order."""
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
                client.post("/session-start", json={"session_id": "s1"})
                client.post("/read", json={"session_id": "s1", "tool_name": "Read", "tool_input": {"file_path": "b"}})

                frames = [
                    [first.receive_text(), first.receive_text()],
                    [second.receive_text(), second.receive_text()],
                ]

        for received in frames:
            events = [parse_agent_event(raw) for raw in received]
            assert isinstance(events[0], SessionStart)
            assert isinstance(events[1], ToolUse)

    def test_disconnect_unsubscribes(self) -> None:
        """Test a closed socket leaves the broadcast channel."""
        with TestClient(app) as client:
            with client.websocket_connect("/ws"):
                assert client.get("/health").json()["subscribers"] == 1

            for _ in range(50):
                if get_broadcaster().subscriber_count == 0:
                    break
                client.get("/health")

            assert client.get("/health").json()["subscribers"] == 0
