"""WebSocket client for the agent-event stream.

Runs its own asyncio loop on a daemon thread, parses each text frame into an
AgentEvent and hands it to the tick driver through an unbounded queue. The
connection is re-established with exponential backoff whenever it drops.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from queue import Queue

import websockets
from pydantic import ValidationError

from galaxy_library.models.events import SessionStart
from galaxy_library.models.events import ToolUse
from galaxy_library.models.events import parse_agent_event

logger = logging.getLogger(__name__)


def next_backoff(current: float, maximum: float) -> float:
    """Double a reconnect delay, capped at ``maximum``."""
    return min(current * 2.0, maximum)


class AgentEventClient:
    """Background consumer of the fan-out service's ``/ws`` stream."""

    def __init__(
        self,
        url: str,
        events: Queue[SessionStart | ToolUse] | None = None,
        reconnect_delay: float = 2.0,
        max_reconnect_delay: float = 30.0,
    ) -> None:
        """Initialize client.

        Args:
            url: WebSocket URL, e.g. ``ws://127.0.0.1:8080/ws``
            events: Queue to publish parsed events into (new queue if omitted)
            reconnect_delay: First delay after a failed or dropped connection
            max_reconnect_delay: Upper bound for the backoff
        """
        self.url = url
        self.events: Queue[SessionStart | ToolUse] = events if events is not None else Queue()
        self.reconnect_delay = reconnect_delay
        self.max_reconnect_delay = max_reconnect_delay
        self._running = False
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    def handle_message(self, raw: str | bytes) -> bool:
        """Parse one frame and queue it.

        Returns:
            True if the frame was a valid agent event
        """
        try:
            event = parse_agent_event(raw)
        except ValidationError as e:
            logger.warning(f"Failed to parse agent event: {e.error_count()} validation error(s)")
            logger.debug(f"Rejected frame: {raw!r}")
            return False
        self.events.put(event)
        return True

    async def listen(self) -> None:
        """Connect, consume and reconnect until stopped."""
        delay = self.reconnect_delay
        while self._running:
            try:
                async with websockets.connect(self.url) as ws:
                    logger.info(f"Connected to {self.url}")
                    delay = self.reconnect_delay
                    async for raw in ws:
                        self.handle_message(raw)
                logger.info("WebSocket closed by server")
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"WebSocket connection failed: {e}")

            if not self._running:
                return
            logger.info(f"Reconnecting in {delay:.1f}s...")
            await asyncio.sleep(delay)
            delay = next_backoff(delay, self.max_reconnect_delay)

    def _run(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        self._task = self._loop.create_task(self.listen())
        try:
            self._loop.run_until_complete(self._task)
        except asyncio.CancelledError:
            pass
        finally:
            self._loop.close()
            self._loop = None

    def start(self) -> None:
        """Start the background thread."""
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(target=self._run, name="galaxy-ws-client", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        """Cancel the listener and wait for the thread to exit."""
        if not self._running:
            return
        self._running = False
        loop = self._loop
        task = self._task
        if loop is not None and task is not None and not loop.is_closed():
            loop.call_soon_threadsafe(task.cancel)
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info("Agent event client stopped")
