"""Single-owner tick driver for the galaxy core.

Each tick drains the filesystem and agent-event queues, advances the agent
lifecycle, removes finished agents and feeds arrivals to the highlight and
statistics consumers. Nothing else mutates the model or the agents.

Contract:
- Inputs: Watch events and agent events (via queues), tick deltas
- Outputs: TickResult per tick, plain-data snapshots for renderers
- Side Effects: Starts/stops the watcher and event client threads it owns
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from dataclasses import field
from queue import Queue
from typing import Any

from galaxy_library.agents.engine import AgentLifecycleEngine
from galaxy_library.agents.engine import LifecycleTimings
from galaxy_library.agents.feedback import FileStats
from galaxy_library.agents.feedback import HighlightTracker
from galaxy_library.agents.history import FileEventHistory
from galaxy_library.agents.history import format_event_time
from galaxy_library.agents.motion import agent_pose
from galaxy_library.config.settings import GalaxySettings
from galaxy_library.events.client import AgentEventClient
from galaxy_library.filesystem.model import FileSystemModel
from galaxy_library.filesystem.sync import FileSystemState
from galaxy_library.filesystem.sync import FileSystemUpdate
from galaxy_library.filesystem.watcher import PollingFileWatcher
from galaxy_library.models.agents import Agent
from galaxy_library.models.agents import AgentArrived
from galaxy_library.models.agents import state_name

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """What one tick changed."""

    fs_update: FileSystemUpdate = field(default_factory=FileSystemUpdate)
    events_handled: int = 0
    arrivals: list[AgentArrived] = field(default_factory=list)
    despawned: list[Agent] = field(default_factory=list)


class GalaxyRuntime:
    """Owns the model, the agents and their consumers."""

    def __init__(
        self,
        fs_state: FileSystemState,
        agent_events: Queue[Any] | None = None,
        timings: LifecycleTimings | None = None,
        history_limit: int = 10,
    ) -> None:
        """Initialize runtime.

        Args:
            fs_state: Model plus its watch-event queue
            agent_events: Queue of parsed agent events
            timings: Lifecycle durations
            history_limit: Events kept per file
        """
        self.fs_state = fs_state
        self.agent_events: Queue[Any] = agent_events if agent_events is not None else Queue()
        self.history = FileEventHistory(limit=history_limit)
        self.engine = AgentLifecycleEngine(fs_state.model, timings=timings, history=self.history)
        self.highlights = HighlightTracker()
        self.stats = FileStats()
        self.watcher: PollingFileWatcher | None = None
        self.client: AgentEventClient | None = None
        self.ticks = 0

    @classmethod
    def from_settings(cls, settings: GalaxySettings) -> GalaxyRuntime:
        """Build a runtime wired to a polling watcher and a WebSocket client.

        Nothing is started until ``start()``.
        """
        watcher = PollingFileWatcher(settings.watch_path, interval_seconds=settings.poll_interval_seconds)
        # Baseline before the build so nothing created in between is missed
        watcher.baseline()
        fs_state = FileSystemState.open(settings.watch_path, events=watcher.events)
        client = AgentEventClient(
            settings.server_url,
            reconnect_delay=settings.reconnect_delay_seconds,
            max_reconnect_delay=settings.reconnect_max_delay_seconds,
        )
        runtime = cls(
            fs_state,
            agent_events=client.events,
            timings=LifecycleTimings.from_settings(settings),
            history_limit=settings.history_limit,
        )
        runtime.watcher = watcher
        runtime.client = client
        return runtime

    @property
    def model(self) -> FileSystemModel:
        return self.fs_state.model

    def tick(self, dt: float) -> TickResult:
        """Advance the whole core by ``dt`` seconds."""
        result = TickResult()

        result.fs_update = self.fs_state.drain()
        for index in result.fs_update.removed:
            self.history.forget(index)
            self.highlights.forget(index)

        result.events_handled = self.engine.process_events(self.agent_events)
        # Arrivals at stars removed this tick are dropped
        result.arrivals = [
            arrival for arrival in self.engine.advance(dt) if self.model.get_node(arrival.node_index) is not None
        ]
        result.despawned = self.engine.collect_despawned()

        self.highlights.on_arrivals(result.arrivals)
        for arrival in result.arrivals:
            self.stats.record(self.model.get_node(arrival.node_index).path)
        self.highlights.decay(dt)

        self.ticks += 1
        return result

    def describe_node(self, node_index: int) -> dict[str, Any] | None:
        """Hover detail for one star: path, kind and recent tool uses."""
        node = self.model.get_node(node_index)
        if node is None:
            return None
        return {
            "index": node_index,
            "path": str(node.path),
            "name": node.name,
            "is_dir": node.is_dir,
            "history": [
                {"time": format_event_time(e.timestamp), "tool_name": e.tool_name, "session_id": e.session_id}
                for e in self.history.get(node_index)
            ],
        }

    def snapshot(self) -> dict[str, Any]:
        """Current state as plain data for a renderer or a log line."""
        timings = self.engine.timings
        agents = []
        for agent in self.engine.registry:
            position, scale = agent_pose(agent, timings.spawn_duration, timings.despawn_duration)
            agents.append(
                {
                    "session_id": agent.session_id,
                    "symbol": agent.symbol,
                    "color": agent.color.to_hex(),
                    "state": state_name(agent.state),
                    "position": tuple(position),
                    "scale": scale,
                    "current_target_file": agent.current_target_file,
                    "current_action": agent.current_action,
                    "queued": len(agent.event_queue),
                }
            )
        return {
            "tick": self.ticks,
            "nodes": self.model.live_count(),
            "agents": agents,
            "highlights": self.highlights.active,
            "top_files": [(str(path), count) for path, count in self.stats.top()],
        }

    def start(self) -> None:
        if self.watcher is not None:
            self.watcher.start()
        if self.client is not None:
            self.client.start()

    def stop(self) -> None:
        if self.client is not None:
            self.client.stop()
        if self.watcher is not None:
            self.watcher.stop()

    def run(self, tick_rate: int = 60, stop_event: threading.Event | None = None, max_ticks: int | None = None) -> None:
        """Drive ticks at a fixed rate until stopped.

        Args:
            tick_rate: Ticks per second
            stop_event: Set from another thread to stop
            max_ticks: Stop after this many ticks (None = unbounded)
        """
        stop_event = stop_event or threading.Event()
        interval = 1.0 / tick_rate
        last = time.monotonic()
        ran = 0
        while not stop_event.is_set():
            if max_ticks is not None and ran >= max_ticks:
                break
            now = time.monotonic()
            result = self.tick(now - last)
            last = now
            ran += 1
            for arrival in result.arrivals:
                node = self.model.get_node(arrival.node_index)
                logger.info(f"{arrival.session_id} arrived at {node.name if node else arrival.node_index}")
            stop_event.wait(interval)
