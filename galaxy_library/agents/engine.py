"""Agent lifecycle engine.

Turns inbound session/tool-use events into agents and advances every agent's
state machine by simulated time. All mutation happens on the caller's tick;
the engine never blocks and never touches wall-clock time.

Contract:
- Inputs: AgentEvents, tick deltas, a read-only FileSystemModel
- Outputs: Arrival notifications, ids of agents ready for removal
- Side Effects: Mutates the owned AgentRegistry and FileEventHistory
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from queue import Empty
from queue import Queue
from typing import Any

from galaxy_library.filesystem.model import FileSystemModel
from galaxy_library.layout.galaxy import calculate_galaxy_position
from galaxy_library.models.agents import Agent
from galaxy_library.models.agents import AgentAction
from galaxy_library.models.agents import AgentArrived
from galaxy_library.models.agents import Despawning
from galaxy_library.models.agents import FileEvent
from galaxy_library.models.agents import Idle
from galaxy_library.models.agents import MoveTo
from galaxy_library.models.agents import Moving
from galaxy_library.models.agents import Spawning
from galaxy_library.models.events import SessionStart
from galaxy_library.models.events import ToolUse
from galaxy_library.models.geometry import Vec3

from .colors import generate_agent_color
from .history import FileEventHistory
from .motion import ease_in_out_cubic
from .registry import AgentRegistry

logger = logging.getLogger(__name__)

ACTION_VERBS = {
    "Read": "Reading",
    "Write": "Writing",
    "Edit": "Editing",
    "Grep": "Searching",
    "Glob": "Finding",
}
DEFAULT_ACTION_VERB = "Working on"
TASK_VISITS = 5

PositionFn = Callable[[FileSystemModel, int], Vec3]


@dataclass(frozen=True)
class LifecycleTimings:
    """Fixed durations of the agent state machine, in seconds."""

    spawn_duration: float = 0.5
    idle_timeout: float = 5.0
    despawn_duration: float = 0.5
    move_duration: float = 1.2

    @classmethod
    def from_settings(cls, settings: Any) -> LifecycleTimings:
        return cls(
            spawn_duration=settings.spawn_duration,
            idle_timeout=settings.idle_timeout,
            despawn_duration=settings.despawn_duration,
            move_duration=settings.move_duration,
        )


def describe_action(tool_name: str, file_path: str) -> str:
    """Human-readable label such as ``"Reading main.py"``."""
    verb = ACTION_VERBS.get(tool_name, DEFAULT_ACTION_VERB)
    filename = Path(file_path).name or file_path
    return f"{verb} {filename}"


class AgentLifecycleEngine:
    """Owns every agent and drives the four-state lifecycle."""

    def __init__(
        self,
        model: FileSystemModel,
        timings: LifecycleTimings | None = None,
        history: FileEventHistory | None = None,
        position_fn: PositionFn = calculate_galaxy_position,
    ) -> None:
        """Initialize engine.

        Args:
            model: File system model used to resolve tool-use paths (read only)
            timings: State machine durations (defaults if omitted)
            history: Per-file event history to append to
            position_fn: Maps a node index to the position agents fly to
        """
        self.model = model
        self.timings = timings or LifecycleTimings()
        self.history = history if history is not None else FileEventHistory()
        self.position_fn = position_fn
        self.registry = AgentRegistry()

    # --- Inbound events ---

    def handle_event(self, event: SessionStart | ToolUse) -> None:
        if isinstance(event, SessionStart):
            self.handle_session_start(event)
        elif isinstance(event, ToolUse):
            self.handle_tool_use(event)
        else:
            logger.warning(f"Ignoring unknown agent event: {event!r}")

    def process_events(self, events: Queue[Any]) -> int:
        """Handle every queued event without blocking.

        Returns:
            Number of events handled
        """
        handled = 0
        while True:
            try:
                event = events.get_nowait()
            except Empty:
                return handled
            self.handle_event(event)
            handled += 1

    def handle_session_start(self, event: SessionStart) -> Agent:
        agent = self.registry.get(event.session_id)
        if agent is not None:
            if agent.is_despawning:
                logger.info(f"Cancelling despawn for session {event.session_id}")
                agent.state = Idle()
            return agent

        logger.info(f"Spawning agent for session {event.session_id}")
        return self._spawn(event.session_id)

    def handle_tool_use(self, event: ToolUse) -> bool:
        """Queue a visit to the file a tool touched.

        Returns:
            True if a move was queued, False if the path is not in the galaxy
        """
        resolved = self.resolve_path(event.file_path)
        if resolved is None:
            logger.info(f"File not in galaxy, skipping: {event.file_path}")
            return False

        node_index = resolved
        self.history.record(
            node_index,
            FileEvent(tool_name=event.tool_name, session_id=event.session_id, timestamp=event.timestamp),
        )

        action = MoveTo(position=self.position_fn(self.model, node_index), node_index=node_index)
        label = describe_action(event.tool_name, event.file_path)

        agent = self.registry.get(event.session_id)
        if agent is None:
            logger.info(f"Auto-spawning agent for session {event.session_id} (tool_use)")
            agent = self._spawn(event.session_id, deque([action]))
        else:
            if agent.is_despawning:
                logger.info(f"Cancelling despawn for session {event.session_id}")
                agent.state = Idle()
            agent.event_queue.append(action)

        agent.current_action = label
        return True

    def resolve_path(self, file_path: str) -> int | None:
        """Map a tool's file path to a live node index.

        Relative paths resolve against the watched root.
        """
        path = Path(file_path).expanduser()
        if not path.is_absolute():
            root = self.model.root_path
            if root is None:
                return None
            path = root / path
        try:
            path = path.resolve()
        except OSError:
            pass

        found = self.model.get_node_by_path(path)
        if found is None:
            return None
        return found[0]

    def launch_task(self, description: str, visits: int = TASK_VISITS) -> Agent:
        """Start a locally prompted agent touring evenly spaced nodes.

        Args:
            description: What the agent is working on
            visits: Maximum number of nodes to visit

        Returns:
            The new agent, named ``user-agent-N``
        """
        session_id = f"user-agent-{len(self.registry.session_id_order)}"
        live = [index for index, _ in self.model.iter_live()]

        queue: deque[AgentAction] = deque()
        count = min(visits, len(live))
        for i in range(count):
            node_index = live[min(i * len(live) // count, len(live) - 1)]
            queue.append(MoveTo(position=self.position_fn(self.model, node_index), node_index=node_index))

        logger.info(f"Launching {session_id}: {description}")
        agent = self._spawn(session_id, queue)
        agent.current_action = f"Working on: {description}"
        return agent

    def _spawn(self, session_id: str, queue: deque[AgentAction] | None = None) -> Agent:
        agent = Agent(
            session_id=session_id,
            color=generate_agent_color(session_id),
            event_queue=queue if queue is not None else deque(),
            symbol=self.registry.next_symbol(),
        )
        self.registry.register(agent)
        return agent

    # --- Simulation ---

    def advance(self, dt: float) -> list[AgentArrived]:
        """Advance every agent by ``dt`` seconds of simulated time.

        Returns:
            Arrivals that happened during this step, in agent order
        """
        arrivals: list[AgentArrived] = []
        for agent in self.registry:
            arrived = self._step(agent, dt)
            if arrived is not None:
                arrivals.append(arrived)
        return arrivals

    def _step(self, agent: Agent, dt: float) -> AgentArrived | None:
        timings = self.timings
        state = agent.state

        if isinstance(state, Spawning):
            timer = state.timer + dt
            agent.state = Idle() if timer >= timings.spawn_duration else Spawning(timer)

        elif isinstance(state, Idle):
            if agent.event_queue:
                action = agent.event_queue.popleft()
                agent.current_target_file = action.node_index
                agent.state = Moving(
                    from_pos=agent.position,
                    to_pos=action.position,
                    progress=0.0,
                    target_node=action.node_index,
                )
            else:
                timer = state.timer + dt
                if timer >= timings.idle_timeout:
                    logger.info(f"Session {agent.session_id} idle, despawning")
                    agent.state = Despawning()
                    agent.current_action = None
                else:
                    agent.state = Idle(timer)

        elif isinstance(state, Moving):
            progress = state.progress + dt / timings.move_duration
            if progress >= 1.0:
                agent.position = state.to_pos
                agent.current_target_file = state.target_node
                agent.state = Idle()
                return AgentArrived(node_index=state.target_node, session_id=agent.session_id)
            agent.state = Moving(state.from_pos, state.to_pos, progress, state.target_node)
            agent.position = state.from_pos.lerp(state.to_pos, ease_in_out_cubic(progress))

        elif isinstance(state, Despawning):
            agent.state = Despawning(min(state.timer + dt, timings.despawn_duration))

        return None

    def collect_despawned(self) -> list[Agent]:
        """Deregister agents whose despawn animation finished.

        Returns:
            The removed agents
        """
        removed = []
        for agent in self.registry:
            state = agent.state
            if isinstance(state, Despawning) and state.timer >= self.timings.despawn_duration:
                logger.info(f"Despawning agent for session {agent.session_id}")
                self.registry.remove(agent.session_id)
                removed.append(agent)
        return removed
