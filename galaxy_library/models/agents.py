"""Agent lifecycle models.

State transitions (driven by AgentLifecycleEngine.advance):
- Spawning: growing in, becomes Idle after the spawn duration
- Idle: pops the next queued action into Moving, or despawns after the idle timeout
- Moving: travels towards a file, returns to Idle on arrival
- Despawning: shrinking out, removed once the despawn duration elapsed
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from dataclasses import field

from .geometry import Color
from .geometry import Vec3

SPAWN_POSITION = Vec3(0.0, 15.0, 0.0)


@dataclass(frozen=True)
class Spawning:
    timer: float = 0.0


@dataclass(frozen=True)
class Idle:
    timer: float = 0.0


@dataclass(frozen=True)
class Moving:
    from_pos: Vec3
    to_pos: Vec3
    progress: float
    target_node: int


@dataclass(frozen=True)
class Despawning:
    timer: float = 0.0


AgentState = Spawning | Idle | Moving | Despawning


def state_name(state: AgentState) -> str:
    """Lower-case variant name, used in snapshots and logs."""
    return type(state).__name__.lower()


@dataclass(frozen=True)
class MoveTo:
    """Queued action: fly to a file star."""

    position: Vec3
    node_index: int


AgentAction = MoveTo


@dataclass
class Agent:
    """One visiting entity per active work session."""

    session_id: str
    color: Color
    event_queue: deque[AgentAction] = field(default_factory=deque)
    state: AgentState = field(default_factory=Spawning)
    position: Vec3 = SPAWN_POSITION
    current_target_file: int | None = None
    current_action: str | None = None
    symbol: str = ""

    @property
    def is_despawning(self) -> bool:
        return isinstance(self.state, Despawning)


@dataclass(frozen=True)
class AgentArrived:
    """Emitted when an agent reaches the file it was moving to."""

    node_index: int
    session_id: str


@dataclass(frozen=True)
class FileEvent:
    """One entry of a file's hover history."""

    tool_name: str
    session_id: str
    timestamp: str | None = None
