"""Interpolation of agent position and scale for renderers."""

from galaxy_library.models.agents import Agent
from galaxy_library.models.agents import Despawning
from galaxy_library.models.agents import Moving
from galaxy_library.models.agents import Spawning
from galaxy_library.models.geometry import Vec3

AGENT_SCALE = 100.0


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 3 / 2.0


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def agent_pose(
    agent: Agent,
    spawn_duration: float = 0.5,
    despawn_duration: float = 0.5,
) -> tuple[Vec3, float]:
    """Compute where an agent is drawn and how large.

    Args:
        agent: Agent to pose
        spawn_duration: Seconds of the grow-in animation
        despawn_duration: Seconds of the shrink-out animation

    Returns:
        Tuple of (position, uniform scale)
    """
    state = agent.state
    if isinstance(state, Spawning):
        return agent.position, ease_in_out_cubic(_clamp01(state.timer / spawn_duration)) * AGENT_SCALE
    if isinstance(state, Moving):
        t = ease_in_out_cubic(_clamp01(state.progress))
        return state.from_pos.lerp(state.to_pos, t), AGENT_SCALE
    if isinstance(state, Despawning):
        eased = ease_in_out_cubic(_clamp01(state.timer / despawn_duration))
        return agent.position, (1.0 - eased) * AGENT_SCALE
    return agent.position, AGENT_SCALE
