"""Agent lifecycle: registry, state machine, motion and arrival feedback."""

from .colors import generate_agent_color
from .colors import hsl_to_rgb
from .engine import AgentLifecycleEngine
from .engine import LifecycleTimings
from .engine import describe_action
from .feedback import FileStats
from .feedback import HighlightTracker
from .history import FileEventHistory
from .history import format_event_time
from .motion import AGENT_SCALE
from .motion import agent_pose
from .motion import ease_in_out_cubic
from .registry import AgentRegistry

__all__ = [
    "AGENT_SCALE",
    "AgentLifecycleEngine",
    "AgentRegistry",
    "FileEventHistory",
    "FileStats",
    "HighlightTracker",
    "LifecycleTimings",
    "agent_pose",
    "describe_action",
    "ease_in_out_cubic",
    "format_event_time",
    "generate_agent_color",
    "hsl_to_rgb",
]
