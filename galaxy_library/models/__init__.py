"""Shared data structures for the galaxy core."""

from .agents import Agent
from .agents import AgentAction
from .agents import AgentArrived
from .agents import AgentState
from .agents import Despawning
from .agents import FileEvent
from .agents import Idle
from .agents import MoveTo
from .agents import Moving
from .agents import Spawning
from .events import AgentEvent
from .events import SessionStart
from .events import ToolUse
from .events import parse_agent_event
from .filesystem import FileCreated
from .filesystem import FileDeleted
from .filesystem import FileModified
from .filesystem import FileNode
from .filesystem import FileSystemEvent
from .geometry import Color
from .geometry import Vec3

__all__ = [
    "Agent",
    "AgentAction",
    "AgentArrived",
    "AgentEvent",
    "AgentState",
    "Color",
    "Despawning",
    "FileCreated",
    "FileDeleted",
    "FileEvent",
    "FileModified",
    "FileNode",
    "FileSystemEvent",
    "Idle",
    "MoveTo",
    "Moving",
    "SessionStart",
    "Spawning",
    "ToolUse",
    "Vec3",
    "parse_agent_event",
]
