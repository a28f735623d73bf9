"""Galaxy library layer.

Headless core of the file system galaxy: an index-stable mirror of a watched
directory and the agents that fly between its files.

Public Interface:
    Modules:
    - storage: Home and config directory resolution
    - config: Settings loading
    - models: Shared data structures and agent event wire models
    - filesystem: File system model, watcher and gitignore reconciliation
    - layout: Star positions, sizes and colors
    - agents: Agent lifecycle engine and arrival consumers
    - events: WebSocket client for the agent-event stream
    - runtime: Tick driver that owns everything above
"""

from .filesystem import FileSystemModel
from .filesystem import FileSystemState
from .models import AgentEvent
from .models import FileNode

__all__ = [
    "AgentEvent",
    "FileNode",
    "FileSystemModel",
    "FileSystemState",
]
