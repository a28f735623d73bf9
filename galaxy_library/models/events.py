"""Agent event wire models.

These are the messages the fan-out service broadcasts on its WebSocket and SSE
streams and the core consumes from its event queue. Events are tagged by the
``type`` field.
"""

from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import TypeAdapter


class BaseAgentEvent(BaseModel):
    """Fields common to every agent event."""

    model_config = ConfigDict(extra="ignore")

    session_id: str = Field(min_length=1, description="Externally supplied session identifier")
    timestamp: str | None = Field(default=None, description="RFC 3339 time assigned by the fan-out service")


class SessionStart(BaseAgentEvent):
    """Emitted when a coding-agent session begins."""

    type: Literal["session_start"] = "session_start"
    cwd: str = ""
    model: str = ""


class ToolUse(BaseAgentEvent):
    """Emitted when a session is about to use a tool on a file."""

    type: Literal["tool_use"] = "tool_use"
    tool_name: str
    file_path: str
    reason: str | None = Field(default=None, description="Optional human-readable intent")


AgentEvent = Annotated[SessionStart | ToolUse, Field(discriminator="type")]

_agent_event_adapter: TypeAdapter[SessionStart | ToolUse] = TypeAdapter(AgentEvent)


def parse_agent_event(raw: str | bytes) -> SessionStart | ToolUse:
    """Parse one JSON document into an agent event.

    Args:
        raw: JSON text as received from the stream

    Returns:
        The SessionStart or ToolUse variant named by ``type``

    Raises:
        pydantic.ValidationError: If the JSON is malformed or the type is unknown
    """
    return _agent_event_adapter.validate_json(raw)
