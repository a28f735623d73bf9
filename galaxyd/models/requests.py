"""Request models for the hook endpoints.

Bodies mirror what coding-agent hooks post: a session id plus either session
metadata or the tool name and its input.
"""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class SessionStartPayload(BaseModel):
    """Body of ``POST /session-start``."""

    model_config = ConfigDict(extra="ignore")

    session_id: str = Field(min_length=1)
    cwd: str = ""
    model: str = ""


class ToolInput(BaseModel):
    """The part of a tool's input the galaxy cares about."""

    model_config = ConfigDict(extra="ignore")

    file_path: str = Field(min_length=1)


class ToolUsePayload(BaseModel):
    """Body of ``POST /read``, ``/write``, ``/edit`` and ``/tool-use``."""

    model_config = ConfigDict(extra="ignore")

    session_id: str = Field(min_length=1)
    tool_name: str = Field(min_length=1)
    tool_input: ToolInput
    reason: str | None = None


class BroadcastResponse(BaseModel):
    """Acknowledgement returned by every hook endpoint."""

    status: str = "ok"
    subscribers: int = Field(description="Subscribers the event was delivered to")
