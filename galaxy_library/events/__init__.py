"""Agent-event source client."""

from .client import AgentEventClient
from .client import next_backoff

__all__ = ["AgentEventClient", "next_backoff"]
