"""galaxyd: fan-out service for coding-agent activity.

Accepts session-start and tool-use notifications from coding-agent hooks and
rebroadcasts them, timestamped, to every WebSocket and SSE subscriber.
"""

__version__ = "0.1.0"
