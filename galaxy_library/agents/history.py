"""Per-file tool-use history shown when hovering a star."""

import logging
from collections import deque
from datetime import datetime

from galaxy_library.models.agents import FileEvent

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10


class FileEventHistory:
    """Bounded, oldest-first event list per node index."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self.limit = limit
        self._events: dict[int, deque[FileEvent]] = {}

    def record(self, node_index: int, event: FileEvent) -> None:
        """Append an event, dropping the oldest once the limit is exceeded."""
        events = self._events.get(node_index)
        if events is None:
            events = deque(maxlen=self.limit)
            self._events[node_index] = events
        events.append(event)

    def get(self, node_index: int) -> list[FileEvent]:
        return list(self._events.get(node_index, ()))

    def forget(self, node_index: int) -> None:
        """Drop all history of a removed node."""
        self._events.pop(node_index, None)

    def __len__(self) -> int:
        return len(self._events)


def format_event_time(timestamp: str | None) -> str:
    """Extract ``HH:MM:SS`` from an RFC 3339 timestamp.

    Unparseable or missing timestamps render as ``"--:--:--"``.

    Example:
        >>> format_event_time("2024-01-15T10:30:45.123Z")
        '10:30:45'
    """
    if not timestamp:
        return "--:--:--"
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparseable event timestamp: {timestamp}")
        return "--:--:--"
    return parsed.strftime("%H:%M:%S")
