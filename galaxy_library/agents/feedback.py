"""Arrival consumers: star highlights and visit statistics.

Both only read the arrivals a tick produced; neither reaches into agent or
model internals.
"""

from collections import Counter
from pathlib import Path

from galaxy_library.models.agents import AgentArrived

HIGHLIGHT_INTENSITY = 6.0
HIGHLIGHT_DECAY_PER_SECOND = 1.5
BASE_EMISSIVE = 2.0
TOP_FILES = 6


class HighlightTracker:
    """Glow intensity per node, set on arrival and fading over time."""

    def __init__(self, intensity: float = HIGHLIGHT_INTENSITY, decay_per_second: float = HIGHLIGHT_DECAY_PER_SECOND):
        self.intensity = intensity
        self.decay_per_second = decay_per_second
        self._active: dict[int, float] = {}

    def on_arrivals(self, arrivals: list[AgentArrived]) -> None:
        for arrival in arrivals:
            self._active[arrival.node_index] = self.intensity

    def decay(self, dt: float) -> None:
        """Fade every highlight, dropping those that reached zero."""
        for node_index in list(self._active):
            remaining = self._active[node_index] - self.decay_per_second * dt
            if remaining <= 0.0:
                del self._active[node_index]
            else:
                self._active[node_index] = remaining

    def get(self, node_index: int) -> float:
        return self._active.get(node_index, 0.0)

    def emissive_strength(self, node_index: int) -> float:
        """Emissive multiplier for a star: base glow plus highlight."""
        return BASE_EMISSIVE + self.get(node_index)

    def forget(self, node_index: int) -> None:
        self._active.pop(node_index, None)

    @property
    def active(self) -> dict[int, float]:
        return dict(self._active)


class FileStats:
    """Visit counts per file path."""

    def __init__(self) -> None:
        self.visits: Counter[Path] = Counter()

    def record(self, path: Path) -> None:
        self.visits[path] += 1

    def top(self, n: int = TOP_FILES) -> list[tuple[Path, int]]:
        """Most visited paths, highest count first."""
        return self.visits.most_common(n)
