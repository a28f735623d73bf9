"""Tick driver that owns the galaxy core."""

from .driver import GalaxyRuntime
from .driver import TickResult

__all__ = ["GalaxyRuntime", "TickResult"]
