"""Position, size and color derivation consumed by renderers."""

from .galaxy import calculate_galaxy_position
from .galaxy import calculate_star_color
from .galaxy import calculate_star_size
from .galaxy import calculate_tool_color

__all__ = [
    "calculate_galaxy_position",
    "calculate_star_color",
    "calculate_star_size",
    "calculate_tool_color",
]
