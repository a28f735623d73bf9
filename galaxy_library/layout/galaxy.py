"""Galaxy layout: where each file star sits, how big it is, what color.

Pure functions over the file system model. Directories wind outwards on a
golden-angle spiral by depth; files cluster just below their directory.
"""

import math

from galaxy_library.filesystem.model import FileSystemModel
from galaxy_library.models.filesystem import FileNode
from galaxy_library.models.geometry import ORIGIN
from galaxy_library.models.geometry import Color
from galaxy_library.models.geometry import Vec3

GOLDEN_RATIO = 1.618033988749

DIRECTORY_COLOR = Color(1.0, 0.95, 0.7)
DEFAULT_FILE_COLOR = Color(0.9, 0.8, 0.95)

EXTENSION_COLORS: dict[str, Color] = {
    "rs": Color(1.0, 0.75, 0.6),
    "toml": Color(1.0, 0.95, 0.6),
    "yaml": Color(1.0, 0.95, 0.6),
    "yml": Color(1.0, 0.95, 0.6),
    "json": Color(1.0, 0.95, 0.6),
    "md": Color(0.9, 0.8, 1.0),
    "txt": Color(0.9, 0.8, 1.0),
    "js": Color(1.0, 0.98, 0.7),
    "ts": Color(1.0, 0.98, 0.7),
    "py": Color(0.7, 0.85, 1.0),
    "html": Color(1.0, 0.7, 0.85),
    "css": Color(1.0, 0.7, 0.85),
    "java": Color(0.85, 0.75, 1.0),
    "cpp": Color(0.85, 0.75, 1.0),
    "c": Color(0.85, 0.75, 1.0),
    "go": Color(0.7, 0.9, 1.0),
}

TOOL_COLORS: dict[str, Color] = {
    "Read": Color(0.4, 0.9, 0.9),
    "Write": Color(1.0, 0.65, 0.3),
    "Edit": Color(0.4, 0.9, 0.4),
}
DEFAULT_TOOL_COLOR = Color(0.7, 0.7, 0.7)


def _index_in_parent(model: FileSystemModel, node_index: int, node: FileNode) -> int:
    if node.parent is None:
        return 0
    siblings = model.nodes[node.parent].children
    return siblings.index(node_index) if node_index in siblings else 0


def calculate_galaxy_position(model: FileSystemModel, node_index: int) -> Vec3:
    """Calculate the position of a node.

    Args:
        model: File system model
        node_index: Index of the node

    Returns:
        Position in galaxy space (root at the origin)
    """
    node = model.nodes[node_index]
    if node.depth == 0:
        return ORIGIN

    index_in_parent = _index_in_parent(model, node_index, node)

    if node.is_dir:
        angle = node_index * GOLDEN_RATIO * 2.0 * math.pi + index_in_parent * 0.5
        radius = node.depth * 8.0 + index_in_parent * 1.5
        y = node.depth * 2.0 - 5.0
        return Vec3(radius * math.cos(angle), y, radius * math.sin(angle))

    if node.parent is None:
        return Vec3(0.0, -5.0, 0.0)

    parent_pos = calculate_galaxy_position(model, node.parent)
    angle = index_in_parent * GOLDEN_RATIO * 2.0 * math.pi
    cluster_radius = 2.0
    offset_y = -1.5 - min(index_in_parent * 0.2, 2.0)
    return parent_pos + Vec3(cluster_radius * math.cos(angle), offset_y, cluster_radius * math.sin(angle))


def calculate_star_size(node: FileNode) -> float:
    """Directories grow with their child count; files are uniform."""
    if node.is_dir:
        return 0.8 + min(len(node.children) * 0.05, 1.2)
    return 0.3


def calculate_star_color(node: FileNode) -> Color:
    """Warm white for directories, a pastel per extension for files."""
    if node.is_dir:
        return DIRECTORY_COLOR
    extension = node.path.suffix.lstrip(".")
    return EXTENSION_COLORS.get(extension, DEFAULT_FILE_COLOR)


def calculate_tool_color(tool_name: str) -> Color:
    return TOOL_COLORS.get(tool_name, DEFAULT_TOOL_COLOR)
