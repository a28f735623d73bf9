"""
Unit tests for galaxy layout functions.
"""

import math
from pathlib import Path

import pytest

from galaxy_library.filesystem.model import FileSystemModel
from galaxy_library.layout import calculate_galaxy_position
from galaxy_library.layout import calculate_star_color
from galaxy_library.layout import calculate_star_size
from galaxy_library.layout import calculate_tool_color
from galaxy_library.layout.galaxy import DEFAULT_FILE_COLOR
from galaxy_library.layout.galaxy import DEFAULT_TOOL_COLOR
from galaxy_library.layout.galaxy import DIRECTORY_COLOR
from galaxy_library.layout.galaxy import EXTENSION_COLORS
from galaxy_library.models.filesystem import FileNode
from galaxy_library.models.geometry import ORIGIN


@pytest.mark.unit
class TestGalaxyPosition:
    """Test star placement."""

    def test_root_sits_at_origin(self, sample_model: FileSystemModel) -> None:
        """Test depth 0 is the galaxy center."""
        assert calculate_galaxy_position(sample_model, sample_model.root) == ORIGIN

    def test_directory_height_follows_depth(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test directories sit at depth * 2 - 5."""
        src_index = sample_model.path_to_index[sample_tree / "src"]

        position = calculate_galaxy_position(sample_model, src_index)

        assert position.y == pytest.approx(1 * 2.0 - 5.0)
        radius = math.hypot(position.x, position.z)
        assert radius >= 8.0

    def test_file_clusters_below_its_directory(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test main.rs hangs close under src."""
        src_index = sample_model.path_to_index[sample_tree / "src"]
        main_index = sample_model.path_to_index[sample_tree / "src" / "main.rs"]

        src_pos = calculate_galaxy_position(sample_model, src_index)
        main_pos = calculate_galaxy_position(sample_model, main_index)

        offset = main_pos - src_pos
        assert offset.y < 0
        assert math.hypot(offset.x, offset.z) == pytest.approx(2.0)

    def test_position_is_deterministic(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test the same model yields the same position."""
        index = sample_model.path_to_index[sample_tree / "README.md"]

        assert calculate_galaxy_position(sample_model, index) == calculate_galaxy_position(sample_model, index)


@pytest.mark.unit
class TestStarAppearance:
    """Test star size and color."""

    def test_directory_size_grows_with_children(self) -> None:
        """Test size is 0.8 plus 0.05 per child, capped at +1.2."""
        small = FileNode(path=Path("/r/a"), name="a", is_dir=True, depth=1, children=[1, 2])
        large = FileNode(path=Path("/r/b"), name="b", is_dir=True, depth=1, children=list(range(100)))
        leaf = FileNode(path=Path("/r/c.py"), name="c.py", is_dir=False, depth=1)

        assert calculate_star_size(small) == pytest.approx(0.9)
        assert calculate_star_size(large) == pytest.approx(2.0)
        assert calculate_star_size(leaf) == pytest.approx(0.3)

    @pytest.mark.parametrize("name", ["main.rs", "app.py", "README.md", "config.yaml"])
    def test_file_color_by_extension(self, name: str) -> None:
        """Test known extensions map to their pastel."""
        node = FileNode(path=Path("/r") / name, name=name, is_dir=False, depth=1)

        assert calculate_star_color(node) == EXTENSION_COLORS[name.rsplit(".", 1)[1]]

    def test_unknown_extension_and_directory_colors(self) -> None:
        """Test fallbacks for files and the directory color."""
        unknown = FileNode(path=Path("/r/Makefile"), name="Makefile", is_dir=False, depth=1)
        directory = FileNode(path=Path("/r/src"), name="src", is_dir=True, depth=1)

        assert calculate_star_color(unknown) == DEFAULT_FILE_COLOR
        assert calculate_star_color(directory) == DIRECTORY_COLOR

    def test_tool_colors(self) -> None:
        """Test distinct colors per tool with a gray fallback."""
        colors = {calculate_tool_color(name) for name in ("Read", "Write", "Edit")}

        assert len(colors) == 3
        assert calculate_tool_color("Bash") == DEFAULT_TOOL_COLOR
