"""
Unit tests for the index-stable file system model.

Tests initial build, add/remove semantics, index stability and the
path/node consistency invariants.
"""

import random
from pathlib import Path

import pytest

from galaxy_library.filesystem.model import FileSystemModel


def assert_consistent(model: FileSystemModel) -> None:
    """Every lookup key maps to a live node with the same path; depths follow parents."""
    for path, index in model.path_to_index.items():
        node = model.nodes[index]
        assert node.path == path
        assert not node.removed

    roots = [i for i, node in model.iter_live() if node.parent is None]
    assert len(roots) <= 1
    if model.root is not None:
        assert roots == [model.root]

    for index, node in model.iter_live():
        assert len(node.children) == len(set(node.children))
        if node.parent is not None:
            parent = model.nodes[node.parent]
            assert node.depth == parent.depth + 1
            assert index in parent.children


@pytest.mark.unit
class TestBuildInitial:
    """Test building the model from disk."""

    def test_scenario_tree_has_root_and_two_children(self, sample_tree: Path) -> None:
        """Test README.md and src/main.rs layout yields the expected nodes."""
        model = FileSystemModel.build_initial(sample_tree)

        assert model.root is not None
        root = model.nodes[model.root]
        assert root.path == sample_tree
        assert root.depth == 0
        assert root.parent is None

        _, readme = model.get_node_by_path(sample_tree / "README.md")
        _, src = model.get_node_by_path(sample_tree / "src")
        _, main_rs = model.get_node_by_path(sample_tree / "src" / "main.rs")
        assert readme.depth == 1
        assert src.depth == 1
        assert src.is_dir
        assert main_rs.depth == 2
        assert model.live_count() == 4
        assert_consistent(model)

    def test_parents_come_before_children(self, sample_tree: Path) -> None:
        """Test every node's parent has a smaller index."""
        model = FileSystemModel.build_initial(sample_tree)

        for index, node in model.iter_live():
            if node.parent is not None:
                assert node.parent < index

    def test_hidden_files_are_included(self, sample_tree: Path) -> None:
        """Test dotfiles are part of the galaxy."""
        (sample_tree / ".env").write_text("KEY=value\n")

        model = FileSystemModel.build_initial(sample_tree)

        assert model.contains(sample_tree / ".env")

    def test_git_directory_is_never_walked(self, sample_tree: Path) -> None:
        """Test .git internals stay out of the model."""
        (sample_tree / ".git" / "objects").mkdir(parents=True)
        (sample_tree / ".git" / "HEAD").write_text("ref: refs/heads/main\n")

        model = FileSystemModel.build_initial(sample_tree)

        assert not model.contains(sample_tree / ".git")
        assert not model.contains(sample_tree / ".git" / "HEAD")

    def test_symlinks_are_not_followed(self, sample_tree: Path, tmp_path: Path) -> None:
        """Test a symlinked directory is a leaf."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "secret.txt").write_text("x")
        (sample_tree / "link").symlink_to(outside, target_is_directory=True)

        model = FileSystemModel.build_initial(sample_tree)

        found = model.get_node_by_path(sample_tree / "link")
        assert found is not None
        assert not found[1].is_dir
        assert not model.contains(sample_tree / "link" / "secret.txt")


@pytest.mark.unit
class TestAddNode:
    """Test incremental additions."""

    def test_new_file_gets_parent_and_depth(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test src/lib.rs lands next to main.rs."""
        main_index, main_rs = sample_model.get_node_by_path(sample_tree / "src" / "main.rs")

        lib_index = sample_model.add_node(sample_tree / "src" / "lib.rs", False)

        assert lib_index is not None
        lib = sample_model.get_node(lib_index)
        assert lib.parent == main_rs.parent
        assert lib.depth == main_rs.depth
        assert lib_index in sample_model.nodes[main_rs.parent].children
        assert sample_model.get_node_by_path(sample_tree / "src" / "main.rs")[0] == main_index

    def test_add_is_idempotent(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test adding the same path twice leaves the model unchanged."""
        path = sample_tree / "src" / "lib.rs"
        first = sample_model.add_node(path, False)
        total = sample_model.total_nodes()
        children = list(sample_model.nodes[sample_model.root].children)

        second = sample_model.add_node(path, False)

        assert first is not None
        assert second is None
        assert sample_model.total_nodes() == total
        assert sample_model.nodes[sample_model.root].children == children
        assert sample_model.path_to_index[path] == first

    def test_first_parentless_node_becomes_root(self, tmp_path: Path) -> None:
        """Test an empty model takes its first node as root."""
        model = FileSystemModel()

        index = model.add_node(tmp_path, True)

        assert index == 0
        assert model.root == 0
        assert model.nodes[0].depth == 0

    def test_orphan_is_refused_while_root_exists(self, sample_model: FileSystemModel, tmp_path: Path) -> None:
        """Test a path outside the tree cannot create a second root."""
        result = sample_model.add_node(tmp_path / "elsewhere" / "file.txt", False)

        assert result is None
        assert_consistent(sample_model)


@pytest.mark.unit
class TestRemoveNode:
    """Test logical removal."""

    def test_remove_keeps_other_indices(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test deleting README.md leaves main.rs's index alone."""
        main_index = sample_model.path_to_index[sample_tree / "src" / "main.rs"]

        removed = sample_model.remove_node(sample_tree / "README.md")

        assert removed is not None
        assert sample_tree / "README.md" not in sample_model.path_to_index
        assert sample_model.path_to_index[sample_tree / "src" / "main.rs"] == main_index
        assert sample_model.get_node(removed) is None
        assert removed not in sample_model.nodes[sample_model.root].children
        assert_consistent(sample_model)

    def test_removed_slot_is_never_reused(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test re-creating a path allocates a fresh index."""
        path = sample_tree / "README.md"
        old_index = sample_model.remove_node(path)

        new_index = sample_model.add_node(path, False)

        assert new_index is not None
        assert new_index != old_index
        assert new_index == sample_model.total_nodes() - 1

    def test_remove_directory_clears_children(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test a removed directory keeps no child list."""
        index = sample_model.remove_node(sample_tree / "src")

        assert sample_model.nodes[index].children == []
        assert sample_model.nodes[index].removed

    def test_remove_unknown_path_is_noop(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test removing an unindexed path returns None."""
        assert sample_model.remove_node(sample_tree / "nope.txt") is None

    def test_lookups_fail_silently(self, sample_model: FileSystemModel, sample_tree: Path) -> None:
        """Test misses return None rather than raising."""
        assert sample_model.get_node(10_000) is None
        assert sample_model.get_node(-1) is None
        assert sample_model.get_node_by_path(sample_tree / "missing") is None


@pytest.mark.unit
class TestModelInvariants:
    """Randomized add/remove sequences keep the model consistent."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_random_operations_keep_consistency(self, sample_tree: Path, seed: int) -> None:
        """Test path_to_index and the arena agree after every operation."""
        rng = random.Random(seed)
        model = FileSystemModel.build_initial(sample_tree)
        candidates = [
            sample_tree / "src",
            sample_tree / "src" / "main.rs",
            sample_tree / "src" / "lib.rs",
            sample_tree / "src" / "util",
            sample_tree / "src" / "util" / "mod.rs",
            sample_tree / "README.md",
            sample_tree / "docs",
            sample_tree / "docs" / "guide.md",
        ]

        for _ in range(200):
            path = rng.choice(candidates)
            if rng.random() < 0.5:
                model.add_node(path, path.suffix == "")
            else:
                # Deletes arrive children-first, so only leaves are removed
                found = model.get_node_by_path(path)
                if found is not None and not found[1].children:
                    model.remove_node(path)
            assert_consistent(model)
