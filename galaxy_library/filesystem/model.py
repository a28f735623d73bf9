"""Index-stable mirror of a watched directory tree.

Nodes live in an append-only arena. Removal detaches a node and flags its slot
but never compacts the arena, so an index held by another structure (an agent
flying to node 42, a highlight on node 42) can never come to mean a different
path.

Contract:
- Inputs: A root directory, incremental add/remove calls
- Outputs: FileNode lookups by index or path
- Side Effects: None beyond the in-memory arena (the initial build walks the disk)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from galaxy_library.models.filesystem import FileNode

from .gitignore import GitignoreChecker
from .gitignore import walk_visible

logger = logging.getLogger(__name__)


class FileSystemModel:
    """Arena of FileNodes plus a path -> index lookup."""

    def __init__(self) -> None:
        self.nodes: list[FileNode] = []
        self.path_to_index: dict[Path, int] = {}
        self.root: int | None = None

    @classmethod
    def build_initial(cls, root_path: Path, checker: GitignoreChecker | None = None) -> FileSystemModel:
        """Build the model from one walk of ``root_path``.

        The walk yields parents before children, so each node's parent is
        already in ``path_to_index`` when the node is appended.

        Args:
            root_path: Directory to mirror
            checker: Ignore checker (None = nothing is ignored)

        Returns:
            Populated model
        """
        model = cls()
        for path, is_dir, depth in walk_visible(root_path, checker):
            model._append(path, path.name or str(path), is_dir, depth)
        logger.info(f"Built file system model for {root_path}: {model.live_count()} files/directories")
        return model

    def _append(self, path: Path, name: str, is_dir: bool, depth: int) -> int:
        index = len(self.nodes)
        parent = self.path_to_index.get(path.parent) if path.parent != path else None

        self.nodes.append(FileNode(path=path, name=name, is_dir=is_dir, depth=depth, parent=parent))
        self.path_to_index[path] = index

        if parent is not None:
            self.nodes[parent].children.append(index)
        else:
            self.root = index

        return index

    def add_node(self, path: Path, is_dir: bool) -> int | None:
        """Add a newly observed path.

        Args:
            path: Absolute path of the new entry
            is_dir: Whether the entry is a directory

        Returns:
            Index of the new node, or None if the path is already indexed or
            lies outside the tree (no indexed parent while a root exists)
        """
        path = Path(path)
        if path in self.path_to_index:
            return None

        parent_index = self.path_to_index.get(path.parent) if path.parent != path else None
        if parent_index is None:
            if self.root is not None:
                logger.debug(f"Refusing node outside the tree: {path}")
                return None
            depth = 0
        else:
            depth = self.nodes[parent_index].depth + 1

        return self._append(path, path.name or str(path), is_dir, depth)

    def remove_node(self, path: Path) -> int | None:
        """Logically remove a path.

        Children are cleared and the slot is kept; it is never reused.

        Args:
            path: Absolute path to remove

        Returns:
            Index of the removed node, or None if the path was not indexed
        """
        index = self.path_to_index.pop(Path(path), None)
        if index is None:
            return None

        node = self.nodes[index]
        if node.parent is not None:
            siblings = self.nodes[node.parent].children
            if index in siblings:
                siblings.remove(index)
        node.children.clear()
        node.removed = True

        if self.root == index:
            self.root = None

        return index

    def get_node(self, index: int) -> FileNode | None:
        """Get a live node by index (None for unknown or removed slots)."""
        if index < 0 or index >= len(self.nodes):
            return None
        node = self.nodes[index]
        return None if node.removed else node

    def get_node_by_path(self, path: Path) -> tuple[int, FileNode] | None:
        """Get (index, node) for an indexed path, or None."""
        index = self.path_to_index.get(Path(path))
        if index is None:
            return None
        return index, self.nodes[index]

    def contains(self, path: Path) -> bool:
        return Path(path) in self.path_to_index

    def total_nodes(self) -> int:
        """Number of slots ever allocated (live and removed)."""
        return len(self.nodes)

    def live_count(self) -> int:
        return len(self.path_to_index)

    def iter_live(self) -> Iterator[tuple[int, FileNode]]:
        """Iterate (index, node) over live nodes in index order."""
        for index, node in enumerate(self.nodes):
            if not node.removed:
                yield index, node

    @property
    def root_path(self) -> Path | None:
        if self.root is None:
            return None
        return self.nodes[self.root].path
