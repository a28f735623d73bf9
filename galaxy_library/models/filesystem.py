"""Filesystem data models.

FileNode is one slot of the index-stable arena owned by FileSystemModel.
The FileSystemEvent variants are what the watch source produces and the
reconciler consumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from pathlib import Path


@dataclass
class FileNode:
    """One entry in the watched tree.

    A removed node keeps its slot (``removed=True``, no children) so indices
    held elsewhere never point at a different path.
    """

    path: Path
    name: str
    is_dir: bool
    depth: int
    children: list[int] = field(default_factory=list)
    parent: int | None = None
    removed: bool = False


@dataclass(frozen=True)
class FileCreated:
    """A path appeared."""

    path: Path
    is_dir: bool


@dataclass(frozen=True)
class FileDeleted:
    """A path disappeared."""

    path: Path


@dataclass(frozen=True)
class FileModified:
    """A path's content or metadata changed."""

    path: Path


FileSystemEvent = FileCreated | FileDeleted | FileModified
