"""File system model, watch source and gitignore reconciliation."""

from .gitignore import GitignoreChecker
from .gitignore import get_valid_paths
from .gitignore import is_gitignore_file
from .gitignore import walk_visible
from .model import FileSystemModel
from .sync import FileSystemState
from .sync import FileSystemUpdate
from .watcher import PollingFileWatcher

__all__ = [
    "FileSystemModel",
    "FileSystemState",
    "FileSystemUpdate",
    "GitignoreChecker",
    "PollingFileWatcher",
    "get_valid_paths",
    "is_gitignore_file",
    "walk_visible",
]
