"""Live reconciliation of the file system model.

Applies watch events to the model and, whenever a ``.gitignore`` itself is
touched, re-derives the visible set with a full filtered walk. Gitignore edits
are rare, so the O(tree size) rescan is acceptable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from queue import Empty
from queue import Queue

from galaxy_library.models.filesystem import FileCreated
from galaxy_library.models.filesystem import FileDeleted
from galaxy_library.models.filesystem import FileModified
from galaxy_library.models.filesystem import FileSystemEvent

from .gitignore import GitignoreChecker
from .gitignore import get_valid_paths
from .gitignore import is_gitignore_file
from .model import FileSystemModel

logger = logging.getLogger(__name__)


@dataclass
class FileSystemUpdate:
    """Indices touched by one drain, for cleaning up per-index state."""

    added: list[int] = field(default_factory=list)
    removed: list[int] = field(default_factory=list)
    gitignore_changed: bool = False

    def merge(self, other: FileSystemUpdate) -> None:
        self.added.extend(other.added)
        self.removed.extend(other.removed)
        self.gitignore_changed = self.gitignore_changed or other.gitignore_changed

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.gitignore_changed)


class FileSystemState:
    """Owns the model and keeps it in step with the watched directory."""

    def __init__(
        self,
        model: FileSystemModel,
        root_path: Path,
        checker: GitignoreChecker | None = None,
        events: Queue[FileSystemEvent] | None = None,
    ) -> None:
        """Initialize state.

        Args:
            model: Model built for ``root_path``
            root_path: Watched root directory
            checker: Ignore checker (None = nothing is ignored)
            events: Queue fed by the watch source
        """
        self.model = model
        self.root_path = Path(root_path).resolve()
        self.checker = checker
        self.events: Queue[FileSystemEvent] = events if events is not None else Queue()

    @classmethod
    def open(cls, root_path: Path, events: Queue[FileSystemEvent] | None = None) -> FileSystemState:
        """Build the model and checker for ``root_path``."""
        root_path = Path(root_path).resolve()
        checker = GitignoreChecker(root_path)
        model = FileSystemModel.build_initial(root_path, checker)
        return cls(model, root_path, checker, events)

    def _is_ignored(self, path: Path) -> bool:
        return self.checker.is_ignored(path) if self.checker is not None else False

    def apply_event(self, event: FileSystemEvent) -> FileSystemUpdate:
        """Apply one watch event to the model.

        Args:
            event: Created, Deleted or Modified

        Returns:
            What changed (possibly nothing)
        """
        update = FileSystemUpdate()

        if isinstance(event, FileCreated):
            if is_gitignore_file(event.path):
                update.gitignore_changed = True
            if self._is_ignored(event.path):
                return update
            index = self.model.add_node(event.path, event.is_dir)
            if index is not None:
                logger.info(f"Created: {event.path} ({'dir' if event.is_dir else 'file'})")
                update.added.append(index)

        elif isinstance(event, FileDeleted):
            if is_gitignore_file(event.path):
                update.gitignore_changed = True
            index = self.model.remove_node(event.path)
            if index is not None:
                logger.info(f"Deleted: {event.path}")
                update.removed.append(index)

        elif isinstance(event, FileModified):
            if is_gitignore_file(event.path):
                update.gitignore_changed = True
            logger.debug(f"Modified: {event.path}")

        return update

    def drain(self) -> FileSystemUpdate:
        """Apply every pending watch event without blocking.

        Reconciles against ignore rules once at the end if any ``.gitignore``
        was created, deleted or modified.

        Returns:
            Combined update for this drain
        """
        update = FileSystemUpdate()
        while True:
            try:
                event = self.events.get_nowait()
            except Empty:
                break
            update.merge(self.apply_event(event))

        if update.gitignore_changed:
            reconciled = self.reconcile_gitignore()
            update.added.extend(reconciled.added)
            update.removed.extend(reconciled.removed)

        return update

    def reconcile_gitignore(self) -> FileSystemUpdate:
        """Remove now-ignored paths and add now-visible ones.

        Returns:
            Indices removed and added by the rescan
        """
        logger.info("Gitignore changed, reconciling file system model...")
        update = FileSystemUpdate()
        valid_paths = get_valid_paths(self.root_path, self.checker)

        stale = [path for path in self.model.path_to_index if path not in valid_paths]
        for path in sorted(stale, key=lambda p: len(p.parts), reverse=True):
            index = self.model.remove_node(path)
            if index is not None:
                logger.info(f"Removing now-ignored: {path}")
                update.removed.append(index)

        fresh = [path for path in valid_paths if not self.model.contains(path)]
        for path in sorted(fresh, key=lambda p: (len(p.parts), str(p))):
            index = self.model.add_node(path, path.is_dir() and not path.is_symlink())
            if index is not None:
                logger.info(f"Adding now-visible: {path}")
                update.added.append(index)

        logger.info(f"Reconciliation finished: {len(update.removed)} removed, {len(update.added)} added")
        return update
