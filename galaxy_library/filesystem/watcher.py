"""Polling filesystem watch source.

A background thread snapshots the watched tree at a fixed interval and turns
the difference between consecutive snapshots into FileSystemEvents on an
unbounded queue. The consumer drains the queue without blocking.

Creates are emitted parents-first and deletes children-first, so a consumer
applying them in order never sees a child without its parent.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from queue import Queue

from galaxy_library.models.filesystem import FileCreated
from galaxy_library.models.filesystem import FileDeleted
from galaxy_library.models.filesystem import FileModified
from galaxy_library.models.filesystem import FileSystemEvent

from .gitignore import GIT_DIR_NAME

logger = logging.getLogger(__name__)

# path -> (is_dir, mtime_ns, size)
Snapshot = dict[Path, tuple[bool, int, int]]


def take_snapshot(root: Path) -> Snapshot:
    """Stat every entry under ``root`` without following symlinks.

    Entries that vanish or cannot be read mid-scan are skipped.
    """
    root = Path(root).resolve()
    snapshot: Snapshot = {}
    stack = [root]
    while stack:
        directory = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.debug(f"Watch scan skipped {directory}: {e}")
            continue
        for entry in entries:
            if entry.name == GIT_DIR_NAME:
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                st = entry.stat(follow_symlinks=False)
            except OSError as e:
                logger.debug(f"Watch scan skipped {entry.path}: {e}")
                continue
            path = Path(entry.path)
            snapshot[path] = (is_dir, st.st_mtime_ns, st.st_size)
            if is_dir:
                stack.append(path)
    return snapshot


def diff_snapshots(previous: Snapshot, current: Snapshot) -> list[FileSystemEvent]:
    """Compute the events that turn ``previous`` into ``current``.

    A path whose type changed (file replaced by directory or vice versa) is
    reported as a delete followed by a create.
    """
    events: list[FileSystemEvent] = []

    deleted = [path for path in previous if path not in current or previous[path][0] != current[path][0]]
    for path in sorted(deleted, key=lambda p: len(p.parts), reverse=True):
        events.append(FileDeleted(path))

    created = [path for path in current if path not in previous or previous[path][0] != current[path][0]]
    for path in sorted(created, key=lambda p: (len(p.parts), str(p))):
        events.append(FileCreated(path, current[path][0]))

    for path in sorted(current, key=str):
        before = previous.get(path)
        if before is None or before[0] != current[path][0]:
            continue
        if before[1:] != current[path][1:]:
            events.append(FileModified(path))

    return events


class PollingFileWatcher:
    """Watch a directory tree by periodic snapshots."""

    def __init__(
        self,
        watch_path: Path,
        interval_seconds: float = 0.5,
        events: Queue[FileSystemEvent] | None = None,
    ) -> None:
        """Initialize watcher.

        Args:
            watch_path: Directory to watch recursively
            interval_seconds: Delay between snapshots
            events: Queue to publish into (a new unbounded queue if omitted)
        """
        self.watch_path = Path(watch_path).resolve()
        self.interval_seconds = interval_seconds
        self.events: Queue[FileSystemEvent] = events if events is not None else Queue()
        self._snapshot: Snapshot | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def baseline(self) -> None:
        """Record the current tree as the baseline without publishing anything."""
        self._snapshot = take_snapshot(self.watch_path)

    def poll_once(self) -> int:
        """Take one snapshot and publish the differences.

        Without a baseline, the first call only records one.

        Returns:
            Number of events published
        """
        current = take_snapshot(self.watch_path)
        if self._snapshot is None:
            self._snapshot = current
            return 0

        changes = diff_snapshots(self._snapshot, current)
        self._snapshot = current
        for event in changes:
            self.events.put(event)
        return len(changes)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.poll_once()
            except Exception as e:
                logger.error(f"Watch error under {self.watch_path}: {e}")
            self._stop.wait(self.interval_seconds)

    def start(self) -> None:
        """Start the background thread, recording a baseline if none exists yet."""
        if self._thread is not None:
            logger.warning("Watcher already running")
            return
        if self._snapshot is None:
            self.baseline()
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="galaxy-fs-watcher", daemon=True)
        self._thread.start()
        logger.info(f"Watching directory: {self.watch_path}")

    def stop(self) -> None:
        """Stop the background thread."""
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout=self.interval_seconds * 4 + 1.0)
        self._thread = None
        logger.info(f"Stopped watching {self.watch_path}")
