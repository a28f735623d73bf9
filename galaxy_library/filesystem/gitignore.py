"""Gitignore-aware walking and path filtering.

Ignore decisions are delegated to git itself (through GitPython), so nested
``.gitignore`` files, global excludes and ``.git/info/exclude`` all apply.
Whenever git cannot answer (no git binary, not a repository, command failure)
the path is treated as visible.

Contract:
- Inputs: A root directory
- Outputs: Visible paths in parent-before-child order, ignore decisions
- Side Effects: Runs ``git check-ignore --no-index`` subprocesses
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from collections.abc import Iterator
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"
GIT_DIR_NAME = ".git"


def is_gitignore_file(path: Path) -> bool:
    """Return whether ``path`` names a ``.gitignore`` file."""
    return Path(path).name == GITIGNORE_FILENAME


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


def _open_repo(root: Path) -> Any | None:
    """Open the repository containing ``root``, or None when there is none."""
    try:
        from git import Repo

        repo = Repo(root, search_parent_directories=True)
    except Exception as e:
        logger.info(f"No git repository for {root} ({type(e).__name__}); ignore rules disabled")
        return None

    if repo.bare or repo.working_tree_dir is None:
        logger.info(f"Repository for {root} has no working tree; ignore rules disabled")
        return None
    return repo


class GitignoreChecker:
    """Answers "is this path ignored?" for paths under one root."""

    def __init__(self, root_path: Path) -> None:
        """Initialize checker.

        Args:
            root_path: Watched root directory
        """
        self.root_path = Path(root_path).resolve()
        self._repo = _open_repo(self.root_path)
        self._work_tree = Path(self._repo.working_tree_dir).resolve() if self._repo is not None else None

    @property
    def available(self) -> bool:
        """Whether ignore rules are being applied at all."""
        return self._repo is not None

    def is_ignored(self, path: Path) -> bool:
        """Check if a single path is ignored by git.

        Args:
            path: Absolute path to check

        Returns:
            True if git reports the path as ignored, False otherwise (including on errors)
        """
        return Path(path) in self.ignored_among([Path(path)])

    def ignored_among(self, paths: Iterable[Path]) -> set[Path]:
        """Return the subset of ``paths`` that git reports as ignored.

        One ``git check-ignore`` call covers the whole batch. ``--no-index`` makes
        tracked files subject to the rules too, and ``-z`` keeps non-ASCII paths
        unquoted.

        Args:
            paths: Absolute paths to check

        Returns:
            Set of the given Path objects that are ignored
        """
        if self._repo is None or self._work_tree is None:
            return set()

        by_text: dict[str, Path] = {}
        for path in paths:
            path = Path(path)
            if not _is_within(path, self._work_tree):
                continue
            if GIT_DIR_NAME in path.relative_to(self._work_tree).parts:
                continue
            by_text[str(path)] = path
        if not by_text:
            return set()

        from git.exc import GitCommandError

        try:
            output = self._repo.git.check_ignore("-z", "--no-index", *by_text)
        except GitCommandError as e:
            # Exit status 1 means none of the paths are ignored
            if e.status != 1:
                logger.warning(f"git check-ignore failed under {self.root_path}: {e}")
            return set()
        except Exception as e:
            logger.warning(f"git check-ignore failed under {self.root_path}: {e}")
            return set()

        ignored: set[Path] = set()
        for line in output.split("\0"):
            if not line:
                continue
            if line in by_text:
                ignored.add(by_text[line])
                continue
            candidate = str((self._work_tree / line).resolve())
            if candidate in by_text:
                ignored.add(by_text[candidate])
        return ignored


def walk_visible(root: Path, checker: GitignoreChecker | None = None) -> Iterator[tuple[Path, bool, int]]:
    """Walk ``root`` yielding every visible entry.

    Hidden files are included, ignored entries (and everything below ignored
    directories) are skipped, the ``.git`` directory is never entered, and
    symlinks are reported but not followed. Parents are always yielded before
    their children; siblings come in name order.

    Args:
        root: Directory to walk
        checker: Ignore checker (None = nothing is ignored)

    Yields:
        Tuples of (path, is_dir, depth) with the root itself at depth 0
    """
    root = Path(root).resolve()
    yield root, root.is_dir(), 0
    if not root.is_dir():
        return

    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        directory, depth = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            continue

        children: list[tuple[Path, bool]] = []
        for entry in entries:
            if entry.name == GIT_DIR_NAME:
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            children.append((Path(entry.path), is_dir))

        ignored = checker.ignored_among(path for path, _ in children) if checker is not None else set()

        subdirs: list[Path] = []
        for path, is_dir in children:
            if path in ignored:
                continue
            yield path, is_dir, depth + 1
            if is_dir:
                subdirs.append(path)

        # Reverse so the stack pops siblings in name order
        for subdir in reversed(subdirs):
            stack.append((subdir, depth + 1))


def get_valid_paths(root: Path, checker: GitignoreChecker | None = None) -> set[Path]:
    """Get the set of all non-ignored paths under ``root`` (root included)."""
    return {path for path, _, _ in walk_visible(root, checker)}
