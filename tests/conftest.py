"""
Shared pytest fixtures for the galaxy test suite.

Provides fixtures for:
- Isolated storage directories
- Sample watched trees
- File system models and states built over them
- Git availability checks
"""

import os
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# Isolate storage before any galaxyd module loads its configuration at import
os.environ.setdefault("GALAXY_HOME", tempfile.mkdtemp(prefix="galaxy-test-home-"))

from galaxy_library.filesystem.model import FileSystemModel  # noqa: E402
from galaxy_library.filesystem.sync import FileSystemState  # noqa: E402

HAS_GIT = shutil.which("git") is not None


@pytest.fixture
def temp_storage_dir() -> Generator[Path, None, None]:
    """Create temporary storage directory for tests.

    Yields:
        Path to temporary directory (cleaned up after test)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point GALAXY_HOME at a temp directory.

    Args:
        temp_storage_dir: Temporary directory fixture
        monkeypatch: pytest monkeypatch fixture

    Returns:
        Path to temporary storage directory
    """
    monkeypatch.setenv("GALAXY_HOME", str(temp_storage_dir))
    monkeypatch.delenv("GALAXY_CONFIG_DIR", raising=False)
    return temp_storage_dir


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small watched tree.

    Layout:
        project/
            README.md
            src/
                main.rs

    Returns:
        Resolved path of the project root
    """
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.rs").write_text("fn main() {}\n")
    (root / "README.md").write_text("# Project\n")
    return root.resolve()


@pytest.fixture
def sample_model(sample_tree: Path) -> FileSystemModel:
    """Model of sample_tree built without ignore rules."""
    return FileSystemModel.build_initial(sample_tree)


@pytest.fixture
def sample_state(sample_tree: Path, sample_model: FileSystemModel) -> FileSystemState:
    """State over sample_tree with an empty event queue and no ignore checker."""
    return FileSystemState(sample_model, sample_tree)


@pytest.fixture
def git_tree(sample_tree: Path) -> Path:
    """sample_tree turned into a git work tree (skips without git)."""
    if not HAS_GIT:
        pytest.skip("git executable not available")
    from git import Repo

    Repo.init(sample_tree)
    return sample_tree
