"""Synthetic multi-session workload.

Walks a directory once (respecting gitignore) and keeps a handful of fake
coding sessions alive, each reading, editing and writing random files with
human-ish pacing. Useful for demos and for developing viewers without a real
coding agent attached.

Contract:
- Inputs: MockConfig, a publish coroutine
- Outputs: SessionStart and ToolUse broadcasts
- Side Effects: One directory walk at startup
"""

import asyncio
import logging
import random
from collections.abc import Awaitable
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from galaxy_library.filesystem.gitignore import GitignoreChecker
from galaxy_library.filesystem.gitignore import walk_visible
from galaxy_library.models.events import SessionStart
from galaxy_library.models.events import ToolUse

from ..config.models import MockConfig
from .broadcast import BroadcastService

logger = logging.getLogger(__name__)

TOOL_WEIGHTS = {"Read": 0.6, "Edit": 0.25, "Write": 0.15}
EDIT_READ_FILE_PROBABILITY = 0.8
MOCK_MODEL = "mock"

Publish = Callable[[SessionStart | ToolUse], Awaitable[Any]]


@dataclass(frozen=True)
class ScriptStep:
    """Wait ``delay`` seconds, then broadcast ``event``."""

    delay: float
    event: SessionStart | ToolUse


def collect_files(root: Path) -> list[Path]:
    """List every non-ignored regular file under ``root``."""
    root = Path(root).resolve()
    checker = GitignoreChecker(root)
    return [path for path, is_dir, _ in walk_visible(root, checker) if not is_dir]


def build_session_script(
    rng: random.Random,
    session_id: str,
    files: list[Path],
    cwd: str,
    min_actions: int,
    max_actions: int,
    min_delay: float,
    max_delay: float,
    start_delay: float = 0.0,
) -> list[ScriptStep]:
    """Plan one fake session.

    The script starts with a session start followed by between
    ``min_actions`` and ``max_actions`` tool uses. Edits mostly target files
    the session already read; an edit of an unread file is preceded by a read
    when the action budget allows.

    Args:
        rng: Random source
        session_id: Id used for every event of the session
        files: Candidate files
        cwd: Reported working directory
        min_actions: Fewest tool uses
        max_actions: Most tool uses
        min_delay: Shortest pause before a tool use
        max_delay: Longest pause before a tool use
        start_delay: Pause before the session start

    Returns:
        Ordered steps

    Raises:
        ValueError: If there are no files to touch
    """
    if not files:
        raise ValueError("No files available for a mock session")

    steps = [ScriptStep(start_delay, SessionStart(session_id=session_id, cwd=cwd, model=MOCK_MODEL))]
    budget = rng.randint(min_actions, max_actions)
    read_files: list[Path] = []
    tools = list(TOOL_WEIGHTS)
    weights = list(TOOL_WEIGHTS.values())

    def add(tool_name: str, path: Path) -> None:
        delay = rng.uniform(min_delay, max_delay)
        steps.append(ScriptStep(delay, ToolUse(session_id=session_id, tool_name=tool_name, file_path=str(path))))

    remaining = budget
    while remaining > 0:
        tool_name = rng.choices(tools, weights)[0]

        if tool_name == "Edit":
            if read_files and rng.random() < EDIT_READ_FILE_PROBABILITY:
                add("Edit", rng.choice(read_files))
                remaining -= 1
                continue
            path = rng.choice(files)
            if remaining >= 2:
                add("Read", path)
                read_files.append(path)
                remaining -= 1
            add("Edit", path)
            remaining -= 1
            continue

        path = rng.choice(files)
        add(tool_name, path)
        if tool_name == "Read":
            read_files.append(path)
        remaining -= 1

    return steps


class MockWorkloadGenerator:
    """Keeps up to ``max_sessions`` scripted sessions running."""

    def __init__(self, config: MockConfig, publish: Publish | None = None) -> None:
        """Initialize generator.

        Args:
            config: Mock section of the service configuration
            publish: Coroutine broadcasting one event (defaults to the broadcast service)
        """
        self.config = config
        self.publish: Publish = publish or BroadcastService.publish
        self.rng = random.Random(config.seed)
        self.root = Path(config.root).expanduser().resolve()
        self.files: list[Path] = []
        self.sessions_started = 0

    def next_script(self) -> list[ScriptStep]:
        session_id = f"mock-session-{self.sessions_started}"
        self.sessions_started += 1
        return build_session_script(
            self.rng,
            session_id,
            self.files,
            cwd=str(self.root),
            min_actions=self.config.min_actions,
            max_actions=self.config.max_actions,
            min_delay=self.config.min_delay,
            max_delay=self.config.max_delay,
            start_delay=self.rng.uniform(0.0, self.config.session_gap),
        )

    async def play(self, script: list[ScriptStep]) -> None:
        """Broadcast a script's events with its pacing."""
        for step in script:
            await asyncio.sleep(step.delay)
            await self.publish(step.event)

    async def run(self) -> None:
        """Run sessions until cancelled."""
        self.files = await asyncio.to_thread(collect_files, self.root)
        if not self.files:
            logger.warning(f"Mock mode: no files found under {self.root}, not generating sessions")
            return

        logger.info(f"Mock mode: {len(self.files)} files under {self.root}, up to {self.config.max_sessions} sessions")
        active: set[asyncio.Task[None]] = set()
        try:
            while True:
                while len(active) < self.config.max_sessions:
                    active.add(asyncio.create_task(self.play(self.next_script())))

                done, active = await asyncio.wait(active, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    if not task.cancelled() and task.exception() is not None:
                        logger.error(f"Mock session failed: {task.exception()}")
        finally:
            for task in active:
                task.cancel()
