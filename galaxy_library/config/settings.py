"""Settings models for the galaxy core.

This module defines the configuration of the headless core: which directory is
watched, where agent events come from, and the lifecycle timings that drive the
agent state machine.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class GalaxySettings(BaseSettings):
    """Configuration for the galaxy core.

    Attributes:
        watch_path: Directory mirrored into the galaxy (default: current directory)
        server_url: WebSocket URL of the fan-out service
        reconnect_delay_seconds: First reconnect delay after a dropped connection
        reconnect_max_delay_seconds: Upper bound of the reconnect backoff
        poll_interval_seconds: Filesystem polling interval
        tick_rate: Ticks per second for the headless driver
        spawn_duration: Seconds an agent spends growing in
        idle_timeout: Seconds of inactivity before an agent despawns
        despawn_duration: Seconds an agent spends shrinking out
        move_duration: Seconds per move, independent of distance
        history_limit: Events kept per file for hover detail
        log_level: Logging level (default: info)

    Example:
        >>> settings = GalaxySettings()
        >>> assert settings.idle_timeout == 5.0
        >>> assert settings.server_url.endswith("/ws")
    """

    model_config = SettingsConfigDict(
        env_prefix="GALAXY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    watch_path: str = "."
    server_url: str = "ws://127.0.0.1:8080/ws"
    reconnect_delay_seconds: float = Field(default=2.0, gt=0)
    reconnect_max_delay_seconds: float = Field(default=30.0, gt=0)
    poll_interval_seconds: float = Field(default=0.5, gt=0)
    tick_rate: int = Field(default=60, ge=1, le=240)

    spawn_duration: float = Field(default=0.5, gt=0)
    idle_timeout: float = Field(default=5.0, gt=0)
    despawn_duration: float = Field(default=0.5, gt=0)
    move_duration: float = Field(default=1.2, gt=0)
    history_limit: int = Field(default=10, ge=1)

    log_level: str = "info"

    @field_validator("watch_path")
    @classmethod
    def expand_and_resolve_path(cls, v: str) -> str:
        """Expand ~ and resolve to an absolute path.

        Args:
            v: Path string (may contain ~ or be relative)

        Returns:
            Absolute path as string
        """
        return str(Path(v).expanduser().resolve())
