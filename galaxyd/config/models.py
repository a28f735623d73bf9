"""Configuration models for the galaxyd fan-out service.

These models define the structure of the service's configuration file: how
the HTTP/WebSocket server binds and whether the synthetic workload generator
runs.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel
from pydantic import Field
from pydantic import model_validator


class DaemonConfig(BaseModel):
    """Configuration for the server process."""

    # Uvicorn server settings
    host: str = Field(
        default="127.0.0.1",
        description="Host to bind to (use '0.0.0.0' for LAN access)",
    )
    port: int = Field(
        default=8080,
        ge=1024,
        le=65535,
        description="Port to listen on",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:5173",  # Vite dev server
            "http://localhost:5174",  # Alternative port
        ],
        description="CORS allowed origins for browser-based viewers",
    )


class MockConfig(BaseModel):
    """Configuration for the synthetic multi-session workload."""

    enabled: bool = Field(
        default=False,
        description="Generate fake sessions instead of waiting for hooks",
    )
    root: str = Field(
        default=".",
        description="Directory whose files the fake sessions touch",
    )
    max_sessions: int = Field(
        default=3,
        ge=1,
        le=32,
        description="Concurrent fake sessions",
    )
    min_actions: int = Field(default=4, ge=1, description="Fewest tool uses per session")
    max_actions: int = Field(default=12, ge=1, description="Most tool uses per session")
    min_delay: float = Field(default=0.5, ge=0, description="Shortest pause between tool uses (seconds)")
    max_delay: float = Field(default=3.0, ge=0, description="Longest pause between tool uses (seconds)")
    session_gap: float = Field(
        default=2.0,
        ge=0,
        description="Longest pause before a finished session is replaced (seconds)",
    )
    seed: int | None = Field(default=None, description="Random seed for reproducible workloads")

    @model_validator(mode="after")
    def check_ranges(self) -> MockConfig:
        if self.min_actions > self.max_actions:
            raise ValueError("min_actions must not exceed max_actions")
        if self.min_delay > self.max_delay:
            raise ValueError("min_delay must not exceed max_delay")
        return self


class Config(BaseModel):
    """Complete service configuration."""

    daemon: DaemonConfig = Field(default_factory=DaemonConfig)
    mock: MockConfig = Field(default_factory=MockConfig)

    @classmethod
    def load_from_file(cls, path: Path) -> Config:
        """Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        import yaml

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with path.open() as f:
                data = yaml.safe_load(f)
            return cls.model_validate(data or {})
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e
        except Exception as e:
            raise ValueError(f"Failed to load configuration: {e}") from e

    def save_to_file(self, path: Path) -> None:
        """Save configuration to YAML file.

        Raises:
            OSError: If file cannot be written
        """
        import yaml

        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w") as f:
            yaml.safe_dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    @classmethod
    def get_default(cls) -> Config:
        """Get default configuration with all defaults."""
        return cls()
