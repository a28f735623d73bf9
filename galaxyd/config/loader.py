"""Configuration loader for the galaxyd service.

Handles loading configuration from files, environment variables, and defaults.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from galaxy_library.storage.paths import get_config_dir

from .models import Config

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to configuration file (may not exist yet)
    """
    return get_config_dir() / "daemon.yaml"


def load_config(config_path: Path | None = None) -> Config:
    """Load service configuration.

    Loads configuration with the following precedence (highest to lowest):
    1. Environment variables (GALAXYD_*)
    2. Configuration file (if exists)
    3. Default values

    A file that fails to parse is logged and replaced by defaults.

    Args:
        config_path: Optional path to configuration file. If None, uses default location.

    Returns:
        Loaded configuration
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        logger.info(f"Loading configuration from {config_path}")
        try:
            config = Config.load_from_file(config_path)
        except Exception as e:
            logger.error(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default configuration")
            config = Config.get_default()
    else:
        logger.info(f"No configuration file found at {config_path}, using defaults")
        config = Config.get_default()

    return _apply_env_overrides(config)


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to configuration.

    Environment variables follow the pattern: GALAXYD_SECTION_KEY
    Examples:
        GALAXYD_DAEMON_PORT=9000
        GALAXYD_MOCK_ENABLED=true

    Args:
        config: Configuration to override

    Returns:
        Configuration with environment overrides applied
    """
    config_dict = config.model_dump()

    daemon_overrides = {}
    for key in ["host", "port", "log_level", "cors_origins"]:
        env_var = f"GALAXYD_DAEMON_{key.upper()}"
        if env_var in os.environ:
            value = os.environ[env_var]
            if key == "port":
                daemon_overrides[key] = int(value)
            elif key == "cors_origins":
                # Comma-separated list
                daemon_overrides[key] = [origin.strip() for origin in value.split(",") if origin.strip()]
            else:
                daemon_overrides[key] = value
            logger.info(f"Environment override: daemon.{key} = {daemon_overrides[key]}")

    if daemon_overrides:
        config_dict["daemon"].update(daemon_overrides)

    mock_overrides = {}
    for key in [
        "enabled",
        "root",
        "max_sessions",
        "min_actions",
        "max_actions",
        "min_delay",
        "max_delay",
        "session_gap",
        "seed",
    ]:
        env_var = f"GALAXYD_MOCK_{key.upper()}"
        if env_var in os.environ:
            value = os.environ[env_var]
            if key == "enabled":
                mock_overrides[key] = value.lower() in _TRUE_VALUES
            elif key in ("max_sessions", "min_actions", "max_actions"):
                mock_overrides[key] = int(value)
            elif key == "seed":
                mock_overrides[key] = int(value) if value.lower() != "none" else None
            elif key == "root":
                mock_overrides[key] = value
            else:
                mock_overrides[key] = float(value)
            logger.info(f"Environment override: mock.{key} = {mock_overrides[key]}")

    if mock_overrides:
        config_dict["mock"].update(mock_overrides)

    return Config.model_validate(config_dict)


def save_example_config(path: Path | None = None) -> Path:
    """Save an example configuration file with all defaults.

    Args:
        path: Optional path to save to. If None, uses default location with .example suffix.

    Returns:
        Path where example config was saved

    Raises:
        OSError: If file cannot be written
    """
    if path is None:
        path = get_config_path().with_suffix(".example.yaml")

    config = Config.get_default()
    config.save_to_file(path)

    content = path.read_text()
    header = """# galaxyd Configuration
#
# Example configuration file showing all available options with their defaults.
# Copy this to daemon.yaml and customize as needed.
#
# Configuration precedence (highest to lowest):
# 1. Environment variables (GALAXYD_SECTION_KEY)
# 2. This configuration file
# 3. Built-in defaults

"""
    path.write_text(header + content)

    logger.info(f"Saved example configuration to {path}")
    return path
