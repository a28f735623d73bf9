"""Configuration loading for the galaxy core.

This module handles loading core settings from YAML files
and environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: GalaxySettings objects
- Side Effects: Creates default config file on request
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from .settings import GalaxySettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# galaxy core configuration
# Environment variables (GALAXY_*) take precedence over this file

# Directory mirrored into the galaxy
watch_path: "."

# Fan-out service WebSocket endpoint
server_url: "ws://127.0.0.1:8080/ws"
reconnect_delay_seconds: 2.0
reconnect_max_delay_seconds: 30.0

# Filesystem polling and tick rate
poll_interval_seconds: 0.5
tick_rate: 60

# Agent lifecycle timings (seconds)
spawn_duration: 0.5
idle_timeout: 5.0
despawn_duration: 0.5
move_duration: 1.2

# Events kept per file for hover detail
history_limit: 10

log_level: "info"
"""


def get_config_path() -> Path:
    """Get path to config file.

    Returns:
        Path to galaxy.yaml in config directory

    Example:
        >>> config_path = get_config_path()
        >>> assert config_path.name == "galaxy.yaml"
    """
    return get_config_dir() / "galaxy.yaml"


def create_default_config(config_path: Path | None = None) -> Path:
    """Create default config file if it doesn't exist.

    Args:
        config_path: Optional target path (default: galaxy.yaml in config dir)

    Returns:
        Path of the config file
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return config_path

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")
    return config_path


def load_config(config_path: Path | None = None, **overrides: object) -> GalaxySettings:
    """Load core settings from YAML and environment.

    Precedence (highest to lowest): explicit overrides, environment variables
    (GALAXY_*), YAML file, defaults.

    Args:
        config_path: Optional config file path (default: galaxy.yaml in config dir)
        **overrides: Values that win over every other source (e.g. CLI options)

    Returns:
        Validated settings
    """
    if config_path is None:
        config_path = get_config_path()

    yaml_settings: dict = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}")
        except Exception as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default settings and environment variables")

    # Only pass YAML values that don't have corresponding env vars
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"GALAXY_{key.upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    filtered_yaml.update({key: value for key, value in overrides.items() if value is not None})

    settings = GalaxySettings(**filtered_yaml)

    logger.info(f"Galaxy configuration loaded: watch_path={settings.watch_path}, server_url={settings.server_url}")

    return settings
