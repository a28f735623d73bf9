"""Path resolution for galaxy storage locations.

This module provides path resolution based on the GALAXY_HOME environment variable,
following an XDG-like directory structure within that root.

Contract:
- Inputs: Environment variables (GALAXY_HOME, GALAXY_CONFIG_DIR)
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get GALAXY_HOME from environment.

    Returns:
        Path to root directory (default: .galaxy)
    """
    root = os.environ.get("GALAXY_HOME", ".galaxy")
    return Path(root).resolve()


def get_config_dir() -> Path:
    """Get configuration directory.

    Returns:
        Path to config directory ($GALAXY_HOME/config)

    Environment Variables:
        GALAXY_CONFIG_DIR: Override config directory location
        (falls back to $GALAXY_HOME/config if not set)
    """
    config_dir: Path = get_home_dir() / "config"

    env_override: str | None = os.environ.get("GALAXY_CONFIG_DIR")
    if env_override is not None:
        config_dir = Path(env_override).resolve()

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
