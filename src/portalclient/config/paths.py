"""Platform-specific paths for portalclient configuration and state."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir
from platformdirs import user_state_dir

PACKAGE_NAME = "portalclient"


def _get_env_path(env_var: str, fallback: Path) -> Path:
    """Get path from environment variable or fallback."""
    if env_value := os.environ.get(env_var):
        return Path(env_value)
    return fallback


def config_dir() -> Path:
    """Get user config directory.

    Respects PORTALCLIENT_CONFIG_DIR environment variable.
    """
    base_dir = Path(user_config_dir(PACKAGE_NAME))
    return _get_env_path("PORTALCLIENT_CONFIG_DIR", base_dir)


def state_dir() -> Path:
    """Get user state directory for the persisted session.

    Respects PORTALCLIENT_STATE_DIR environment variable.
    """
    base_dir = Path(user_state_dir(PACKAGE_NAME))
    return _get_env_path("PORTALCLIENT_STATE_DIR", base_dir)


def config_file() -> Path:
    """Get main config.toml path."""
    return config_dir() / "config.toml"


def session_file() -> Path:
    """Get persisted session path."""
    return state_dir() / "session.json"


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    for directory in (config_dir(), state_dir()):
        directory.mkdir(parents=True, exist_ok=True)
