"""Configuration structures and loading for portalclient."""

import os
import tomllib
from pathlib import Path
from typing import Annotated, Literal

import msgspec

from portalclient.errors.types import ConfigError


# Default values
DEFAULT_TIMEOUT = 15.0
DEFAULT_MAX_CONCURRENT = 5
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30.0
DEFAULT_LOGIN_ROUTE = "/login"

PositiveInt = Annotated[int, msgspec.Meta(ge=1)]
PositiveFloat = Annotated[float, msgspec.Meta(gt=0)]
NonNegativeFloat = Annotated[float, msgspec.Meta(ge=0)]

PRODUCTION_BASE_URL = "https://portal.example.com/api"
DEVELOPMENT_BASE_URL = "http://localhost:5000/api"


def _default_headers() -> dict[str, str]:
    return {"Content-Type": "application/json"}


# API configuration
class ApiConfig(msgspec.Struct, omit_defaults=True):
    """Where and how requests are sent."""

    environment: Literal["development", "production"] = "development"
    base_url: str | None = None  # Overrides the environment default
    timeout: PositiveFloat = DEFAULT_TIMEOUT
    max_concurrent: PositiveInt = DEFAULT_MAX_CONCURRENT
    headers: dict[str, str] = msgspec.field(default_factory=_default_headers)

    def resolved_base_url(self) -> str:
        """Explicit base URL, else the one for the environment."""
        if self.base_url:
            return self.base_url
        if self.environment == "production":
            return PRODUCTION_BASE_URL
        return DEVELOPMENT_BASE_URL


# Retry configuration
class RetrySettings(msgspec.Struct, omit_defaults=True):
    """Retry behavior for transient failures."""

    max_attempts: PositiveInt = DEFAULT_MAX_ATTEMPTS
    base_delay: NonNegativeFloat = DEFAULT_BASE_DELAY  # seconds
    max_delay: NonNegativeFloat = DEFAULT_MAX_DELAY  # seconds


# Session configuration
class SessionConfig(msgspec.Struct, omit_defaults=True):
    """Session storage settings."""

    use_keyring: bool = False
    login_route: str = DEFAULT_LOGIN_ROUTE


# Display configuration
class DisplayConfig(msgspec.Struct, omit_defaults=True):
    """Display settings."""

    toasts: bool = True
    color: bool = True


# Logging configuration
class LoggingConfig(msgspec.Struct, omit_defaults=True):
    """Logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    json: bool = False


# Main configuration
class Config(msgspec.Struct, omit_defaults=True):
    """Main configuration structure."""

    api: ApiConfig = msgspec.field(default_factory=ApiConfig)
    retry: RetrySettings = msgspec.field(default_factory=RetrySettings)
    session: SessionConfig = msgspec.field(default_factory=SessionConfig)
    display: DisplayConfig = msgspec.field(default_factory=DisplayConfig)
    logging: LoggingConfig = msgspec.field(default_factory=LoggingConfig)


def _load_from_toml(path: Path) -> dict:
    """Load configuration from TOML file."""
    if not path.exists():
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def _save_to_toml(data: dict, path: Path) -> None:
    """Save configuration to TOML file."""
    import tomli_w

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def convert_config(data: dict) -> Config:
    """Convert raw dict to Config struct."""
    try:
        return msgspec.convert(data, type=Config)
    except msgspec.ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config.

    PORTALCLIENT_ENV: "production" selects the production API
    PORTALCLIENT_BASE_URL: Explicit API base URL
    PORTALCLIENT_TIMEOUT: Request timeout in seconds
    PORTALCLIENT_LOG_LEVEL: Logging level name
    PORTALCLIENT_NO_COLOR: Disable colored output
    """
    api = config.api

    if env := os.environ.get("PORTALCLIENT_ENV"):
        environment = "production" if env.strip().lower() == "production" else "development"
        api = msgspec.structs.replace(api, environment=environment)

    if base_url := os.environ.get("PORTALCLIENT_BASE_URL"):
        api = msgspec.structs.replace(api, base_url=base_url.strip())

    if timeout := os.environ.get("PORTALCLIENT_TIMEOUT"):
        try:
            seconds = float(timeout)
        except ValueError as e:
            raise ConfigError(f"PORTALCLIENT_TIMEOUT must be a number, got {timeout!r}") from e
        if seconds <= 0:
            raise ConfigError(f"PORTALCLIENT_TIMEOUT must be positive, got {timeout!r}")
        api = msgspec.structs.replace(api, timeout=seconds)

    config = msgspec.structs.replace(config, api=api)

    if level := os.environ.get("PORTALCLIENT_LOG_LEVEL"):
        logging_cfg = msgspec.structs.replace(config.logging, level=level.strip().upper())
        config = msgspec.structs.replace(config, logging=logging_cfg)

    if "PORTALCLIENT_NO_COLOR" in os.environ:
        display = msgspec.structs.replace(config.display, color=False)
        config = msgspec.structs.replace(config, display=display)

    return config


# Config state storage
_config: Config | None = None


def get_config() -> Config:
    """Get the current configuration (singleton)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload configuration from disk."""
    global _config
    _config = load_config()
    return _config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from file with defaults."""
    from .paths import config_file

    config_path = path or config_file()

    raw_data = _load_from_toml(config_path)
    if not raw_data:
        # Return default config
        config = Config()
    else:
        config = convert_config(raw_data)

    # Apply environment variable overrides
    config = _apply_env_overrides(config)

    return config


def save_config(config: Config, path: Path | None = None) -> None:
    """Save configuration to file."""
    from .paths import config_file

    config_path = path or config_file()

    # Convert to dict for TOML serialization
    data = msgspec.to_builtins(config)

    # Remove None values
    def clean_none(d: dict) -> dict:
        return {
            k: clean_none(v) if isinstance(v, dict) else v
            for k, v in d.items()
            if v is not None
        }

    data = clean_none(data)

    _save_to_toml(data, config_path)

    # Update singleton
    global _config
    _config = config
