"""Configuration management for portalclient."""

from portalclient.config.credentials import (
    SessionStore,
    StoredSession,
    check_credential_permissions,
    delete_credential,
    read_credential,
    write_credential,
)
from portalclient.config.keyring import (
    delete_from_keyring,
    get_from_keyring,
    keyring_available,
    keyring_key,
    store_in_keyring,
)
from portalclient.config.logs import ConsoleFormatter, JsonFormatter, configure_logging
from portalclient.config.paths import (
    config_dir,
    config_file,
    ensure_directories,
    session_file,
    state_dir,
)
from portalclient.config.settings import (
    ApiConfig,
    Config,
    DisplayConfig,
    LoggingConfig,
    RetrySettings,
    SessionConfig,
    get_config,
    load_config,
    reload_config,
    save_config,
)

__all__ = [
    # paths
    "config_dir",
    "state_dir",
    "config_file",
    "session_file",
    "ensure_directories",
    # settings
    "Config",
    "ApiConfig",
    "RetrySettings",
    "SessionConfig",
    "DisplayConfig",
    "LoggingConfig",
    "get_config",
    "load_config",
    "reload_config",
    "save_config",
    # credentials
    "SessionStore",
    "StoredSession",
    "write_credential",
    "read_credential",
    "delete_credential",
    "check_credential_permissions",
    # keyring
    "keyring_available",
    "keyring_key",
    "store_in_keyring",
    "get_from_keyring",
    "delete_from_keyring",
    # logging
    "configure_logging",
    "JsonFormatter",
    "ConsoleFormatter",
]
