"""Error handling for portalclient."""

from portalclient.errors.classify import (
    STATUS_KINDS,
    classify_exception,
    classify_failure,
    classify_status,
)
from portalclient.errors.http import (
    describe_exception,
    describe_response,
    describe_transport_error,
    extract_error_fields,
    normalize_exception,
    normalize_failure,
)
from portalclient.errors.messages import (
    DEFAULT_MESSAGES,
    MAX_SERVER_MESSAGE_LENGTH,
    PRESENTATION_MESSAGES,
    get_toast_style,
    resolve_message,
    usable_server_message,
)
from portalclient.errors.network import is_network_error, is_timeout_error
from portalclient.errors.types import (
    ApiError,
    ConfigError,
    ErrorKind,
    FailureDescriptor,
    NormalizedError,
    RequestCancelledError,
)

__all__ = [
    # Core types
    "ErrorKind",
    "FailureDescriptor",
    "NormalizedError",
    "ApiError",
    "ConfigError",
    "RequestCancelledError",
    # Classification functions
    "STATUS_KINDS",
    "classify_status",
    "classify_failure",
    "classify_exception",
    # HTTP utilities
    "describe_response",
    "describe_exception",
    "describe_transport_error",
    "extract_error_fields",
    "normalize_failure",
    "normalize_exception",
    # Network utilities
    "is_network_error",
    "is_timeout_error",
    # Message templates
    "DEFAULT_MESSAGES",
    "PRESENTATION_MESSAGES",
    "MAX_SERVER_MESSAGE_LENGTH",
    "get_toast_style",
    "resolve_message",
    "usable_server_message",
]
