"""Error types and classifications."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

import msgspec


class ErrorKind(StrEnum):
    """Closed set of terminal failure kinds."""

    NETWORK = "network"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER = "server"
    UNKNOWN = "unknown"


class FailureDescriptor(msgspec.Struct, frozen=True):
    """What the transport boundary knows about one failed dispatch.

    Populated once, from the exception or the error response, and read only
    through these fields afterwards.
    """

    has_response: bool
    status_code: int | None = None
    status_text: str | None = None
    server_message: str | None = None
    error_code: str | None = None
    timed_out: bool = False
    url: str | None = None
    method: str | None = None


class NormalizedError(msgspec.Struct, frozen=True):
    """Caller-facing representation of a terminal failure."""

    kind: ErrorKind
    message: str
    status_code: int | None = None
    is_network_error: bool = False
    cause: BaseException | None = None
    failure: FailureDescriptor | None = None
    attempts: int = 1
    context: str | None = None  # Label of the call that failed, from its RequestSpec
    timestamp: datetime = msgspec.field(
        default_factory=lambda: datetime.now().astimezone()
    )

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization (the cause is summarized)."""
        data = {
            "kind": self.kind.value,
            "message": self.message,
            "is_network_error": self.is_network_error,
            "attempts": self.attempts,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.status_code is not None:
            data["status_code"] = self.status_code
        if self.context is not None:
            data["context"] = self.context
        if self.failure is not None:
            data["url"] = self.failure.url
            data["method"] = self.failure.method
        if self.cause is not None:
            data["cause"] = type(self.cause).__name__
        return data


class ApiError(Exception):
    """Raised by the pipeline's raising entry points on terminal failure."""

    def __init__(self, error: NormalizedError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def status_code(self) -> int | None:
        return self.error.status_code


class RequestCancelledError(Exception):
    """A request was aborted through its cancellation token."""


class ConfigError(Exception):
    """The configuration file could not be read or converted."""
