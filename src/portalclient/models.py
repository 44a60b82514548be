"""Data models for portalclient.

Defines the request descriptor handed to the pipeline and the identity
records returned by the portal API.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

import msgspec


class HTTPMethod(StrEnum):
    """HTTP methods the portal API uses."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class RequestSpec(msgspec.Struct, frozen=True):
    """Endpoint descriptor for one logical API call."""

    method: HTTPMethod
    url: str  # Relative to the configured base URL, or absolute
    params: dict[str, Any] | None = None
    json: Any = None  # Request body, encoded as JSON
    headers: dict[str, str] | None = None
    context: str | None = None  # Label for messages and logs (e.g., "Saving profile")
    max_attempts: int | None = None  # Per-call override of the retry policy
    base_delay: float | None = None  # Per-call override, in seconds

    def __post_init__(self) -> None:
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay is not None and self.base_delay < 0:
            raise ValueError(f"base_delay must be >= 0, got {self.base_delay}")


class UserRole(StrEnum):
    """Portal user roles."""

    STUDENT = "student"
    COUNSELOR = "counselor"
    CHAIRPERSON = "chairperson"
    ADMIN = "admin"


class UserIdentity(msgspec.Struct, frozen=True):
    """Cached identity of the signed-in user."""

    id: str | int
    email: str
    name: str | None = None
    role: str | None = None  # Lower-cased role name as sent by the server

    @property
    def display_name(self) -> str:
        return self.name or self.email


class LoginResult(msgspec.Struct, frozen=True):
    """Body of a successful login response."""

    token: str
    user: UserIdentity
    message: str | None = None


def clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    """Drop None and empty-string values from query filters."""
    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v is not None and v != ""}
    return cleaned or None
