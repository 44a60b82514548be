"""Authentication credential types."""

from __future__ import annotations

from typing import Protocol

import msgspec


class AuthCredentials(Protocol):
    """Protocol for authentication credentials."""

    def to_headers(self) -> dict[str, str]:
        """Return HTTP headers for authenticated requests."""
        ...


class BearerCredentials(msgspec.Struct, frozen=True):
    """Bearer token credentials."""

    token: str
    header_name: str = "Authorization"
    prefix: str = "Bearer"

    def to_headers(self) -> dict[str, str]:
        """Return auth header."""
        if self.prefix:
            return {self.header_name: f"{self.prefix} {self.token}"}
        return {self.header_name: self.token}

    def __repr__(self) -> str:
        return f"BearerCredentials(header_name={self.header_name!r}, token=***)"
