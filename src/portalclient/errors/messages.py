"""User-facing message templates per error kind."""

from __future__ import annotations

from portalclient.errors.types import ErrorKind

# Server messages at or above this length are treated as raw payloads
MAX_SERVER_MESSAGE_LENGTH = 200

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NETWORK: "Network error. Please check your connection and try again.",
    ErrorKind.VALIDATION: "Invalid request. Please check your input and try again.",
    ErrorKind.AUTHENTICATION: "Authentication required. Please log in again.",
    ErrorKind.AUTHORIZATION: "You do not have permission to perform this action.",
    ErrorKind.NOT_FOUND: "The requested resource was not found.",
    ErrorKind.CONFLICT: "Conflict. The resource already exists or is in use.",
    ErrorKind.SERVER: "Server error. Please try again later.",
    ErrorKind.UNKNOWN: "An unexpected error occurred. Please try again.",
}

# Shorter wording used when presenting to the user
PRESENTATION_MESSAGES: dict[ErrorKind, str] = {
    **DEFAULT_MESSAGES,
    ErrorKind.VALIDATION: "Please check your input and try again.",
    ErrorKind.AUTHENTICATION: "Please log in to continue.",
}

TOAST_STYLES: dict[ErrorKind, tuple[str | None, int]] = {
    ErrorKind.NETWORK: ("Check your internet connection", 5000),
    ErrorKind.VALIDATION: ("Please review the form and try again", 4000),
    ErrorKind.AUTHORIZATION: ("Contact your administrator if you need access", 6000),
    ErrorKind.SERVER: ("Our team has been notified", 5000),
}
DEFAULT_TOAST_STYLE: tuple[str | None, int] = (None, 4000)


def usable_server_message(message: str | None) -> str | None:
    """Return the server message if it is fit to show verbatim."""
    if not message or not message.strip():
        return None
    if len(message) >= MAX_SERVER_MESSAGE_LENGTH:
        return None
    return message


def resolve_message(
    kind: ErrorKind,
    server_message: str | None = None,
    context: str | None = None,
    *,
    templates: dict[ErrorKind, str] = DEFAULT_MESSAGES,
) -> str:
    """Pick the message for a failure.

    A usable server message wins and is returned as-is. Otherwise the kind's
    template is used, prefixed with ``"<context>: "`` when a context is given.
    """
    if usable := usable_server_message(server_message):
        return usable

    prefix = f"{context}: " if context else ""
    return f"{prefix}{templates[kind]}"


def get_toast_style(kind: ErrorKind) -> tuple[str | None, int]:
    """Get (description, duration in ms) for a toast of this kind."""
    return TOAST_STYLES.get(kind, DEFAULT_TOAST_STYLE)
