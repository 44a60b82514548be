"""Presentation of classified errors.

Turns a ``NormalizedError`` into the message shown to the user, a toast
directive and a structured log record. Presenting has no effect on retry or
session state and can be repeated for the same error.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Literal

import msgspec

from portalclient.errors.http import normalize_exception
from portalclient.errors.messages import (
    PRESENTATION_MESSAGES,
    get_toast_style,
    resolve_message,
)
from portalclient.errors.types import ErrorKind, NormalizedError

logger = logging.getLogger(__name__)


class ToastConfig(msgspec.Struct, frozen=True):
    """Display directive for a transient notification."""

    message: str
    description: str | None = None
    duration_ms: int = 4000
    level: Literal["error", "warning", "info", "success"] = "error"


class ErrorLogRecord(msgspec.Struct, frozen=True, omit_defaults=True):
    """Diagnostic record of a failure, captured when it was classified."""

    message: str
    kind: ErrorKind
    timestamp: str  # ISO-8601
    status: int | None = None
    status_text: str | None = None
    url: str | None = None
    method: str | None = None
    context: str | None = None
    extra: dict[str, Any] = {}


class Presentation(msgspec.Struct, frozen=True):
    """Everything needed to show and log one failure."""

    kind: ErrorKind
    message: str
    toast: ToastConfig
    log_record: ErrorLogRecord
    error: NormalizedError


ToastSink = Callable[[ToastConfig], None]


def present_message(error: NormalizedError, context: str | None = None) -> str:
    """User-facing message: usable server message, else prefixed default."""
    server_message = error.failure.server_message if error.failure else None
    return resolve_message(
        error.kind,
        server_message,
        context or error.context,
        templates=PRESENTATION_MESSAGES,
    )


def build_log_record(
    error: NormalizedError,
    context: str | None = None,
    extra: dict[str, Any] | None = None,
) -> ErrorLogRecord:
    failure = error.failure
    return ErrorLogRecord(
        message=error.message,
        kind=error.kind,
        timestamp=error.timestamp.isoformat(),
        status=error.status_code,
        status_text=failure.status_text if failure else None,
        url=failure.url if failure else None,
        method=failure.method if failure else None,
        context=context or error.context or None,
        extra=dict(extra or {}),
    )


def present(
    error: NormalizedError,
    context: str | None = None,
    extra: dict[str, Any] | None = None,
) -> Presentation:
    """Build message, toast directive and log record for a failure.

    Without an explicit ``context`` the label of the failed request is used.
    """
    message = present_message(error, context)
    description, duration_ms = get_toast_style(error.kind)

    return Presentation(
        kind=error.kind,
        message=message,
        toast=ToastConfig(
            message=message, description=description, duration_ms=duration_ms
        ),
        log_record=build_log_record(error, context, extra),
        error=error,
    )


def emit_log_record(record: ErrorLogRecord, log: logging.Logger | None = None) -> None:
    """Log a failure record at ERROR with the record attached for formatters."""
    (log or logger).error(
        "API error: %s: %s",
        record.context or "Unknown",
        record.message,
        extra={"api_error": msgspec.to_builtins(record, enc_hook=str)},
    )


def handle_api_error(
    error: BaseException | NormalizedError,
    context: str | None = None,
    *,
    show_toast: bool = True,
    log: bool = True,
    extra: dict[str, Any] | None = None,
    notify: ToastSink | None = None,
) -> Presentation:
    """Log a failure and emit its toast directive.

    Accepts a NormalizedError, an ApiError, or any other exception; the
    latter are classified with the same status table as the pipeline.

    Args:
        error: The failure to handle
        context: Label of the operation that failed (e.g., "Saving profile")
        show_toast: Whether to send the toast directive to ``notify``
        log: Whether to emit the log record
        extra: Additional fields for the log record
        notify: Receiver of toast directives

    Returns:
        The Presentation of the failure
    """
    normalized = error if isinstance(error, NormalizedError) else normalize_exception(error)
    presentation = present(normalized, context, extra)

    if log:
        emit_log_record(presentation.log_record)

    if show_toast and notify is not None:
        notify(presentation.toast)

    return presentation
