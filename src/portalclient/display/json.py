"""JSON output utilities for portalclient."""

from __future__ import annotations

import sys

import msgspec

from portalclient.display.presenter import ErrorLogRecord, Presentation

__all__ = [
    "ErrorResponse",
    "ErrorData",
    "from_presentation",
    "output_json",
    "output_json_pretty",
    "output_json_error",
    "encode_json",
    "decode_json",
]


class ErrorData(msgspec.Struct, frozen=True, omit_defaults=True):
    """Error data with kind, message and diagnostics."""

    kind: str
    message: str
    status_code: int | None = None
    is_network_error: bool = False
    attempts: int = 1
    log: ErrorLogRecord | None = None


class ErrorResponse(msgspec.Struct, frozen=True):
    """Structured error response for JSON output."""

    error: ErrorData


def from_presentation(presentation: Presentation) -> ErrorResponse:
    """Create an ErrorResponse from a presented failure."""
    error = presentation.error
    return ErrorResponse(
        error=ErrorData(
            kind=presentation.kind.value,
            message=presentation.message,
            status_code=error.status_code,
            is_network_error=error.is_network_error,
            attempts=error.attempts,
            log=presentation.log_record,
        )
    )


def output_json(data: object) -> None:
    """Output data as JSON to stdout.

    Args:
        data: Any msgspec-serializable object (Struct, dict, list, etc.)
    """
    json_bytes = msgspec.json.encode(data)
    sys.stdout.buffer.write(json_bytes)
    sys.stdout.buffer.write(b"\n")


def output_json_pretty(data: object, indent: int = 2) -> None:
    """Output data as pretty-printed JSON to stdout.

    Args:
        data: Any msgspec-serializable object
        indent: Number of spaces for indentation
    """
    json_bytes = msgspec.json.format(msgspec.json.encode(data), indent=indent)
    sys.stdout.write(json_bytes.decode())
    sys.stdout.write("\n")


def output_json_error(presentation: Presentation, indent: int = 2) -> None:
    """Output a presented failure in standardized JSON format."""
    output_json_pretty(from_presentation(presentation), indent=indent)


def encode_json(data: object) -> bytes:
    """Encode data as JSON bytes."""
    return msgspec.json.encode(data)


def decode_json(json_bytes: bytes, type_hint: type | None = None) -> object:
    """Decode JSON bytes to Python object.

    Args:
        json_bytes: JSON-encoded bytes
        type_hint: Optional msgspec type for validation

    Returns:
        Decoded Python object
    """
    if type_hint:
        return msgspec.json.decode(json_bytes, type=type_hint)
    return msgspec.json.decode(json_bytes)
