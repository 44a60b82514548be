"""HTTP failure descriptors and normalization.

This module is the transport boundary: it turns httpx responses and
exceptions into typed ``FailureDescriptor`` values once, and builds the
``NormalizedError`` for a terminal failure from them.
"""

from __future__ import annotations

import httpx

from portalclient.errors.classify import classify_exception, classify_failure
from portalclient.errors.messages import resolve_message
from portalclient.errors.network import is_network_error, is_timeout_error
from portalclient.errors.types import (
    ApiError,
    ErrorKind,
    FailureDescriptor,
    NormalizedError,
)


def _request_of(source: httpx.Response | httpx.RequestError) -> httpx.Request | None:
    # httpx raises RuntimeError when the request was never attached
    try:
        return source.request
    except RuntimeError:
        return None


def extract_error_fields(response: httpx.Response) -> tuple[str | None, str | None]:
    """Extract the structured error message and code from a response body.

    The portal API reports failures as ``{"error": {"code": ..., "message": ...}}``.

    Args:
        response: HTTP response with error status

    Returns:
        (message, code), each None when absent or not a string
    """
    try:
        body = response.json()
    except ValueError:
        return None, None

    if not isinstance(body, dict):
        return None, None

    error = body.get("error")
    if not isinstance(error, dict):
        return None, None

    message = error.get("message")
    code = error.get("code")
    return (
        message if isinstance(message, str) else None,
        code if isinstance(code, str) else None,
    )


def describe_response(response: httpx.Response) -> FailureDescriptor:
    """Describe a failed dispatch that received a response."""
    message, code = extract_error_fields(response)
    request = _request_of(response)

    return FailureDescriptor(
        has_response=True,
        status_code=response.status_code,
        status_text=response.reason_phrase or None,
        server_message=message,
        error_code=code,
        url=str(request.url) if request is not None else None,
        method=request.method if request is not None else None,
    )


def describe_transport_error(error: httpx.RequestError) -> FailureDescriptor:
    """Describe a failed dispatch that never received a response."""
    request = _request_of(error)

    return FailureDescriptor(
        has_response=False,
        timed_out=is_timeout_error(error),
        url=str(request.url) if request is not None else None,
        method=request.method if request is not None else None,
    )


def describe_exception(error: BaseException) -> FailureDescriptor | None:
    """Describe a failed dispatch from the exception it raised.

    Returns:
        The descriptor, or None if the exception did not come from HTTP
    """
    if isinstance(error, ApiError):
        return error.error.failure

    if isinstance(error, httpx.HTTPStatusError):
        return describe_response(error.response)

    if is_network_error(error):
        return describe_transport_error(error)

    return None


def normalize_failure(
    failure: FailureDescriptor,
    cause: BaseException | None = None,
    attempts: int = 1,
    context: str | None = None,
) -> NormalizedError:
    """Classify a terminal failure and build the caller-facing error."""
    kind = classify_failure(failure)

    return NormalizedError(
        kind=kind,
        message=resolve_message(kind, failure.server_message),
        status_code=failure.status_code,
        is_network_error=not failure.has_response,
        cause=cause,
        failure=failure,
        attempts=attempts,
        context=context,
    )


def normalize_exception(error: BaseException) -> NormalizedError:
    """Build a NormalizedError from an error object alone."""
    if isinstance(error, ApiError):
        return error.error

    failure = describe_exception(error)
    if failure is not None:
        return normalize_failure(failure, cause=error)

    return NormalizedError(
        kind=classify_exception(error),
        message=resolve_message(ErrorKind.UNKNOWN),
        cause=error,
    )
