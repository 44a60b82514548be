"""Failure classification into ErrorKind.

The status table here is the single source of truth for both the request
pipeline and handlers that only hold an error object.
"""

from __future__ import annotations

import httpx

from portalclient.errors.types import (
    ApiError,
    ErrorKind,
    FailureDescriptor,
    NormalizedError,
)

STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.VALIDATION,
    422: ErrorKind.VALIDATION,
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.AUTHORIZATION,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    500: ErrorKind.SERVER,
    502: ErrorKind.SERVER,
    503: ErrorKind.SERVER,
    504: ErrorKind.SERVER,
}


def classify_status(status_code: int) -> ErrorKind:
    """Classify a response status code."""
    return STATUS_KINDS.get(status_code, ErrorKind.UNKNOWN)


def classify_failure(failure: FailureDescriptor) -> ErrorKind:
    """Classify a failed dispatch. Total: every failure maps to one kind."""
    if not failure.has_response or failure.status_code is None:
        return ErrorKind.NETWORK
    return classify_status(failure.status_code)


def classify_exception(e: BaseException | NormalizedError) -> ErrorKind:
    """Classify an error object without its original request context."""
    if isinstance(e, ApiError):
        return e.error.kind

    if isinstance(e, NormalizedError):
        return e.kind

    if isinstance(e, httpx.HTTPStatusError):
        return classify_status(e.response.status_code)

    if isinstance(e, httpx.RequestError):
        return ErrorKind.NETWORK

    return ErrorKind.UNKNOWN
