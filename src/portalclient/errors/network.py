"""Network error predicates.

This module answers "did the server answer at all" questions about httpx
exceptions.
"""

from __future__ import annotations

import httpx


def is_network_error(error: BaseException) -> bool:
    """Check if an exception means no response was received.

    Args:
        error: Exception to check

    Returns:
        True for transport failures, including timeouts
    """
    return isinstance(error, httpx.RequestError)


def is_timeout_error(error: BaseException) -> bool:
    """Check if an exception is a timeout signal.

    Args:
        error: Exception to check

    Returns:
        True if connect, read, write or pool timeout fired
    """
    return isinstance(error, httpx.TimeoutException)
