"""Request pipeline and utilities for portalclient."""

from portalclient.core.http import (
    cleanup,
    create_http_client,
    get_http_client,
    get_timeout_config,
)
from portalclient.core.orchestrator import categorize_outcomes, execute_all
from portalclient.core.pipeline import (
    CancellationToken,
    RequestOutcome,
    RequestPipeline,
)
from portalclient.core.retry import Attempt, RetryPolicy, is_retryable_failure
from portalclient.core.state import ApiCallState

__all__ = [
    # http
    "get_http_client",
    "create_http_client",
    "cleanup",
    "get_timeout_config",
    # retry
    "Attempt",
    "RetryPolicy",
    "is_retryable_failure",
    # pipeline
    "CancellationToken",
    "RequestOutcome",
    "RequestPipeline",
    # orchestrator
    "execute_all",
    "categorize_outcomes",
    # state
    "ApiCallState",
]
