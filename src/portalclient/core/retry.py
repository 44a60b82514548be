"""Retry policy with exponential backoff for portalclient."""

from __future__ import annotations

from dataclasses import dataclass

from portalclient.config.settings import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
    RetrySettings,
)
from portalclient.errors.types import FailureDescriptor
from portalclient.models import RequestSpec


@dataclass
class Attempt:
    """Retry state for one pipeline execution.

    ``count`` is the number of dispatches performed so far. It starts at 0
    and is incremented after every dispatch, never past ``max_attempts``.
    """

    spec: RequestSpec
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: float = DEFAULT_BASE_DELAY  # seconds
    count: int = 0
    failure: FailureDescriptor | None = None

    def record_dispatch(self, failure: FailureDescriptor | None = None) -> None:
        """Count a dispatch and remember how it failed, if it did."""
        self.count = min(self.count + 1, self.max_attempts)
        self.failure = failure

    @property
    def exhausted(self) -> bool:
        return self.count >= self.max_attempts


def is_retryable_failure(failure: FailureDescriptor) -> bool:
    """Transport failures, timeouts and 5xx responses are retryable.

    Authentication failures never are: the session is no longer valid.
    """
    if failure.status_code == 401:
        return False

    if not failure.has_response or failure.timed_out:
        return True

    return failure.status_code is not None and failure.status_code >= 500


@dataclass(frozen=True)
class RetryPolicy:
    """Decides whether and when a failed attempt is dispatched again.

    ``max_delay`` caps the backoff; it is not part of the plain doubling rule.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: float = DEFAULT_BASE_DELAY  # seconds
    max_delay: float = DEFAULT_MAX_DELAY  # seconds

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("base_delay and max_delay must be >= 0")

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> RetryPolicy:
        return cls(
            max_attempts=settings.max_attempts,
            base_delay=settings.base_delay,
            max_delay=settings.max_delay,
        )

    def new_attempt(self, spec: RequestSpec) -> Attempt:
        """Start retry state for a request, honoring per-call overrides."""
        return Attempt(
            spec=spec,
            max_attempts=spec.max_attempts or self.max_attempts,
            base_delay=(
                spec.base_delay if spec.base_delay is not None else self.base_delay
            ),
        )

    def should_retry(self, attempt: Attempt) -> bool:
        """Check if the latest failure of an attempt should be dispatched again."""
        if attempt.failure is None or attempt.exhausted:
            return False
        return is_retryable_failure(attempt.failure)

    def next_delay(self, attempt: Attempt) -> float:
        """Delay before the next dispatch: base_delay * 2 ** (count - 1).

        Returns:
            Delay in seconds
        """
        delay = attempt.base_delay * (2 ** max(attempt.count - 1, 0))
        return min(delay, self.max_delay)
