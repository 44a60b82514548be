"""Tests for core/retry.py (retry policy with exponential backoff)."""

from __future__ import annotations

import pytest

from portalclient.config.settings import RetrySettings
from portalclient.core.retry import Attempt, RetryPolicy, is_retryable_failure
from portalclient.errors.types import FailureDescriptor
from portalclient.models import HTTPMethod, RequestSpec

SPEC = RequestSpec(method=HTTPMethod.GET, url="/users")


def failed(policy: RetryPolicy, failure: FailureDescriptor, dispatches: int) -> Attempt:
    attempt = policy.new_attempt(SPEC)
    for _ in range(dispatches):
        attempt.record_dispatch(failure)
    return attempt


class TestIsRetryableFailure:
    """Tests for is_retryable_failure."""

    def test_transport_failure(self):
        assert is_retryable_failure(FailureDescriptor(has_response=False))

    def test_timeout(self):
        assert is_retryable_failure(FailureDescriptor(has_response=False, timed_out=True))

    @pytest.mark.parametrize("status", [500, 501, 502, 503, 504, 599])
    def test_server_statuses(self, status):
        assert is_retryable_failure(FailureDescriptor(has_response=True, status_code=status))

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422, 429])
    def test_client_statuses(self, status):
        assert not is_retryable_failure(FailureDescriptor(has_response=True, status_code=status))


class TestAttempt:
    """Tests for Attempt bookkeeping."""

    def test_starts_at_zero(self):
        attempt = Attempt(spec=SPEC)
        assert attempt.count == 0
        assert attempt.failure is None
        assert not attempt.exhausted

    def test_count_never_exceeds_max(self):
        attempt = Attempt(spec=SPEC, max_attempts=2)
        for _ in range(5):
            attempt.record_dispatch()
        assert attempt.count == 2
        assert attempt.exhausted

    def test_success_clears_failure(self):
        attempt = Attempt(spec=SPEC)
        attempt.record_dispatch(FailureDescriptor(has_response=False))
        attempt.record_dispatch()
        assert attempt.failure is None


class TestRetryPolicy:
    """Tests for RetryPolicy decisions and delays."""

    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_attempts == 3
        assert policy.base_delay == 1.0
        assert policy.max_delay == 30.0

    def test_from_settings(self):
        policy = RetryPolicy.from_settings(RetrySettings(max_attempts=5, base_delay=0.5, max_delay=4.0))
        assert policy == RetryPolicy(max_attempts=5, base_delay=0.5, max_delay=4.0)

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError, match="max_attempts"):
            RetryPolicy(max_attempts=0)

    def test_rejects_negative_delay(self):
        with pytest.raises(ValueError, match="base_delay"):
            RetryPolicy(base_delay=-1.0)

    def test_spec_overrides(self):
        spec = RequestSpec(method=HTTPMethod.GET, url="/x", max_attempts=6, base_delay=0.0)
        attempt = RetryPolicy().new_attempt(spec)
        assert attempt.max_attempts == 6
        assert attempt.base_delay == 0.0

    def test_retries_until_max_attempts(self):
        policy = RetryPolicy(max_attempts=3)
        failure = FailureDescriptor(has_response=True, status_code=503)

        assert policy.should_retry(failed(policy, failure, 1))
        assert policy.should_retry(failed(policy, failure, 2))
        assert not policy.should_retry(failed(policy, failure, 3))

    def test_never_retries_401(self):
        policy = RetryPolicy()
        assert not policy.should_retry(failed(policy, FailureDescriptor(has_response=True, status_code=401), 1))

    def test_no_failure_no_retry(self):
        policy = RetryPolicy()
        attempt = policy.new_attempt(SPEC)
        attempt.record_dispatch()
        assert not policy.should_retry(attempt)

    def test_single_attempt_policy(self):
        policy = RetryPolicy(max_attempts=1)
        assert not policy.should_retry(failed(policy, FailureDescriptor(has_response=False), 1))

    def test_delay_doubles(self):
        """Delay before dispatch k+1 is D * 2 ** (k - 1)."""
        policy = RetryPolicy(max_attempts=6, base_delay=1.0)
        failure = FailureDescriptor(has_response=False)
        delays = [policy.next_delay(failed(policy, failure, k)) for k in range(1, 6)]

        assert delays == [1.0, 2.0, 4.0, 8.0, 16.0]
        assert all(a < b for a, b in zip(delays, delays[1:]))

    def test_delay_uses_attempt_base_delay(self):
        policy = RetryPolicy(base_delay=1.0)
        spec = RequestSpec(method=HTTPMethod.GET, url="/x", base_delay=0.25)
        attempt = policy.new_attempt(spec)
        attempt.record_dispatch(FailureDescriptor(has_response=False))
        attempt.record_dispatch(FailureDescriptor(has_response=False))
        assert policy.next_delay(attempt) == 0.5

    def test_delay_is_capped(self):
        policy = RetryPolicy(max_attempts=10, base_delay=1.0, max_delay=30.0)
        attempt = failed(policy, FailureDescriptor(has_response=False), 9)
        assert policy.next_delay(attempt) == 30.0
