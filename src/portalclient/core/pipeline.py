"""Request pipeline for portal API calls.

Every call runs the same ordered stages: attach credentials, dispatch,
retry decision, classify. Transient failures are retried inside the pipeline;
only the final outcome, a response or exactly one ``NormalizedError``, is
returned to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx
import msgspec

from portalclient.auth.provider import CredentialProvider
from portalclient.config.settings import DEFAULT_TIMEOUT
from portalclient.core.retry import Attempt, RetryPolicy
from portalclient.errors.http import (
    describe_response,
    describe_transport_error,
    normalize_failure,
)
from portalclient.errors.types import ApiError, NormalizedError, RequestCancelledError
from portalclient.models import RequestSpec, clean_params

logger = logging.getLogger(__name__)

RetryCallback = Callable[[Attempt, float], None]
Sleep = Callable[[float], Awaitable[Any]]


class CancellationToken:
    """Lets a caller abort a request during dispatch or backoff."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


class RequestOutcome(msgspec.Struct):
    """Final result of one pipeline execution."""

    spec: RequestSpec
    response: httpx.Response | None = None
    error: NormalizedError | None = None
    attempts: int = 0  # Dispatches performed

    @property
    def success(self) -> bool:
        return self.error is None and self.response is not None

    def unwrap(self) -> httpx.Response:
        """Return the response, or raise ApiError for a failed outcome."""
        if self.error is not None:
            raise ApiError(self.error)
        return self.response


class RequestPipeline:
    """Runs requests through credentials, dispatch, retry and classification.

    Args:
        client: HTTP client (base URL and default headers already set)
        credentials: Credential provider for auth headers and invalidation
        policy: Retry policy (defaults to 3 attempts, 1s base delay)
        timeout: Fixed per-dispatch timeout in seconds
        sleep: Awaitable used for backoff waits
        on_retry: Callback invoked with (attempt, delay) before each retry
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        credentials: CredentialProvider,
        policy: RetryPolicy | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        sleep: Sleep = asyncio.sleep,
        on_retry: RetryCallback | None = None,
    ) -> None:
        self.client = client
        self.credentials = credentials
        self.policy = policy or RetryPolicy()
        self.timeout = timeout
        self.sleep = sleep
        self.on_retry = on_retry

    def build_request(self, spec: RequestSpec) -> httpx.Request:
        return self.client.build_request(
            spec.method.value,
            spec.url,
            params=clean_params(spec.params),
            json=spec.json,
            headers=spec.headers,
            timeout=self.timeout,
        )

    async def dispatch(self, request: httpx.Request) -> httpx.Response:
        return await self.client.send(request)

    async def execute(
        self,
        spec: RequestSpec,
        cancel: CancellationToken | None = None,
    ) -> RequestOutcome:
        """Execute a request, retrying transient failures.

        Returns:
            RequestOutcome with the response or a NormalizedError

        Raises:
            RequestCancelledError: If ``cancel`` fired before completion
        """
        attempt = self.policy.new_attempt(spec)

        while True:
            request = self.credentials.attach(self.build_request(spec))

            try:
                response = await self._until_cancelled(
                    lambda: self.dispatch(request), cancel, spec
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                cause: BaseException = e
                attempt.record_dispatch(describe_response(e.response))
            except httpx.RequestError as e:
                cause = e
                attempt.record_dispatch(describe_transport_error(e))
            else:
                attempt.record_dispatch()
                return RequestOutcome(spec=spec, response=response, attempts=attempt.count)

            if attempt.failure.status_code == 401:
                # Never retried: the session is no longer valid
                self.credentials.on_auth_invalidated()
                return self._terminal(attempt, cause)

            if not self.policy.should_retry(attempt):
                return self._terminal(attempt, cause)

            delay = self.policy.next_delay(attempt)
            logger.warning(
                "%s %s failed (%s), retrying in %.2fs (attempt %d of %d)",
                spec.method.value,
                spec.url,
                attempt.failure.status_code or type(cause).__name__,
                delay,
                attempt.count + 1,
                attempt.max_attempts,
                extra={"attempt": attempt.count, "delay": delay},
            )
            if self.on_retry:
                self.on_retry(attempt, delay)

            await self._until_cancelled(lambda: self.sleep(delay), cancel, spec)

    async def request(
        self,
        spec: RequestSpec,
        cancel: CancellationToken | None = None,
    ) -> httpx.Response:
        """Execute a request and return the response.

        Raises:
            ApiError: On terminal failure
            RequestCancelledError: If ``cancel`` fired before completion
        """
        outcome = await self.execute(spec, cancel)
        return outcome.unwrap()

    def _terminal(self, attempt: Attempt, cause: BaseException) -> RequestOutcome:
        error = normalize_failure(
            attempt.failure,
            cause=cause,
            attempts=attempt.count,
            context=attempt.spec.context,
        )
        logger.debug(
            "%s %s failed after %d attempt(s): %s",
            attempt.spec.method.value,
            attempt.spec.url,
            attempt.count,
            error.kind,
        )
        return RequestOutcome(spec=attempt.spec, error=error, attempts=attempt.count)

    async def _until_cancelled(
        self,
        make: Callable[[], Awaitable[Any]],
        cancel: CancellationToken | None,
        spec: RequestSpec,
    ) -> Any:
        """Await ``make()`` unless the token fires first."""
        if cancel is None:
            return await make()

        if cancel.cancelled:
            raise RequestCancelledError(f"{spec.method.value} {spec.url} cancelled")

        task = asyncio.ensure_future(make())
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        raise RequestCancelledError(f"{spec.method.value} {spec.url} cancelled")
