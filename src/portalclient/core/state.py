"""Loading/error state for a sequence of API calls."""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from portalclient.display.presenter import Presentation, ToastSink, handle_api_error
from portalclient.errors.types import RequestCancelledError

T = TypeVar("T")


class ApiCallState:
    """Tracks whether a call is in flight and how the last one failed.

    Failures of any type are handed to ``handle_api_error`` and then re-raised
    so the caller can still react to them. Cancellation is not a failure.
    """

    def __init__(self, notify: ToastSink | None = None) -> None:
        self.notify = notify
        self.is_loading = False
        self.error: Presentation | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    async def execute(
        self,
        call: Callable[[], Awaitable[T]],
        context: str = "",
        *,
        show_toast: bool = True,
        on_success: Callable[[T], None] | None = None,
        on_error: Callable[[Presentation], None] | None = None,
        reset_error_on_start: bool = True,
    ) -> T:
        """Run ``call`` and record its outcome.

        Raises:
            Exception: The failure, re-raised after it has been handled.
                Cancellation is re-raised without being handled.
        """
        if reset_error_on_start:
            self.error = None
        self.is_loading = True

        try:
            result = await call()
        except RequestCancelledError:
            raise
        except Exception as e:
            self.error = handle_api_error(
                e, context, show_toast=show_toast, notify=self.notify
            )
            if on_error:
                on_error(self.error)
            raise
        finally:
            self.is_loading = False

        if on_success:
            on_success(result)
        return result

    def reset(self) -> None:
        self.is_loading = False
        self.error = None
