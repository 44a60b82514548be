"""Typer subclass that can register ``async def`` commands."""

import asyncio
import inspect
from functools import wraps
from typing import Any, Callable

import typer
from typer.core import TyperCommand, TyperGroup


def run_sync(f: Callable) -> Callable:
    """Wrap a coroutine function so click can call it like a plain function."""

    @wraps(f)
    def runner(*args: Any, **kwargs: Any) -> Any:
        coro = f(*args, **kwargs)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        # Inside a running loop (tests driving commands directly), hand the
        # coroutine back to the caller
        return coro

    return runner


class AsyncTyperGroup(TyperGroup):
    """Group whose callback may be a coroutine function."""

    def invoke(self, ctx: Any) -> Any:
        if inspect.iscoroutinefunction(self.callback):
            self.callback = run_sync(self.callback)
        return super().invoke(ctx)


class ATyper(typer.Typer):
    """Typer with async command support.

    Commands declared with ``async def`` are run to completion with
    ``asyncio.run`` when invoked from the command line.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("cls", AsyncTyperGroup)
        kwargs.setdefault("no_args_is_help", False)
        super().__init__(*args, **kwargs)

    def command(  # type: ignore
        self,
        name: str | None = None,
        *,
        cls: type[TyperCommand] | None = None,
        **kwargs: Any,
    ) -> Any:
        def decorator(f: Callable) -> Callable:
            if inspect.iscoroutinefunction(f):
                f = run_sync(f)
            if cls is not None:
                kwargs["cls"] = cls
            return typer.Typer.command(self, name, **kwargs)(f)

        return decorator
