"""Terminal output helpers shared by the CLI commands."""

from __future__ import annotations

from typing import Any, NoReturn

import msgspec
import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from portalclient.display.json import encode_json, output_json_error, output_json_pretty
from portalclient.display.presenter import handle_api_error
from portalclient.display.rich import format_identity, make_toast_printer
from portalclient.errors.types import ApiError
from portalclient.models import UserIdentity


def report_api_error(
    ctx: typer.Context,
    error: ApiError,
    context: str | None = None,
    console: Console | None = None,
) -> NoReturn:
    """Present a failed call and exit with the code for its kind.

    JSON mode writes the error document to stdout; otherwise the toast is
    rendered on stderr unless quiet mode or ``display.toasts`` is off.
    """
    from portalclient.cli.app import exit_code_for
    from portalclient.config.settings import get_config

    console = console or Console(stderr=True, no_color=ctx.meta.get("no_color", False))
    json_mode = ctx.meta.get("json", False)
    quiet = ctx.meta.get("quiet", False)
    show_toast = not json_mode and not quiet and get_config().display.toasts

    presentation = handle_api_error(
        error,
        context,
        show_toast=show_toast,
        notify=make_toast_printer(console),
    )

    if json_mode:
        output_json_error(presentation)
    elif quiet or not show_toast:
        console.print(f"[red]{presentation.message}[/red]")

    raise typer.Exit(exit_code_for(presentation.kind))


def show_body(ctx: typer.Context, body: Any, console: Console | None = None) -> None:
    """Print a decoded response body."""
    if ctx.meta.get("json", False):
        output_json_pretty(body)
        return

    console = console or Console(no_color=ctx.meta.get("no_color", False))
    if body is None:
        if not ctx.meta.get("quiet", False):
            console.print("[dim](empty response)[/dim]")
        return

    text = msgspec.json.format(encode_json(body), indent=2).decode()
    console.print(Syntax(text, "json", word_wrap=True))


def show_identity(console: Console, user: UserIdentity | None, verbose: bool = False) -> None:
    """Print who is signed in, with a detail table in verbose mode."""
    if not verbose or user is None:
        console.print(format_identity(user))
        return

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("ID", str(user.id))
    table.add_row("Email", user.email)
    table.add_row("Name", user.name or "")
    table.add_row("Role", user.role or "")
    console.print(Panel(table, title="Signed in", border_style="green", expand=False))


__all__ = ["report_api_error", "show_body", "show_identity"]
