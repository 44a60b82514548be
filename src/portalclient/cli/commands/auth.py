"""Session commands: login, logout and whoami."""

from __future__ import annotations

import msgspec
import typer
from rich.console import Console

from portalclient.cli.app import ExitCode
from portalclient.cli.app import app
from portalclient.cli.app import make_console
from portalclient.cli.app import portal_client
from portalclient.cli.display import report_api_error
from portalclient.cli.display import show_identity
from portalclient.display.json import output_json_pretty
from portalclient.errors.types import ApiError


@app.command("login")
async def login_command(
    ctx: typer.Context,
    email: str = typer.Argument(..., help="Account email address"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        help="Account password (prompted when omitted)",
    ),
) -> None:
    """Sign in and store the session token."""
    console = make_console(ctx)
    json_mode = ctx.meta.get("json", False)
    quiet = ctx.meta.get("quiet", False)

    async with portal_client(ctx) as portal:
        try:
            result = await portal.auth.login(email, password)
        except ApiError as e:
            report_api_error(ctx, e, "Login")

    if json_mode:
        output_json_pretty({"success": True, "user": msgspec.to_builtins(result.user)})
        return

    if not quiet:
        console.print(f"[green]✓[/green] Signed in as {result.user.display_name}")


@app.command("logout")
async def logout_command(ctx: typer.Context) -> None:
    """Sign out and forget the stored session."""
    console = make_console(ctx)
    json_mode = ctx.meta.get("json", False)

    async with portal_client(ctx) as portal:
        was_signed_in = portal.session.snapshot().authenticated
        await portal.auth.logout()

    if json_mode:
        output_json_pretty({"success": True, "was_signed_in": was_signed_in})
        return

    if ctx.meta.get("quiet", False):
        return
    if was_signed_in:
        console.print("[green]✓[/green] Signed out")
    else:
        console.print("[dim]Not signed in[/dim]")


@app.command("whoami")
async def whoami_command(
    ctx: typer.Context,
    remote: bool = typer.Option(
        False,
        "--remote",
        "-r",
        help="Ask the server instead of reading the stored session",
    ),
) -> None:
    """Show the signed-in user."""
    console: Console = make_console(ctx)
    json_mode = ctx.meta.get("json", False)
    verbose = ctx.meta.get("verbose", False)

    async with portal_client(ctx) as portal:
        state = portal.session.snapshot()
        user = state.user
        if remote and state.authenticated:
            try:
                user = await portal.auth.current_user()
            except ApiError as e:
                report_api_error(ctx, e, "Loading profile")

    if json_mode:
        output_json_pretty(
            {
                "authenticated": state.authenticated,
                "user": msgspec.to_builtins(user) if user else None,
            }
        )
    else:
        show_identity(console, user, verbose=verbose)

    if not state.authenticated:
        raise typer.Exit(ExitCode.AUTH_ERROR)
