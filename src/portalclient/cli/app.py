"""Main CLI application for portalclient."""

from __future__ import annotations

from contextlib import asynccontextmanager
from enum import IntEnum

import typer
from rich.console import Console

from portalclient.cli.atyper import ATyper
from portalclient.errors.types import ConfigError, ErrorKind

# Create the main app
app = ATyper(
    name="portalclient",
    help="Command-line client for the counselling portal API",
    add_completion=True,
    invoke_without_command=True,
    no_args_is_help=True,
)


class ExitCode(IntEnum):
    """Exit codes for portalclient."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 2
    NETWORK_ERROR = 3
    CONFIG_ERROR = 4
    SERVER_ERROR = 5
    VALIDATION_ERROR = 6


KIND_EXIT_CODES: dict[ErrorKind, ExitCode] = {
    ErrorKind.AUTHENTICATION: ExitCode.AUTH_ERROR,
    ErrorKind.AUTHORIZATION: ExitCode.AUTH_ERROR,
    ErrorKind.NETWORK: ExitCode.NETWORK_ERROR,
    ErrorKind.SERVER: ExitCode.SERVER_ERROR,
    ErrorKind.VALIDATION: ExitCode.VALIDATION_ERROR,
}


def exit_code_for(kind: ErrorKind) -> ExitCode:
    """Map an error kind to the process exit code."""
    return KIND_EXIT_CODES.get(kind, ExitCode.GENERAL_ERROR)


@app.callback()
def main(
    ctx: typer.Context,
    json: bool = typer.Option(False, "--json", "-j", help="Enable JSON output mode"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Enable quiet mode"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Portalclient - talk to the counselling portal API."""
    if version:
        from portalclient import __version__

        typer.echo(f"portalclient {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    # Resolve conflicts: verbose and quiet are mutually exclusive, quiet takes precedence
    if verbose and quiet:
        quiet = True
        verbose = False

    from portalclient.config.logs import configure_logging
    from portalclient.config.settings import get_config

    try:
        config = get_config()
    except ConfigError as e:
        Console(stderr=True).print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(ExitCode.CONFIG_ERROR) from e

    configure_logging(
        "DEBUG" if verbose else config.logging.level,
        json_output=config.logging.json,
    )

    # Store options in context
    ctx.meta["json"] = json
    ctx.meta["no_color"] = no_color or not config.display.color
    ctx.meta["verbose"] = verbose
    ctx.meta["quiet"] = quiet


def make_console(ctx: typer.Context, stderr: bool = False) -> Console:
    """Console honoring the --no-color flag."""
    return Console(stderr=stderr, no_color=ctx.meta.get("no_color", False))


def make_navigator(console: Console):
    """Tell the user to log in again when the session is invalidated."""

    def navigate(route: str) -> None:
        console.print(
            "[yellow]Session expired.[/yellow] "
            "Run '[cyan]portalclient login[/cyan]' to sign in again."
        )

    return navigate


@asynccontextmanager
async def portal_client(ctx: typer.Context):
    """Open a PortalClient on the shared HTTP client and close it afterwards."""
    from portalclient.api.client import PortalClient
    from portalclient.config.settings import get_config
    from portalclient.core.http import cleanup
    from portalclient.core.http import get_http_client

    console = make_console(ctx, stderr=True)

    def on_retry(attempt, delay: float) -> None:
        if ctx.meta.get("verbose", False):
            console.print(
                f"[dim]Retrying in {delay:.1f}s "
                f"(attempt {attempt.count + 1} of {attempt.max_attempts})[/dim]"
            )

    try:
        async with get_http_client() as http:
            yield PortalClient(
                get_config(),
                http_client=http,
                navigate=make_navigator(console),
                on_retry=on_retry,
            )
    finally:
        # Cleanup HTTP client
        await cleanup()


def run_app() -> None:
    """Run the CLI app."""
    app()


# Import commands to register them with the app
# These imports must come after app is defined
from portalclient.cli.commands import auth  # noqa: F401 (registers login/logout/whoami)
from portalclient.cli.commands import request  # noqa: F401 (registers request command)

# Import the config module and register its typer group
from portalclient.cli.commands import config as config_cmd  # noqa: E402, F401

app.add_typer(config_cmd.config_app, name="config")

__all__ = ["app", "run_app", "ExitCode", "exit_code_for", "portal_client"]
