"""Config management commands for portalclient."""

from __future__ import annotations

import msgspec
import tomli_w
import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from portalclient.cli.atyper import ATyper
from portalclient.config.paths import config_dir
from portalclient.config.paths import config_file
from portalclient.config.paths import session_file
from portalclient.config.paths import state_dir
from portalclient.config.settings import Config
from portalclient.config.settings import get_config
from portalclient.config.settings import reload_config
from portalclient.display.json import output_json_pretty

# Create config group
config_app = ATyper(help="Manage configuration settings.")


def config_to_dict(config: Config) -> dict[str, dict[str, object]]:
    """Every setting, defaults included; unset values are left out."""
    return {
        name: {k: v for k, v in msgspec.structs.asdict(section).items() if v is not None}
        for name, section in msgspec.structs.asdict(config).items()
    }


@config_app.command("show")
def config_show_command(ctx: typer.Context) -> None:
    """Display current settings, environment overrides included."""
    console = Console()

    config = get_config()
    config_path = config_file()
    json_mode = ctx.meta.get("json", False)
    verbose = ctx.meta.get("verbose", False)
    quiet = ctx.meta.get("quiet", False)

    if json_mode:
        data: dict[str, object] = dict(config_to_dict(config))
        data["base_url"] = config.api.resolved_base_url()
        data["path"] = str(config_path)
        output_json_pretty(data)
        return

    # Quiet mode: minimal output
    if quiet:
        console.print(str(config_path))
        return

    toml_text = tomli_w.dumps(config_to_dict(config))
    console.print(Panel(Syntax(toml_text, "toml"), title=f"Config: {config_path}"))
    console.print(f"Base URL: [cyan]{config.api.resolved_base_url()}[/cyan]")

    if verbose:
        if config_path.exists():
            console.print(f"[dim]File size: {config_path.stat().st_size} bytes[/dim]")
        else:
            console.print("[dim]Using default configuration (file not created yet)[/dim]")


@config_app.command("path")
def config_path_command(
    ctx: typer.Context,
    session: bool = typer.Option(
        False, "--session", "-s", help="Show the session file path"
    ),
) -> None:
    """Show file and directory paths used by portalclient."""
    console = Console()
    json_mode = ctx.meta.get("json", False)
    verbose = ctx.meta.get("verbose", False)
    quiet = ctx.meta.get("quiet", False)

    if json_mode:
        if session:
            output_json_pretty({"session_file": str(session_file())})
        else:
            output_json_pretty(
                {
                    "config_dir": str(config_dir()),
                    "config_file": str(config_file()),
                    "state_dir": str(state_dir()),
                    "session_file": str(session_file()),
                }
            )
        return

    if session:
        console.print(str(session_file()))
        if verbose:
            console.print(f"[dim]Exists: {session_file().exists()}[/dim]")
        return

    if quiet:
        console.print(str(config_dir()))
        return

    console.print(f"Config dir:    {config_dir()}")
    console.print(f"Config file:   {config_file()}")
    console.print(f"State dir:     {state_dir()}")
    console.print(f"Session file:  {session_file()}")
    if verbose:
        console.print("\n[dim]Directory status:[/dim]")
        console.print(f"  Config dir exists: {config_dir().exists()}")
        console.print(f"  State dir exists: {state_dir().exists()}")


@config_app.command("reset")
def config_reset_command(
    ctx: typer.Context,
    confirm: bool = typer.Option(
        False,
        "--confirm",
        "-y",
        help="Skip confirmation prompt",
    ),
) -> None:
    """Reset configuration to defaults."""
    console = Console()
    json_mode = ctx.meta.get("json", False)

    result: dict[str, object] = {"success": False, "reset": False}

    # In JSON mode, auto-confirm to avoid hanging
    if not confirm and not json_mode:
        confirm = typer.confirm(
            "This will reset your configuration to defaults. Continue?",
            default=False,
        )
    elif json_mode:
        confirm = True

    if not confirm:
        console.print("Reset cancelled")
        raise typer.Exit()

    cfg_path = config_file()
    if cfg_path.exists():
        cfg_path.unlink()
        reload_config()
        result.update(
            success=True,
            reset=True,
            message="Configuration reset to defaults",
            deleted=str(cfg_path),
        )
    else:
        result.update(success=True, message="No custom configuration to reset")

    if json_mode:
        output_json_pretty(result)
        return

    if result["reset"]:
        console.print("[green]✓[/green] Configuration reset to defaults")
        console.print(f"\nDeleted: {cfg_path}")
    else:
        console.print("[yellow]No custom configuration to reset[/yellow]")
