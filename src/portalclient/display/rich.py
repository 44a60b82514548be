"""Rich-based rendering utilities for portalclient."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from portalclient.display.presenter import ToastConfig
from portalclient.models import UserIdentity

LEVEL_STYLES = {
    "error": ("red", "✗"),
    "warning": ("yellow", "!"),
    "info": ("cyan", "i"),
    "success": ("green", "✓"),
}


def render_toast(toast: ToastConfig) -> Panel:
    """Render a toast directive as a panel.

    Args:
        toast: Toast directive from the presenter

    Returns:
        Rich Panel with message and optional description
    """
    color, icon = LEVEL_STYLES.get(toast.level, LEVEL_STYLES["error"])

    text = Text()
    text.append(f"{icon} ", style=f"bold {color}")
    text.append(toast.message, style="bold")
    if toast.description:
        text.append("\n")
        text.append(toast.description, style="dim")

    return Panel(text, border_style=color, expand=False)


def make_toast_printer(console: Console):
    """Return a toast sink that prints to ``console``."""

    def print_toast(toast: ToastConfig) -> None:
        console.print(render_toast(toast))

    return print_toast


def format_identity(user: UserIdentity | None) -> Text:
    """Format the signed-in user for display."""
    text = Text()
    if user is None:
        text.append("Not signed in", style="dim")
        return text

    text.append(user.display_name, style="bold")
    if user.name:
        text.append(f" <{user.email}>", style="dim")
    if user.role:
        text.append(f" • {user.role}", style="cyan")
    return text
