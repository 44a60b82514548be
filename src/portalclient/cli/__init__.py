"""Command-line interface for portalclient."""
from __future__ import annotations

from portalclient.cli.app import ExitCode
from portalclient.cli.app import app
from portalclient.cli.app import exit_code_for
from portalclient.cli.app import run_app

__all__ = ["app", "run_app", "ExitCode", "exit_code_for"]
