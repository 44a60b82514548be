"""Tests for config show, path and reset commands."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer import Exit as TyperExit

from portalclient.cli.commands.config import config_path_command
from portalclient.cli.commands.config import config_reset_command
from portalclient.cli.commands.config import config_show_command
from portalclient.cli.commands.config import config_to_dict
from portalclient.config.paths import config_file
from portalclient.config.settings import Config, RetrySettings, get_config


def write_config(text: str) -> None:
    path = config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


class TestConfigToDict:
    """Tests for config_to_dict."""

    def test_includes_defaults(self):
        data = config_to_dict(Config())

        assert data["retry"] == {"max_attempts": 3, "base_delay": 1.0, "max_delay": 30.0}
        assert data["display"] == {"toasts": True, "color": True}

    def test_drops_unset_values(self):
        assert "base_url" not in config_to_dict(Config())["api"]

    def test_reflects_overrides(self):
        data = config_to_dict(Config(retry=RetrySettings(max_attempts=5)))
        assert data["retry"]["max_attempts"] == 5


class TestConfigShow:
    """Tests for config show."""

    def test_json(self, cli_ctx, capsys):
        cli_ctx.meta["json"] = True
        write_config("[retry]\nmax_attempts = 4\n")

        config_show_command(cli_ctx)

        data = json.loads(capsys.readouterr().out)
        assert data["retry"]["max_attempts"] == 4
        assert data["base_url"] == "http://localhost:5000/api"
        assert data["path"] == str(config_file())

    def test_quiet_prints_path(self, cli_ctx, capsys):
        cli_ctx.meta["quiet"] = True

        config_show_command(cli_ctx)

        assert capsys.readouterr().out.strip() == str(config_file())

    def test_panel(self, cli_ctx, capsys):
        config_show_command(cli_ctx)

        output = capsys.readouterr().out
        assert "max_attempts = 3" in output
        assert "Base URL:" in output


class TestConfigPath:
    """Tests for config path."""

    def test_json(self, cli_ctx, capsys, isolated_environment):
        cli_ctx.meta["json"] = True

        config_path_command(cli_ctx, session=False)

        data = json.loads(capsys.readouterr().out)
        assert data["config_dir"] == str(isolated_environment / "config")
        assert data["state_dir"] == str(isolated_environment / "state")
        assert data["session_file"].endswith("session.json")

    def test_session_only(self, cli_ctx, capsys):
        cli_ctx.meta["json"] = True

        config_path_command(cli_ctx, session=True)

        assert list(json.loads(capsys.readouterr().out)) == ["session_file"]

    def test_quiet(self, cli_ctx, capsys, isolated_environment):
        cli_ctx.meta["quiet"] = True

        config_path_command(cli_ctx, session=False)

        assert capsys.readouterr().out.strip() == str(isolated_environment / "config")


class TestConfigReset:
    """Tests for config reset."""

    def test_deletes_file_and_reloads(self, cli_ctx, capsys):
        write_config("[retry]\nmax_attempts = 9\n")
        assert get_config().retry.max_attempts == 9

        config_reset_command(cli_ctx, confirm=True)

        assert not config_file().exists()
        assert get_config().retry.max_attempts == 3
        assert "Configuration reset to defaults" in capsys.readouterr().out

    def test_nothing_to_reset_json(self, cli_ctx, capsys):
        cli_ctx.meta["json"] = True

        config_reset_command(cli_ctx, confirm=False)

        data = json.loads(capsys.readouterr().out)
        assert data["success"] is True
        assert data["reset"] is False

    def test_declined(self, cli_ctx, capsys):
        write_config("[retry]\nmax_attempts = 9\n")

        with patch("typer.confirm", return_value=False):
            with pytest.raises(TyperExit):
                config_reset_command(cli_ctx, confirm=False)

        assert config_file().exists()
        assert "Reset cancelled" in capsys.readouterr().out
