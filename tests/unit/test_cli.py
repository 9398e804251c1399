"""Tests for the cmdroute CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cmdroute import __version__
from cmdroute.cli.app import EXIT_REJECTED, EXIT_UNRESOLVED, app
from cmdroute.cli.context import create_caller, create_session
from cmdroute.config.schema import CmdRouteConfig
from cmdroute.exceptions import ConfigNotFoundError

runner = CliRunner()


@pytest.fixture
def config_file(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Config file with two online players and quiet logging."""
    monkeypatch.setenv("CMDROUTE_LOG_LEVEL", "WARNING")
    path = temp_dir / "config.toml"
    path.write_text(
        "[logging]\n"
        "color = false\n"
        "[console]\n"
        'entities = ["Alice", "Bob"]\n'
        'permissions = ["*"]\n'
    )
    return path


def output_lines(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """Test the version flag."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"cmdroute version {__version__}" in result.output


class TestRun:
    """Tests for the run command."""

    def test_serverinfo(self, config_file: Path) -> None:
        """Test dispatching the base command."""
        result = runner.invoke(app, ["run", "serverinfo", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "Server version: 1.0.0" in result.output
        assert "Online players: 2/20" in result.output

    def test_nested_command(self, config_file: Path) -> None:
        """Test dispatching a nested command with arguments."""
        result = runner.invoke(
            app,
            ["run", "serverinfo", "performance", "FULL", "--config", str(config_file)],
        )

        assert result.exit_code == 0
        assert "Detail level: full" in result.output

    def test_permission_denied(self, config_file: Path) -> None:
        """Test a narrowed permission set rejects the command."""
        result = runner.invoke(
            app,
            [
                "run",
                "serverinfo",
                "--config",
                str(config_file),
                "-p",
                "serverutils.serverinfo.performance",
            ],
        )

        assert result.exit_code == EXIT_REJECTED
        assert "You do not have permission to use this command!" in result.output

    def test_invalid_argument(self, config_file: Path) -> None:
        """Test an offline player is reported."""
        result = runner.invoke(
            app,
            ["run", "serverinfo", "player", "inventory", "Carol", "--config", str(config_file)],
        )

        assert result.exit_code == EXIT_REJECTED
        assert "is not online" in result.output

    def test_unknown_command(self, config_file: Path) -> None:
        """Test input matching no command."""
        result = runner.invoke(app, ["run", "nope", "--config", str(config_file)])

        assert result.exit_code == EXIT_UNRESOLVED
        assert "Unknown command: nope" in result.output

    def test_missing_config(self, temp_dir: Path) -> None:
        """Test an explicit config path that does not exist."""
        result = runner.invoke(
            app, ["run", "serverinfo", "--config", str(temp_dir / "missing.toml")]
        )

        assert result.exit_code == ConfigNotFoundError.exit_code
        assert "Config file not found" in result.output


class TestComplete:
    """Tests for the complete command."""

    def test_subcommands(self, config_file: Path) -> None:
        """Test completing a subcommand name."""
        result = runner.invoke(app, ["complete", "serverinfo", "pl", "--config", str(config_file)])

        assert result.exit_code == 0
        assert output_lines(result.output) == ["player"]

    def test_trailing_space(self, config_file: Path) -> None:
        """Test completing the next argument after a space."""
        result = runner.invoke(
            app,
            ["complete", "serverinfo", "performance", "-t", "--config", str(config_file)],
        )

        assert result.exit_code == 0
        assert output_lines(result.output) == ["basic", "full"]

    def test_entities(self, config_file: Path) -> None:
        """Test completing player names."""
        result = runner.invoke(
            app,
            ["complete", "serverinfo", "player", "inventory", "-t", "--config", str(config_file)],
        )

        assert output_lines(result.output) == ["Alice", "Bob"]


class TestCommandsListing:
    """Tests for the commands command."""

    def test_lists_commands(self, config_file: Path) -> None:
        """Test the table of registered commands."""
        result = runner.invoke(app, ["commands", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "Registered Commands" in result.output


class TestConfigCommand:
    """Tests for the config command."""

    def test_show_config(self, config_file: Path) -> None:
        """Test configuration summary."""
        result = runner.invoke(app, ["config", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "Entities: Alice, Bob" in result.output

    def test_show_path(self) -> None:
        """Test printing the config path."""
        result = runner.invoke(app, ["config", "--path"])

        assert result.exit_code == 0
        assert "config.toml" in result.output


class TestContext:
    """Tests for session factories."""

    def test_create_caller_defaults(self) -> None:
        """Test the caller comes from config by default."""
        caller = create_caller(CmdRouteConfig())

        assert caller.name == "console"
        assert caller.has_permission("anything")

    def test_create_caller_overrides(self) -> None:
        """Test name and permission overrides."""
        caller = create_caller(CmdRouteConfig(), "steve", ["a.b"])

        assert caller.name == "steve"
        assert caller.permissions == frozenset({"a.b"})

    def test_create_caller_no_permissions(self) -> None:
        """Test an explicit empty permission list grants nothing."""
        caller = create_caller(CmdRouteConfig(), permissions=[])

        assert not caller.has_permission("serverutils.serverinfo")

    def test_create_session(self, config_file: Path) -> None:
        """Test a session wires config, registry and caller together."""
        session = create_session(config_path=config_file)

        assert session.registry.frozen
        assert session.server.players.identifiers() == ["Alice", "Bob"]
        assert session.caller.name == "console"
