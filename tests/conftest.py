"""Pytest fixtures for cmdroute tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from cmdroute.arguments import ValidatorRegistry
from cmdroute.commands import CommandRegistry
from cmdroute.config import reset_config
from cmdroute.config.schema import CmdRouteConfig
from cmdroute.demo import Player
from cmdroute.host import ConsoleCaller, InMemoryEntityDirectory


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Keep tests away from the user's config and environment."""
    for name in (
        "CMDROUTE_LOG_LEVEL",
        "CMDROUTE_CALLER",
        "CMDROUTE_PERMISSIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CMDROUTE_CONFIG", str(tmp_path / "cmdroute" / "config.toml"))
    reset_config()
    yield
    reset_config()

    # CLI runs configure the package logger; undo that for caplog
    package_logger = logging.getLogger("cmdroute")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def default_config() -> CmdRouteConfig:
    """Get default configuration."""
    return CmdRouteConfig()


@pytest.fixture
def players() -> InMemoryEntityDirectory:
    """Two online players."""
    return InMemoryEntityDirectory(
        {
            "Alice": Player("Alice", inventory=["sword", "torch"]),
            "Bob": Player("Bob"),
        }
    )


@pytest.fixture
def validators(players: InMemoryEntityDirectory) -> ValidatorRegistry:
    """Validator registry with built-in kinds bound to the test players."""
    return ValidatorRegistry.with_defaults(players)


@pytest.fixture
def registry(validators: ValidatorRegistry) -> CommandRegistry:
    """Empty command registry."""
    return CommandRegistry(validators, log_registrations=False)


@pytest.fixture
def admin() -> ConsoleCaller:
    """Caller holding every permission."""
    return ConsoleCaller("admin", frozenset({"*"}))


@pytest.fixture
def guest() -> ConsoleCaller:
    """Caller holding no permissions."""
    return ConsoleCaller("guest")
