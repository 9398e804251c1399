"""Factories that turn CLI options into a ready-to-use console session.

This module wires configuration, logging, the caller and the sample
command registry together for the CLI commands.
"""

from dataclasses import dataclass
from pathlib import Path

from cmdroute.commands import CommandRegistry
from cmdroute.config import get_config, load_config
from cmdroute.config.schema import CmdRouteConfig
from cmdroute.demo import ServerState, build_demo_registry
from cmdroute.exceptions import ConfigNotFoundError
from cmdroute.host import ConsoleCaller
from cmdroute.utils.logging import setup_logging


@dataclass
class ConsoleSession:
    """Everything a CLI command needs to dispatch or complete."""

    config: CmdRouteConfig
    registry: CommandRegistry
    server: ServerState
    caller: ConsoleCaller


def resolve_config(config_path: Path | None = None) -> CmdRouteConfig:
    """Load an explicit config file, or fall back to the global config.

    Raises:
        ConfigNotFoundError: If an explicit path does not exist.
    """
    if config_path is not None:
        if not config_path.exists():
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        return load_config(config_path, create_if_missing=False)
    return get_config()


def create_caller(
    config: CmdRouteConfig,
    name: str | None = None,
    permissions: list[str] | None = None,
) -> ConsoleCaller:
    """Create the console caller.

    Args:
        config: Configuration providing defaults.
        name: Caller name override.
        permissions: Permission set override; None keeps the configured set.

    Returns:
        A ConsoleCaller.
    """
    granted = config.console.permissions if permissions is None else permissions
    return ConsoleCaller(
        name=name or config.console.caller_name,
        permissions=frozenset(granted),
    )


def create_session(
    *,
    caller: str | None = None,
    permissions: list[str] | None = None,
    verbose: bool = False,
    config_path: Path | None = None,
) -> ConsoleSession:
    """Create a ConsoleSession from CLI options.

    Logging is configured from the config file; ``verbose`` forces DEBUG.
    """
    config = resolve_config(config_path)
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.logging.color,
    )
    registry, server = build_demo_registry(config)
    return ConsoleSession(
        config=config,
        registry=registry,
        server=server,
        caller=create_caller(config, caller, permissions),
    )
