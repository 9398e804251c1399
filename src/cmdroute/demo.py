"""Sample ``serverinfo`` / ``serverutils`` command set.

Used by the console front end and as a worked example of declaring
commands with nested paths, optional arguments and entity references.
"""

from dataclasses import dataclass, field
from typing import Any

from cmdroute.arguments import ValidatorRegistry, entity_arg, enum_arg, string_arg
from cmdroute.commands import CommandRegistry
from cmdroute.config.schema import CmdRouteConfig
from cmdroute.help import render_help_text
from cmdroute.host import InMemoryEntityDirectory, caller_has_permission


@dataclass
class Player:
    """A connected player."""

    name: str
    inventory: list[str] = field(default_factory=list)


@dataclass
class ServerState:
    """In-memory stand-in for the host server."""

    version: str = "1.0.0"
    port: int = 25565
    max_players: int = 20
    players: InMemoryEntityDirectory = field(default_factory=InMemoryEntityDirectory)

    @classmethod
    def from_config(cls, config: CmdRouteConfig) -> "ServerState":
        console = config.console
        players = InMemoryEntityDirectory(
            {name: Player(name) for name in console.entities}
        )
        return cls(
            version=console.server_version,
            port=console.port,
            max_players=console.max_players,
            players=players,
        )


def register_serverinfo_commands(
    registry: CommandRegistry, server: ServerState
) -> None:
    """Register the sample commands against ``server``."""

    @registry.command(
        "serverinfo",
        description="Show server information",
        permission="serverutils.serverinfo",
    )
    def server_info(caller: Any) -> list[str]:
        return [
            "=== Server Information ===",
            f"Server version: {server.version}",
            f"Online players: {len(server.players)}/{server.max_players}",
            f"Server port: {server.port}",
        ]

    @registry.command(
        "performance",
        parent="serverinfo",
        description="Show performance information",
        permission="serverutils.serverinfo.performance",
        arguments=[
            enum_arg(
                "detail",
                ["basic", "full"],
                "Detail level (basic/full)",
                required=False,
            )
        ],
    )
    def server_performance(caller: Any, detail: str | None) -> list[str]:
        return [
            "=== Performance ===",
            f"Detail level: {detail or 'basic'}",
            f"Detail given: {detail is not None}",
        ]

    @registry.command(
        "player",
        parent="serverinfo",
        description="Show player information",
        permission="serverutils.serverinfo.player",
        arguments=[
            entity_arg("target", "Target player"),
            string_arg("infoType", "Kind of information", min_length=3, max_length=10),
        ],
    )
    def server_player(caller: Any, target: Player, info_type: str) -> list[str]:
        return [
            "=== Player Information ===",
            f"Player: {target.name}",
            f"Info type: {info_type}",
        ]

    @registry.command(
        "inventory",
        parent=["serverinfo", "player"],
        description="Show a player's inventory",
        permission="serverutils.serverinfo.player.inventory",
        arguments=[entity_arg("target", "Target player")],
    )
    def server_player_inventory(caller: Any, target: Player) -> list[str]:
        lines = ["=== Player Inventory ===", f"Player: {target.name}"]
        lines.extend(f"  {item}" for item in target.inventory)
        return lines

    @registry.command(
        "serverutils",
        description="List all available commands",
        permission="serverutils.help",
    )
    def server_utils(caller: Any) -> list[str]:
        return render_help_text(
            registry.list_declarations(), title="ServerUtils Commands"
        ).splitlines()


def build_demo_registry(
    config: CmdRouteConfig,
) -> tuple[CommandRegistry, ServerState]:
    """Build a registry with the sample commands registered.

    The registry is frozen afterwards when ``router.freeze_after_load``
    is set.
    """
    server = ServerState.from_config(config)
    validators = ValidatorRegistry.with_defaults(server.players)
    registry = CommandRegistry.from_config(config, validators, caller_has_permission)
    register_serverinfo_commands(registry, server)
    if config.router.freeze_after_load:
        registry.freeze()
    return registry, server
