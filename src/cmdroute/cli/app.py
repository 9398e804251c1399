"""Main CLI application for cmdroute."""

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cmdroute import __version__
from cmdroute.cli.context import create_session, resolve_config
from cmdroute.cli.options import (
    CallerOption,
    ConfigPathOption,
    PermissionOption,
    TokensArgument,
    VerboseOption,
)
from cmdroute.commands import DispatchStatus
from cmdroute.config.defaults import get_config_path
from cmdroute.exceptions import CmdRouteError
from cmdroute.help import usage_for_base

# Exit codes for dispatch outcomes
EXIT_REJECTED = 1
EXIT_UNRESOLVED = 2

# Create Typer app
app = typer.Typer(
    name="cmdroute",
    help="Declarative command dispatch console",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for output
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"cmdroute version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Declarative command dispatch console."""
    pass


def _print_return_value(value: Any) -> None:
    """Print whatever an action returned."""
    if value is None:
        return
    if isinstance(value, (list, tuple)):
        for line in value:
            console.print(escape(str(line)))
    else:
        console.print(escape(str(value)))


@app.command()
def run(
    base: str = typer.Argument(..., help="Base command word."),
    tokens: TokensArgument = None,
    caller: CallerOption = None,
    permission: PermissionOption = None,
    config: ConfigPathOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Dispatch a command line."""
    try:
        session = create_session(
            caller=caller,
            permissions=permission,
            verbose=verbose,
            config_path=config,
        )
    except CmdRouteError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    args = tokens or []
    result = session.registry.dispatch(session.caller, base, args)

    if result.status is DispatchStatus.UNRESOLVED:
        command = " ".join([base, *args])
        message = session.config.messages.unknown_command.format(command=command)
        err_console.print(f"[red]Error:[/red] {escape(message)}")
        usages = usage_for_base(session.registry.list_declarations(), base)
        if usages:
            err_console.print("Usage:")
            for usage in usages:
                err_console.print(f"  {escape(usage)}")
        raise typer.Exit(EXIT_UNRESOLVED)

    if result.status is DispatchStatus.REJECTED:
        err_console.print(f"[red]Error:[/red] {escape(result.message or '')}")
        if verbose and result.reason is not None:
            err_console.print(f"[dim]reason: {result.reason.value}[/dim]")
        raise typer.Exit(EXIT_REJECTED)

    _print_return_value(result.return_value)


@app.command()
def complete(
    base: str = typer.Argument(..., help="Base command word."),
    tokens: TokensArgument = None,
    trailing_space: bool = typer.Option(
        False,
        "--trailing-space",
        "-t",
        help="Complete a new, empty word after the given tokens.",
    ),
    caller: CallerOption = None,
    permission: PermissionOption = None,
    config: ConfigPathOption = None,
) -> None:
    """Print completion suggestions, one per line."""
    try:
        session = create_session(
            caller=caller,
            permissions=permission,
            config_path=config,
        )
    except CmdRouteError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    args = list(tokens or [])
    if trailing_space:
        args.append("")

    for suggestion in session.registry.complete(session.caller, base, args):
        console.print(escape(suggestion))


@app.command()
def commands(
    config: ConfigPathOption = None,
) -> None:
    """List all registered commands."""
    try:
        session = create_session(config_path=config)
    except CmdRouteError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    declarations = session.registry.list_declarations()
    if not declarations:
        console.print("[dim]No commands registered[/dim]")
        return

    table = Table(title="Registered Commands")
    table.add_column("Usage", style="cyan")
    table.add_column("Description")
    table.add_column("Permission", style="dim")
    for declaration in declarations.values():
        table.add_row(
            escape(f"/{declaration.usage_line()}"),
            escape(declaration.description),
            escape(declaration.permission or "-"),
        )
    console.print(table)


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(
        False,
        "--path",
        help="Show config file path.",
    ),
    config: ConfigPathOption = None,
) -> None:
    """Show current configuration."""
    if show_path:
        console.print(str(config or get_config_path()))
        return

    try:
        settings = resolve_config(config)
    except CmdRouteError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    console.print("[bold]cmdroute configuration[/bold]\n")
    console.print(f"Config file: {config or get_config_path()}")
    console.print(f"Log level: {settings.logging.level}")
    console.print(f"Log registrations: {settings.router.log_registrations}")
    console.print(f"Freeze after load: {settings.router.freeze_after_load}")
    console.print(f"Caller: {settings.console.caller_name}")
    console.print(
        f"Permissions: {escape(', '.join(settings.console.permissions) or '(none)')}"
    )
    console.print(f"Entities: {', '.join(settings.console.entities) or '(none)'}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
