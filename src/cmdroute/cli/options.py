"""Shared CLI options for cmdroute commands.

This module provides reusable Typer options that are shared across
multiple commands.
"""

from pathlib import Path
from typing import Annotated

import typer

CallerOption = Annotated[
    str | None,
    typer.Option(
        "--caller",
        "-c",
        help="Name of the caller to dispatch as. Defaults to config setting.",
    ),
]

PermissionOption = Annotated[
    list[str] | None,
    typer.Option(
        "--permission",
        "-p",
        help="Permission granted to the caller (repeatable). Replaces the configured set.",
    ),
]

ConfigPathOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        help="Path to a config file.",
        dir_okay=False,
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Show debug logging and dispatch details.",
    ),
]

TokensArgument = Annotated[
    list[str] | None,
    typer.Argument(help="Tokens after the base command word."),
]
