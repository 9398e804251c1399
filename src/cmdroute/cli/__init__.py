"""CLI layer for cmdroute.

This module provides a command-line console for the sample command set,
built on Typer with Rich formatting support.

Usage:
    cmdroute run serverinfo player inventory Alice
    cmdroute complete serverinfo pl
    cmdroute complete serverinfo performance --trailing-space
    cmdroute commands
"""

from cmdroute.cli.app import app, main
from cmdroute.cli.context import ConsoleSession, create_caller, create_session

__all__ = [
    # App
    "app",
    "main",
    # Context
    "ConsoleSession",
    "create_caller",
    "create_session",
]
