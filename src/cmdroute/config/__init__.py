"""Configuration management."""

from cmdroute.config.loader import get_config, load_config, reload_config, reset_config
from cmdroute.config.schema import CmdRouteConfig, MessagesConfig

__all__ = [
    "CmdRouteConfig",
    "MessagesConfig",
    "get_config",
    "load_config",
    "reload_config",
    "reset_config",
]
