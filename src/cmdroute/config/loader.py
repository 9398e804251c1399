"""Configuration loading from TOML files and environment variables."""

import os
import sys
from pathlib import Path

from pydantic import ValidationError

from cmdroute.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_CALLER,
    ENV_LOG_LEVEL,
    ENV_PERMISSIONS,
    ensure_directories,
    get_config_path,
)
from cmdroute.config.schema import CmdRouteConfig
from cmdroute.exceptions import ConfigError, ConfigValidationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Global config instance (singleton)
_config: CmdRouteConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = True,
) -> CmdRouteConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Create default config if file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If configuration cannot be loaded.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if not create_if_missing:
            return _apply_env_overrides(CmdRouteConfig())
        try:
            ensure_directories(path)
            path.write_text(DEFAULT_CONFIG_TOML)
        except OSError as e:
            raise ConfigError(f"Failed to create default config at {path}: {e}") from e

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = CmdRouteConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: CmdRouteConfig) -> CmdRouteConfig:
    """Apply environment variable overrides to configuration."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    caller = os.environ.get(ENV_CALLER)
    if caller:
        config.console.caller_name = caller

    permissions = os.environ.get(ENV_PERMISSIONS)
    if permissions is not None:
        config.console.permissions = [
            p.strip() for p in permissions.split(",") if p.strip()
        ]

    return config


def get_config() -> CmdRouteConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | None = None) -> CmdRouteConfig:
    """Reload configuration from disk."""
    global _config
    _config = load_config(config_path)
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
