"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "cmdroute"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "CMDROUTE_CONFIG"
ENV_LOG_LEVEL: Final[str] = "CMDROUTE_LOG_LEVEL"
ENV_CALLER: Final[str] = "CMDROUTE_CALLER"
ENV_PERMISSIONS: Final[str] = "CMDROUTE_PERMISSIONS"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# cmdroute configuration

[logging]
level = "INFO"
json_format = false
color = true

[router]
log_registrations = true
freeze_after_load = true

[messages]
permission_denied = "You do not have permission to use this command!"
too_few_arguments = "Too few arguments! Required: {required}"
missing_argument = "Missing required argument: {name}"
invalid_argument = "Invalid argument '{name}': {message}"
invocation_error = "An error occurred: {error}"
unknown_command = "Unknown command: {command}"

[console]
caller_name = "console"
permissions = ["*"]
entities = []
"""


def ensure_directories(config_file: Path = DEFAULT_CONFIG_FILE) -> None:
    """Ensure the directory holding ``config_file`` exists."""
    config_file.parent.mkdir(parents=True, exist_ok=True)


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
