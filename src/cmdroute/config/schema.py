"""Pydantic models for cmdroute configuration."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False
    color: bool = True


class RouterConfig(BaseModel):
    """Command router behaviour."""

    log_registrations: bool = True
    freeze_after_load: bool = True


# Sample values each message template is formatted with
_TEMPLATE_FIELDS: dict[str, dict[str, Any]] = {
    "permission_denied": {},
    "too_few_arguments": {"required": 1},
    "missing_argument": {"name": "target"},
    "invalid_argument": {"name": "target", "message": "is not online"},
    "invocation_error": {"error": "failure"},
    "unknown_command": {"command": "serverinfo"},
}


class MessagesConfig(BaseModel):
    """Caller-visible message templates.

    Templates are ``str.format`` strings; the placeholders each one
    receives are listed next to the field. A template using any other
    placeholder, or an unbalanced brace, is rejected when loaded.
    """

    permission_denied: str = "You do not have permission to use this command!"
    too_few_arguments: str = "Too few arguments! Required: {required}"  # {required}
    missing_argument: str = "Missing required argument: {name}"  # {name}
    invalid_argument: str = "Invalid argument '{name}': {message}"  # {name}, {message}
    invocation_error: str = "An error occurred: {error}"  # {error}
    unknown_command: str = "Unknown command: {command}"  # {command}

    @field_validator("*")
    @classmethod
    def _check_template(cls, value: str, info: ValidationInfo) -> str:
        fields = _TEMPLATE_FIELDS[info.field_name]
        try:
            value.format(**fields)
        except (KeyError, IndexError, AttributeError, TypeError, ValueError) as e:
            allowed = ", ".join(f"{{{name}}}" for name in fields) or "none"
            raise ValueError(
                f"invalid template ({type(e).__name__}: {e}); "
                f"allowed placeholders: {allowed}"
            ) from e
        return value


class ConsoleConfig(BaseModel):
    """Settings for the bundled console front end."""

    caller_name: str = "console"
    permissions: list[str] = Field(default_factory=lambda: ["*"])
    entities: list[str] = Field(default_factory=list)
    server_version: str = "1.0.0"
    port: int = 25565
    max_players: int = 20


class CmdRouteConfig(BaseModel):
    """Root configuration for cmdroute."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    router: RouterConfig = Field(default_factory=RouterConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    console: ConsoleConfig = Field(default_factory=ConsoleConfig)
