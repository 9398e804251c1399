"""Exception hierarchy for cmdroute."""


class CmdRouteError(Exception):
    """Base exception for all cmdroute errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Config Errors
class ConfigError(CmdRouteError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    exit_code = 21
    user_message = "Configuration file not found"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Registration Errors
class RegistrationError(CmdRouteError):
    """A command could not be registered."""

    exit_code = 40
    user_message = "Command registration failed"


class UnregisteredKindError(RegistrationError):
    """An argument declares a kind with no registered validator factory."""

    exit_code = 41
    user_message = "No validator registered for argument kind"

    def __init__(self, kind: str, argument: str | None = None) -> None:
        self.kind = kind
        self.argument = argument
        target = f" (argument '{argument}')" if argument else ""
        super().__init__(f"No validator registered for kind '{kind}'{target}")


class DeclarationError(RegistrationError):
    """An argument or command declaration is malformed."""

    exit_code = 42
    user_message = "Invalid command declaration"
