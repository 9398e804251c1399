"""Argument declarations, validation outcomes and the validator base class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FailureCode(str, Enum):
    """Why a validator rejected a token."""

    PARSE_ERROR = "parse_error"
    RANGE_ERROR = "range_error"
    LENGTH_ERROR = "length_error"
    MISSING_VALUE = "missing_value"
    INVALID_ENUMERATION = "invalid_enumeration"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a single token.

    Exactly one side is populated: ``value`` on success, ``code`` and
    ``message`` on failure. A successful outcome may still carry ``None``
    as its value (e.g. an entity reference that was allowed to be absent).

    Attributes:
        success: Whether the token was accepted.
        value: The converted value.
        code: Failure category.
        message: Human-readable failure description.
    """

    success: bool
    value: Any = None
    code: FailureCode | None = None
    message: str | None = None

    @classmethod
    def ok(cls, value: Any) -> "ValidationOutcome":
        """Create a successful outcome."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, code: FailureCode, message: str) -> "ValidationOutcome":
        """Create a failed outcome."""
        return cls(success=False, code=code, message=message)


class ArgumentDeclaration(BaseModel):
    """Immutable description of one positional command argument.

    Attributes:
        kind: Validator kind, looked up in a ValidatorRegistry.
        name: Argument name shown in usage and error messages.
        description: Short description for help output.
        required: Whether the argument must be supplied.
        options: Kind-specific constraints (bounds, allowed values, ...).
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    name: str
    description: str = ""
    required: bool = True
    options: dict[str, Any] = Field(default_factory=dict)

    @property
    def usage_token(self) -> str:
        """``<name>`` for required arguments, ``[name]`` for optional ones."""
        return f"<{self.name}>" if self.required else f"[{self.name}]"


class ArgumentValidator(ABC):
    """Checks and converts one raw token for a declared argument.

    Validators are built once per declaration and hold no per-call state,
    so a single instance can serve concurrent dispatches.
    """

    def __init__(self, declaration: ArgumentDeclaration) -> None:
        self._declaration = declaration

    @property
    def declaration(self) -> ArgumentDeclaration:
        return self._declaration

    @property
    def name(self) -> str:
        return self._declaration.name

    @property
    def description(self) -> str:
        return self._declaration.description

    @property
    def required(self) -> bool:
        return self._declaration.required

    @abstractmethod
    def validate(self, token: str, caller: Any) -> ValidationOutcome:
        """Validate ``token`` on behalf of ``caller``.

        Args:
            token: The raw input token.
            caller: The caller the command is dispatched for.

        Returns:
            ValidationOutcome with the converted value or a failure.
        """
        pass

    @abstractmethod
    def complete(self, caller: Any) -> list[str]:
        """Candidate values for this argument, unfiltered."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


# Declaration helpers for the built-in kinds


def number_arg(
    name: str,
    description: str = "",
    *,
    required: bool = True,
    min: float | None = None,
    max: float | None = None,
) -> ArgumentDeclaration:
    """Declare a bounded floating-point argument."""
    options: dict[str, Any] = {}
    if min is not None:
        options["min"] = min
    if max is not None:
        options["max"] = max
    return ArgumentDeclaration(
        kind="number",
        name=name,
        description=description,
        required=required,
        options=options,
    )


def string_arg(
    name: str,
    description: str = "",
    *,
    required: bool = True,
    min_length: int = 0,
    max_length: int | None = None,
) -> ArgumentDeclaration:
    """Declare a length-bounded string argument."""
    return ArgumentDeclaration(
        kind="string",
        name=name,
        description=description,
        required=required,
        options={"min_length": min_length, "max_length": max_length},
    )


def bool_arg(
    name: str,
    description: str = "",
    *,
    required: bool = True,
    true_values: list[str] | None = None,
    false_values: list[str] | None = None,
) -> ArgumentDeclaration:
    """Declare a boolean argument with configurable tokens."""
    options: dict[str, Any] = {}
    if true_values is not None:
        options["true_values"] = list(true_values)
    if false_values is not None:
        options["false_values"] = list(false_values)
    return ArgumentDeclaration(
        kind="boolean",
        name=name,
        description=description,
        required=required,
        options=options,
    )


def enum_arg(
    name: str,
    allowed_values: list[str],
    description: str = "",
    *,
    required: bool = True,
    case_sensitive: bool = False,
) -> ArgumentDeclaration:
    """Declare an argument restricted to a fixed set of values."""
    return ArgumentDeclaration(
        kind="enum",
        name=name,
        description=description,
        required=required,
        options={
            "allowed_values": list(allowed_values),
            "case_sensitive": case_sensitive,
        },
    )


def entity_arg(
    name: str,
    description: str = "",
    *,
    required: bool = True,
    online_only: bool = True,
) -> ArgumentDeclaration:
    """Declare an argument naming a live entity."""
    return ArgumentDeclaration(
        kind="entity",
        name=name,
        description=description,
        required=required,
        options={"online_only": online_only},
    )
