"""Built-in argument validators."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cmdroute.arguments.base import (
    ArgumentDeclaration,
    ArgumentValidator,
    FailureCode,
    ValidationOutcome,
)
from cmdroute.host import EntityDirectory


def _fmt(value: float) -> str:
    """Render a bound without a trailing ``.0`` for whole numbers."""
    return f"{value:g}"


class _Options(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class NumberOptions(_Options):
    min: float = -math.inf
    max: float = math.inf

    @model_validator(mode="after")
    def _check_bounds(self) -> "NumberOptions":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) is greater than max ({self.max})")
        return self


class StringOptions(_Options):
    min_length: int = Field(default=0, ge=0)
    max_length: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "StringOptions":
        if self.max_length is not None and self.min_length > self.max_length:
            raise ValueError(
                f"min_length ({self.min_length}) is greater than "
                f"max_length ({self.max_length})"
            )
        return self


class BooleanOptions(_Options):
    true_values: list[str] = Field(default_factory=lambda: ["true", "1"], min_length=1)
    false_values: list[str] = Field(
        default_factory=lambda: ["false", "0"], min_length=1
    )


class EnumOptions(_Options):
    allowed_values: list[str] = Field(min_length=1)
    case_sensitive: bool = False


class EntityOptions(_Options):
    online_only: bool = True


class NumberValidator(ArgumentValidator):
    """Accepts floating-point numbers within ``[min, max]``."""

    def __init__(self, declaration: ArgumentDeclaration) -> None:
        super().__init__(declaration)
        options = NumberOptions.model_validate(declaration.options)
        self._min = options.min
        self._max = options.max

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    def validate(self, token: str, caller: Any) -> ValidationOutcome:
        # float() also takes digit separators ("1_000"); plain literals only
        try:
            value = math.nan if "_" in token else float(token)
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            return ValidationOutcome.fail(
                FailureCode.PARSE_ERROR, f"{self.name} must be a valid number!"
            )
        if value < self._min:
            return ValidationOutcome.fail(
                FailureCode.RANGE_ERROR,
                f"{self.name} must be at least {_fmt(self._min)}!",
            )
        if value > self._max:
            return ValidationOutcome.fail(
                FailureCode.RANGE_ERROR,
                f"{self.name} must be at most {_fmt(self._max)}!",
            )
        return ValidationOutcome.ok(value)

    def complete(self, caller: Any) -> list[str]:
        return []


class StringValidator(ArgumentValidator):
    """Accepts any token whose length lies within the declared bounds."""

    def __init__(self, declaration: ArgumentDeclaration) -> None:
        super().__init__(declaration)
        options = StringOptions.model_validate(declaration.options)
        self._min_length = options.min_length
        self._max_length = options.max_length

    def validate(self, token: str, caller: Any) -> ValidationOutcome:
        if len(token) < self._min_length:
            return ValidationOutcome.fail(
                FailureCode.LENGTH_ERROR,
                f"{self.name} must be at least {self._min_length} characters long!",
            )
        if self._max_length is not None and len(token) > self._max_length:
            return ValidationOutcome.fail(
                FailureCode.LENGTH_ERROR,
                f"{self.name} must be at most {self._max_length} characters long!",
            )
        return ValidationOutcome.ok(token)

    def complete(self, caller: Any) -> list[str]:
        return []


class BooleanValidator(ArgumentValidator):
    """Maps configurable true/false tokens to ``bool``, ignoring case."""

    def __init__(self, declaration: ArgumentDeclaration) -> None:
        super().__init__(declaration)
        options = BooleanOptions.model_validate(declaration.options)
        self._true_values = tuple(options.true_values)
        self._false_values = tuple(options.false_values)
        self._true_folded = frozenset(v.casefold() for v in self._true_values)
        self._false_folded = frozenset(v.casefold() for v in self._false_values)

    def validate(self, token: str, caller: Any) -> ValidationOutcome:
        if not token or not token.strip():
            return ValidationOutcome.fail(
                FailureCode.MISSING_VALUE, f"{self.name} requires a valid value!"
            )
        folded = token.casefold()
        if folded in self._true_folded:
            return ValidationOutcome.ok(True)
        if folded in self._false_folded:
            return ValidationOutcome.ok(False)
        return ValidationOutcome.fail(
            FailureCode.INVALID_ENUMERATION,
            f"{self.name} must be one of: {', '.join(self._true_values)} "
            f"or {', '.join(self._false_values)}",
        )

    def complete(self, caller: Any) -> list[str]:
        return [self._true_values[0], self._false_values[0]]


class EnumValidator(ArgumentValidator):
    """Accepts one of a declared list of values.

    Matching ignores case unless ``case_sensitive`` is set; the value
    returned is always the declared spelling.
    """

    def __init__(self, declaration: ArgumentDeclaration) -> None:
        super().__init__(declaration)
        options = EnumOptions.model_validate(declaration.options)
        self._allowed = tuple(options.allowed_values)
        self._case_sensitive = options.case_sensitive
        # First declared spelling wins when two values fold to the same key
        self._canonical: dict[str, str] = {}
        for value in self._allowed:
            self._canonical.setdefault(self._key(value), value)

    @property
    def allowed_values(self) -> tuple[str, ...]:
        return self._allowed

    def _key(self, value: str) -> str:
        return value if self._case_sensitive else value.casefold()

    def validate(self, token: str, caller: Any) -> ValidationOutcome:
        if not token:
            return ValidationOutcome.fail(
                FailureCode.MISSING_VALUE, f"{self.name} is required!"
            )
        canonical = self._canonical.get(self._key(token))
        if canonical is None:
            return ValidationOutcome.fail(
                FailureCode.INVALID_ENUMERATION,
                f"'{token}' is not a valid value for '{self.name}'. "
                f"Allowed values: {', '.join(self._allowed)}",
            )
        return ValidationOutcome.ok(canonical)

    def complete(self, caller: Any) -> list[str]:
        return list(self._allowed)


class EntityReferenceValidator(ArgumentValidator):
    """Resolves a token to a live entity through an EntityDirectory.

    With ``online_only`` off, an unknown identifier is accepted and the
    bound value is None.
    """

    def __init__(
        self, declaration: ArgumentDeclaration, directory: EntityDirectory
    ) -> None:
        super().__init__(declaration)
        options = EntityOptions.model_validate(declaration.options)
        self._online_only = options.online_only
        self._directory = directory

    @property
    def online_only(self) -> bool:
        return self._online_only

    def validate(self, token: str, caller: Any) -> ValidationOutcome:
        entity = self._directory.lookup(token)
        if entity is None and self._online_only:
            return ValidationOutcome.fail(
                FailureCode.NOT_FOUND, f"'{token}' is not online"
            )
        return ValidationOutcome.ok(entity)

    def complete(self, caller: Any) -> list[str]:
        return list(self._directory.identifiers())
