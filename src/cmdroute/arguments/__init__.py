"""Argument declarations and validators.

Every positional command argument is described by an ArgumentDeclaration
and checked at dispatch time by the ArgumentValidator a ValidatorRegistry
builds for its kind.

Usage:
    from cmdroute.arguments import ValidatorRegistry, enum_arg

    registry = ValidatorRegistry.with_defaults()
    validator = registry.create(enum_arg("detail", ["basic", "full"]))

    outcome = validator.validate("FULL", caller)
    assert outcome.value == "full"
"""

from cmdroute.arguments.base import (
    ArgumentDeclaration,
    ArgumentValidator,
    FailureCode,
    ValidationOutcome,
    bool_arg,
    entity_arg,
    enum_arg,
    number_arg,
    string_arg,
)
from cmdroute.arguments.registry import ValidatorFactory, ValidatorRegistry
from cmdroute.arguments.validators import (
    BooleanValidator,
    EntityReferenceValidator,
    EnumValidator,
    NumberValidator,
    StringValidator,
)

__all__ = [
    # Base types
    "ArgumentDeclaration",
    "ArgumentValidator",
    "FailureCode",
    "ValidationOutcome",
    # Declaration helpers
    "bool_arg",
    "entity_arg",
    "enum_arg",
    "number_arg",
    "string_arg",
    # Registry
    "ValidatorFactory",
    "ValidatorRegistry",
    # Validators
    "BooleanValidator",
    "EntityReferenceValidator",
    "EnumValidator",
    "NumberValidator",
    "StringValidator",
]
