"""Validator registry mapping argument kinds to validator factories."""

from collections.abc import Callable

from pydantic import ValidationError

from cmdroute.arguments.base import ArgumentDeclaration, ArgumentValidator
from cmdroute.arguments.validators import (
    BooleanValidator,
    EntityReferenceValidator,
    EnumValidator,
    NumberValidator,
    StringValidator,
)
from cmdroute.exceptions import DeclarationError, UnregisteredKindError
from cmdroute.host import EntityDirectory, InMemoryEntityDirectory

# Type for validator factory functions
ValidatorFactory = Callable[[ArgumentDeclaration], ArgumentValidator]


class ValidatorRegistry:
    """Builds validators from argument declarations, keyed by kind.

    Unlike a process-wide singleton, each registry is an ordinary object:
    routers receive one at construction, and tests can build as many
    independent registries as they need.

    Usage:
        registry = ValidatorRegistry.with_defaults(entities=players)

        # Register a custom kind
        @registry.factory("duration")
        def create_duration(declaration: ArgumentDeclaration) -> ArgumentValidator:
            return DurationValidator(declaration)

        validator = registry.create(number_arg("amount", min=1, max=64))
    """

    def __init__(self) -> None:
        self._factories: dict[str, ValidatorFactory] = {}

    @classmethod
    def with_defaults(
        cls, entities: EntityDirectory | None = None
    ) -> "ValidatorRegistry":
        """Create a registry with all built-in kinds registered.

        Args:
            entities: Directory used by entity-reference arguments.
                Defaults to an empty in-memory directory.

        Returns:
            A new ValidatorRegistry.
        """
        registry = cls()
        directory = entities if entities is not None else InMemoryEntityDirectory()

        def create_entity(declaration: ArgumentDeclaration) -> ArgumentValidator:
            return EntityReferenceValidator(declaration, directory)

        registry.register("number", NumberValidator)
        registry.register("string", StringValidator)
        registry.register("boolean", BooleanValidator)
        registry.register("enum", EnumValidator)
        registry.register("string-list", EnumValidator)
        registry.register("entity", create_entity)
        registry.register("player", create_entity)
        return registry

    def register(self, kind: str, factory: ValidatorFactory) -> None:
        """Register a factory for ``kind``, replacing any previous one."""
        self._factories[kind] = factory

    def factory(self, kind: str) -> Callable[[ValidatorFactory], ValidatorFactory]:
        """Decorator to register a validator factory.

        Example:
            @registry.factory("duration")
            def create_duration(declaration):
                return DurationValidator(declaration)
        """

        def decorator(factory: ValidatorFactory) -> ValidatorFactory:
            self.register(kind, factory)
            return factory

        return decorator

    def has_factory(self, kind: str) -> bool:
        """Check if a factory is registered for ``kind``."""
        return kind in self._factories

    def list_kinds(self) -> list[str]:
        """List all registered kinds in registration order."""
        return list(self._factories)

    def create(self, declaration: ArgumentDeclaration) -> ArgumentValidator:
        """Build the validator for a declaration.

        Args:
            declaration: The argument declaration.

        Returns:
            A validator bound to the declaration.

        Raises:
            UnregisteredKindError: If no factory exists for the kind.
            DeclarationError: If the factory rejects the declared options.
        """
        factory = self._factories.get(declaration.kind)
        if factory is None:
            raise UnregisteredKindError(declaration.kind, declaration.name)

        try:
            return factory(declaration)
        except ValidationError as e:
            raise DeclarationError(
                f"Invalid options for argument '{declaration.name}' "
                f"of kind '{declaration.kind}': {e}"
            ) from e
