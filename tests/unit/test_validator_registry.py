"""Tests for ValidatorRegistry."""

from typing import Any

import pytest

from cmdroute.arguments import (
    ArgumentDeclaration,
    ArgumentValidator,
    EntityReferenceValidator,
    EnumValidator,
    NumberValidator,
    ValidationOutcome,
    ValidatorRegistry,
    entity_arg,
    number_arg,
)
from cmdroute.exceptions import DeclarationError, UnregisteredKindError
from cmdroute.host import InMemoryEntityDirectory


class UpperValidator(ArgumentValidator):
    """Test validator that upper-cases its token."""

    def validate(self, token: str, caller: Any) -> ValidationOutcome:
        return ValidationOutcome.ok(token.upper())

    def complete(self, caller: Any) -> list[str]:
        return ["A", "B"]


class TestDefaults:
    """Tests for the built-in kinds."""

    def test_builtin_kinds(self) -> None:
        """Test all built-in kinds and aliases are present."""
        registry = ValidatorRegistry.with_defaults()

        for kind in ("number", "string", "boolean", "enum", "entity"):
            assert registry.has_factory(kind)
        assert registry.has_factory("string-list")
        assert registry.has_factory("player")

    def test_creates_matching_validator(self) -> None:
        """Test a declaration yields the validator for its kind."""
        registry = ValidatorRegistry.with_defaults()
        assert isinstance(registry.create(number_arg("x")), NumberValidator)

    def test_string_list_alias(self) -> None:
        """Test the string-list kind builds an enum validator."""
        registry = ValidatorRegistry.with_defaults()
        declaration = ArgumentDeclaration(
            kind="string-list", name="mode", options={"allowed_values": ["a", "b"]}
        )
        assert isinstance(registry.create(declaration), EnumValidator)

    def test_entity_uses_directory(self) -> None:
        """Test entity validators resolve through the given directory."""
        directory = InMemoryEntityDirectory({"Alice": "ref"})
        registry = ValidatorRegistry.with_defaults(directory)

        validator = registry.create(entity_arg("target"))

        assert isinstance(validator, EntityReferenceValidator)
        assert validator.validate("Alice", None).value == "ref"

    def test_registries_are_independent(self) -> None:
        """Test registering on one registry leaves others untouched."""
        first = ValidatorRegistry.with_defaults()
        second = ValidatorRegistry.with_defaults()

        first.register("upper", UpperValidator)

        assert first.has_factory("upper")
        assert not second.has_factory("upper")


class TestRegistration:
    """Tests for registering factories."""

    def test_register_custom_kind(self) -> None:
        """Test a custom kind can be registered and used."""
        registry = ValidatorRegistry()
        registry.register("upper", UpperValidator)

        validator = registry.create(ArgumentDeclaration(kind="upper", name="code"))

        assert validator.validate("abc", None).value == "ABC"
        assert validator.name == "code"

    def test_factory_decorator(self) -> None:
        """Test the decorator registers and returns the factory."""
        registry = ValidatorRegistry()

        @registry.factory("upper")
        def create_upper(declaration: ArgumentDeclaration) -> ArgumentValidator:
            return UpperValidator(declaration)

        assert registry.has_factory("upper")
        assert create_upper(ArgumentDeclaration(kind="upper", name="x")).name == "x"

    def test_last_write_wins(self) -> None:
        """Test re-registering a kind replaces the earlier factory."""
        registry = ValidatorRegistry.with_defaults()
        registry.register("number", UpperValidator)

        assert isinstance(registry.create(number_arg("x")), UpperValidator)

    def test_list_kinds(self) -> None:
        """Test kinds are listed in registration order."""
        registry = ValidatorRegistry()
        registry.register("b", UpperValidator)
        registry.register("a", UpperValidator)

        assert registry.list_kinds() == ["b", "a"]


class TestCreateErrors:
    """Tests for failures while building validators."""

    def test_unregistered_kind(self) -> None:
        """Test an unknown kind raises with the kind and argument named."""
        registry = ValidatorRegistry.with_defaults()

        with pytest.raises(UnregisteredKindError) as exc_info:
            registry.create(ArgumentDeclaration(kind="duration", name="time"))

        assert exc_info.value.kind == "duration"
        assert exc_info.value.argument == "time"
        assert "duration" in str(exc_info.value)

    def test_invalid_options(self) -> None:
        """Test bad options surface as a DeclarationError."""
        registry = ValidatorRegistry.with_defaults()

        with pytest.raises(DeclarationError, match="amount"):
            registry.create(number_arg("amount", min=5, max=1))
