"""Interfaces the router needs from its host, with in-memory implementations.

The router never inspects the caller object itself. It hands the caller to
a :class:`PermissionChecker`, to validators, and to actions that ask for it.
Entity-reference arguments resolve names through an :class:`EntityDirectory`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


class PermissionChecker(Protocol):
    """Decides whether a caller holds a permission string."""

    def __call__(self, caller: Any, permission: str) -> bool: ...


@runtime_checkable
class EntityDirectory(Protocol):
    """Lookup of live entities (e.g. connected players) by identifier."""

    def lookup(self, identifier: str) -> Any | None:
        """Return the entity for ``identifier`` or None if it is not live."""
        ...

    def identifiers(self) -> list[str]:
        """Return the identifiers of all live entities."""
        ...


class InMemoryEntityDirectory:
    """Entity directory backed by a dict.

    Lookups ignore case; identifiers keep their registered spelling and
    insertion order.
    """

    def __init__(self, entities: Mapping[str, Any] | None = None) -> None:
        self._entities: dict[str, Any] = {}
        self._by_key: dict[str, str] = {}
        for identifier, entity in (entities or {}).items():
            self.add(identifier, entity)

    def add(self, identifier: str, entity: Any) -> None:
        """Add or replace a live entity."""
        existing = self._by_key.get(identifier.lower())
        if existing is not None:
            del self._entities[existing]
        self._entities[identifier] = entity
        self._by_key[identifier.lower()] = identifier

    def remove(self, identifier: str) -> bool:
        """Remove a live entity. Returns False if it was not present."""
        existing = self._by_key.pop(identifier.lower(), None)
        if existing is None:
            return False
        del self._entities[existing]
        return True

    def lookup(self, identifier: str) -> Any | None:
        existing = self._by_key.get(identifier.lower())
        if existing is None:
            return None
        return self._entities[existing]

    def identifiers(self) -> list[str]:
        return list(self._entities)

    def __len__(self) -> int:
        return len(self._entities)


def permission_matches(granted: str, permission: str) -> bool:
    """Check one granted permission against a required one.

    ``*`` grants everything and ``a.b.*`` grants ``a.b`` and all of its
    descendants.
    """
    if granted == "*" or granted == permission:
        return True
    if granted.endswith(".*"):
        prefix = granted[:-2]
        return permission == prefix or permission.startswith(prefix + ".")
    return False


@dataclass(frozen=True)
class ConsoleCaller:
    """A caller identified by name with a fixed set of granted permissions."""

    name: str
    permissions: frozenset[str] = field(default_factory=frozenset)

    def has_permission(self, permission: str) -> bool:
        return any(permission_matches(g, permission) for g in self.permissions)


def caller_has_permission(caller: Any, permission: str) -> bool:
    """Default permission checker.

    Delegates to ``caller.has_permission``; callers without that method
    hold no permissions.
    """
    check = getattr(caller, "has_permission", None)
    if check is None:
        return False
    return bool(check(permission))
