"""Command registry: the dotted command namespace and the router over it."""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from cmdroute.arguments.base import ArgumentDeclaration
from cmdroute.arguments.registry import ValidatorRegistry
from cmdroute.commands.base import PATH_SEPARATOR, CommandDeclaration, DispatchResult
from cmdroute.commands.handler import CommandAction, CommandHandler, build_slots
from cmdroute.config.schema import CmdRouteConfig, MessagesConfig
from cmdroute.exceptions import RegistrationError
from cmdroute.host import PermissionChecker, caller_has_permission
from cmdroute.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


@dataclass(frozen=True)
class Resolution:
    """A matched command and the tokens left over for its arguments."""

    handler: CommandHandler
    remaining: tuple[str, ...]

    @property
    def path(self) -> str:
        return self.handler.declaration.full_path


class CommandRegistry:
    """Registry and router for declared commands.

    Commands live in a flat mapping keyed by their lowercased dotted path
    (``serverinfo.player.inventory``). Input is routed to the most specific
    registered path that prefixes it; the rest of the input becomes the
    command's arguments.

    Registration is meant to happen once at startup. After ``freeze()``
    the namespace is read-only and dispatch/completion may run from any
    number of threads without locking.

    Usage:
        registry = CommandRegistry(ValidatorRegistry.with_defaults(players))

        @registry.command(
            "inventory",
            parent=["serverinfo", "player"],
            permission="serverutils.serverinfo.player.inventory",
            arguments=[entity_arg("target")],
        )
        def show_inventory(caller, target):
            ...

        registry.freeze()
        result = registry.dispatch(caller, "serverinfo", ["player", "inventory", "Alice"])
        suggestions = registry.complete(caller, "serverinfo", ["pl"])
    """

    def __init__(
        self,
        validators: ValidatorRegistry | None = None,
        permission_checker: PermissionChecker = caller_has_permission,
        *,
        messages: MessagesConfig | None = None,
        log_registrations: bool = True,
    ) -> None:
        self._validators = validators or ValidatorRegistry.with_defaults()
        self._permission_checker = permission_checker
        self._messages = messages or MessagesConfig()
        self._log_registrations = log_registrations
        self._handlers: dict[str, CommandHandler] = {}
        self._declarations: dict[str, CommandDeclaration] = {}
        self._roots: dict[str, None] = {}
        self._frozen = False

    @classmethod
    def from_config(
        cls,
        config: CmdRouteConfig,
        validators: ValidatorRegistry | None = None,
        permission_checker: PermissionChecker = caller_has_permission,
    ) -> "CommandRegistry":
        """Create a registry using messages and router settings from config."""
        return cls(
            validators,
            permission_checker,
            messages=config.messages,
            log_registrations=config.router.log_registrations,
        )

    @property
    def validators(self) -> ValidatorRegistry:
        return self._validators

    @property
    def messages(self) -> MessagesConfig:
        return self._messages

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Stop accepting registrations."""
        self._frozen = True

    # --- Registration ---

    def register(
        self,
        declaration: CommandDeclaration,
        action: CommandAction,
        *,
        pass_caller: bool = True,
    ) -> CommandHandler:
        """Register a command.

        A later registration for the same full path replaces the earlier one.

        Args:
            declaration: The command declaration.
            action: Callable invoked with the bound arguments.
            pass_caller: Pass the caller as the action's first argument.

        Returns:
            The handler that was stored.

        Raises:
            RegistrationError: If the registry is frozen.
            UnregisteredKindError: If an argument's kind has no validator.
            DeclarationError: If an argument's options are invalid.
        """
        if self._frozen:
            raise RegistrationError(
                f"Cannot register '{declaration.full_path}': registry is frozen"
            )

        slots = build_slots(declaration, self._validators, pass_caller=pass_caller)
        handler = CommandHandler(
            declaration,
            action,
            slots,
            self._permission_checker,
            self._messages,
        )

        path = declaration.full_path
        if path in self._handlers:
            log_with_context(
                logger,
                logging.WARNING,
                f"Command '{path}' registered twice; replacing previous handler",
                command=path,
            )
        self._handlers[path] = handler
        self._declarations[path] = declaration
        if declaration.is_root:
            self._roots[path] = None

        if self._log_registrations:
            log_with_context(
                logger,
                logging.INFO,
                f"Registered command: /{declaration.usage_line()} "
                f"(permission: {declaration.permission or 'none'})",
                command=path,
            )
        return handler

    def command(
        self,
        name: str,
        *,
        parent: str | Sequence[str] = (),
        description: str = "",
        permission: str = "",
        usage: str = "",
        arguments: Iterable[ArgumentDeclaration] = (),
        pass_caller: bool = True,
    ) -> Callable[[CommandAction], CommandAction]:
        """Decorator that declares and registers a command.

        Example:
            @registry.command(
                "performance",
                parent="serverinfo",
                arguments=[enum_arg("detail", ["basic", "full"], required=False)],
            )
            def performance(caller, detail):
                ...
        """
        parents = (parent,) if isinstance(parent, str) else tuple(parent)
        declaration = CommandDeclaration(
            name=name,
            parents=parents,
            description=description,
            permission=permission,
            usage=usage,
            arguments=tuple(arguments),
        )

        def decorator(action: CommandAction) -> CommandAction:
            self.register(declaration, action, pass_caller=pass_caller)
            return action

        return decorator

    # --- Lookup ---

    def get(self, path: str) -> CommandHandler | None:
        """Get the handler registered under a full dotted path."""
        return self._handlers.get(path.lower())

    def list_declarations(self) -> Mapping[str, CommandDeclaration]:
        """Read-only snapshot of all declarations keyed by full path."""
        return MappingProxyType(dict(self._declarations))

    def root_commands(self) -> list[str]:
        """Base command words that were registered as commands themselves."""
        return list(self._roots)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path.lower() in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    # --- Routing ---

    def resolve(self, base_word: str, tokens: Sequence[str]) -> Resolution | None:
        """Find the most specific command for a command line.

        Every token is treated as one candidate path segment; prefixes are
        tried from longest to shortest, so ``serverinfo player inventory
        Alice`` reaches ``serverinfo.player.inventory`` before
        ``serverinfo.player`` and finally ``serverinfo``.

        Args:
            base_word: The base command word.
            tokens: The tokens typed after it.

        Returns:
            The matched handler and leftover tokens, or None.
        """
        segments = [base_word.lower(), *(t.lower() for t in tokens)]
        for length in range(len(segments), 0, -1):
            handler = self._handlers.get(PATH_SEPARATOR.join(segments[:length]))
            if handler is not None:
                return Resolution(handler, tuple(tokens[length - 1 :]))
        return None

    def dispatch(
        self, caller: Any, base_word: str, tokens: Sequence[str]
    ) -> DispatchResult:
        """Resolve a command line and run it.

        Returns:
            Invoked or rejected results from the handler, or an unresolved
            result when nothing matched.
        """
        resolution = self.resolve(base_word, tokens)
        if resolution is None:
            logger.debug("No command matches '%s %s'", base_word, " ".join(tokens))
            return DispatchResult.unresolved()
        return resolution.handler.execute(caller, resolution.remaining)

    def complete(
        self, caller: Any, base_word: str, tokens: Sequence[str]
    ) -> list[str]:
        """Suggest completions for the last token of a command line.

        Subcommand names under the typed path are offered first. Only when
        there are none and the non-empty tokens spell out a registered
        command are that command's argument completions consulted.

        Args:
            caller: The caller asking for completions.
            base_word: The base command word.
            tokens: Tokens after the base word; the last is the partial
                word being typed (empty right after a space).

        Returns:
            Suggestions, possibly empty.
        """
        base = base_word.lower()
        current = tokens[-1].lower() if tokens else ""

        parent_segments = [base, *(t.lower() for t in tokens[:-1])]
        prefix = PATH_SEPARATOR.join(parent_segments) + PATH_SEPARATOR
        suggestions = [
            child
            for child in (
                path[len(prefix) :] for path in self._handlers if path.startswith(prefix)
            )
            if PATH_SEPARATOR not in child and child.startswith(current)
        ]
        if suggestions:
            return suggestions

        typed = [t.lower() for t in tokens if t]
        handler = self._handlers.get(PATH_SEPARATOR.join([base, *typed]))
        if handler is None:
            return []
        return handler.complete(caller, tokens)
