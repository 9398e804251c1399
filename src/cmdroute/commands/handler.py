"""Invocation pipeline binding one declaration to its action."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from cmdroute.arguments.base import ArgumentValidator
from cmdroute.arguments.registry import ValidatorRegistry
from cmdroute.commands.base import CommandDeclaration, DispatchResult, RejectionReason
from cmdroute.config.schema import MessagesConfig
from cmdroute.host import PermissionChecker
from cmdroute.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

CommandAction = Callable[..., Any]


@dataclass(frozen=True)
class ContextSlot:
    """Parameter bound to the caller; consumes no token."""


@dataclass(frozen=True)
class ValidatedSlot:
    """Parameter filled from the next token through a validator."""

    validator: ArgumentValidator


ParameterSlot = ContextSlot | ValidatedSlot


def build_slots(
    declaration: CommandDeclaration,
    validators: ValidatorRegistry,
    *,
    pass_caller: bool = True,
) -> tuple[ParameterSlot, ...]:
    """Build the ordered parameter slots for a declaration.

    Raises:
        UnregisteredKindError: If an argument's kind has no factory.
        DeclarationError: If an argument's options are invalid.
    """
    slots: list[ParameterSlot] = [ContextSlot()] if pass_caller else []
    slots.extend(ValidatedSlot(validators.create(arg)) for arg in declaration.arguments)
    return tuple(slots)


class CommandHandler:
    """Runs one command: permission, arity, validation, invocation.

    The action receives one positional argument per slot: the caller for
    the leading context slot (when present), then one converted value per
    declared argument, or None for optional arguments that were not given.
    """

    def __init__(
        self,
        declaration: CommandDeclaration,
        action: CommandAction,
        slots: Sequence[ParameterSlot],
        permission_checker: PermissionChecker,
        messages: MessagesConfig | None = None,
    ) -> None:
        self._declaration = declaration
        self._action = action
        self._slots = tuple(slots)
        self._permission_checker = permission_checker
        self._messages = messages or MessagesConfig()
        self._validators = tuple(
            slot.validator for slot in self._slots if isinstance(slot, ValidatedSlot)
        )

    @property
    def declaration(self) -> CommandDeclaration:
        return self._declaration

    @property
    def action(self) -> CommandAction:
        return self._action

    @property
    def slots(self) -> tuple[ParameterSlot, ...]:
        return self._slots

    @property
    def validators(self) -> tuple[ArgumentValidator, ...]:
        """Validators in declared argument order."""
        return self._validators

    @property
    def required_count(self) -> int:
        return sum(1 for v in self._validators if v.required)

    def execute(self, caller: Any, tokens: Sequence[str]) -> DispatchResult:
        """Validate ``tokens`` and invoke the action.

        Args:
            caller: The caller the command runs for.
            tokens: Tokens left after the command path.

        Returns:
            An invoked or rejected DispatchResult.
        """
        path = self._declaration.full_path
        messages = self._messages

        permission = self._declaration.permission
        if permission and not self._permission_checker(caller, permission):
            return DispatchResult.rejected(
                path,
                RejectionReason.PERMISSION_DENIED,
                messages.permission_denied.format(),
                permission=permission,
            )

        required = self.required_count
        if len(tokens) < required:
            return DispatchResult.rejected(
                path,
                RejectionReason.TOO_FEW_ARGUMENTS,
                messages.too_few_arguments.format(required=required),
                required=required,
                supplied=len(tokens),
            )

        bound: list[Any] = []
        cursor = 0
        for slot in self._slots:
            if isinstance(slot, ContextSlot):
                bound.append(caller)
                continue

            validator = slot.validator
            if cursor >= len(tokens):
                if validator.required:
                    return DispatchResult.rejected(
                        path,
                        RejectionReason.MISSING_ARGUMENT,
                        messages.missing_argument.format(name=validator.name),
                        argument=validator.name,
                    )
                bound.append(None)
                continue

            outcome = validator.validate(tokens[cursor], caller)
            if not outcome.success:
                return DispatchResult.rejected(
                    path,
                    RejectionReason.INVALID_ARGUMENT,
                    messages.invalid_argument.format(
                        name=validator.name, message=outcome.message
                    ),
                    failure=outcome.code,
                    argument=validator.name,
                )
            bound.append(outcome.value)
            cursor += 1

        try:
            return_value = self._action(*bound)
        except Exception as e:
            log_with_context(
                logger,
                logging.ERROR,
                f"Command '{path}' failed: {e}",
                exc_info=True,
                command=path,
                caller=repr(caller),
            )
            return DispatchResult.rejected(
                path,
                RejectionReason.INVOCATION_ERROR,
                messages.invocation_error.format(error=e),
                error_type=type(e).__name__,
            )

        return DispatchResult.invoked(path, return_value)

    def complete(self, caller: Any, tokens: Sequence[str]) -> list[str]:
        """Completions for the argument being typed.

        ``tokens`` are all tokens after the base command word, including
        the path segments below it; the last one is the partial input.
        """
        if not tokens:
            return []

        index = len(tokens) - self._declaration.parent_count - 1
        if not 0 <= index < len(self._validators):
            return []

        current = tokens[-1].lower()
        return [
            candidate
            for candidate in self._validators[index].complete(caller)
            if candidate.lower().startswith(current)
        ]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={self._declaration.full_path!r})"
