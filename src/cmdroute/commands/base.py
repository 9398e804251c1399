"""Command declarations and dispatch results.

A CommandDeclaration is plain data describing one command: its place in
the dotted namespace, the permission it needs and its positional
arguments. How declarations are authored (decorators, config, code) is
up to the caller; the router only ever sees this structure.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cmdroute.arguments.base import ArgumentDeclaration, FailureCode
from cmdroute.exceptions import DeclarationError

PATH_SEPARATOR = "."


def _check_segment(segment: str, what: str) -> None:
    if not segment:
        raise DeclarationError(f"Command {what} must not be empty")
    if PATH_SEPARATOR in segment or any(ch.isspace() for ch in segment):
        raise DeclarationError(
            f"Command {what} '{segment}' must not contain dots or whitespace"
        )


@dataclass(frozen=True)
class CommandDeclaration:
    """Immutable metadata for one command.

    Attributes:
        name: The command's own path segment.
        parents: Parent path segments, outermost first.
        description: Short description for help output.
        permission: Permission required to run it; empty means none.
        usage: Free-form usage text supplied by the author.
        arguments: Positional argument declarations, in order.
    """

    name: str
    parents: tuple[str, ...] = ()
    description: str = ""
    permission: str = ""
    usage: str = ""
    arguments: tuple[ArgumentDeclaration, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable for the tuple fields; a bare string is one parent
        parents = (self.parents,) if isinstance(self.parents, str) else self.parents
        object.__setattr__(self, "parents", tuple(parents))
        object.__setattr__(self, "arguments", tuple(self.arguments))
        _check_segment(self.name, "name")
        for parent in self.parents:
            _check_segment(parent, "parent")

    @property
    def full_path(self) -> str:
        """Lowercased dotted path, e.g. ``serverinfo.player.inventory``."""
        return PATH_SEPARATOR.join(s.lower() for s in (*self.parents, self.name))

    @property
    def parent_count(self) -> int:
        return len(self.parents)

    @property
    def is_root(self) -> bool:
        """Whether this command is a base command word."""
        return not self.parents

    @property
    def base_command(self) -> str:
        return self.full_path.split(PATH_SEPARATOR, 1)[0]

    def parameters_as_string(self) -> str:
        """Render arguments as ``<required> [optional]``."""
        return " ".join(arg.usage_token for arg in self.arguments)

    def usage_line(self) -> str:
        """Full command line usage, e.g. ``serverinfo player <target> <infoType>``."""
        command = self.full_path.replace(PATH_SEPARATOR, " ")
        parameters = self.parameters_as_string()
        return f"{command} {parameters}" if parameters else command


class DispatchStatus(str, Enum):
    """Terminal state of a dispatch."""

    INVOKED = "invoked"
    REJECTED = "rejected"
    UNRESOLVED = "unresolved"


class RejectionReason(str, Enum):
    """Why a resolved command was not (successfully) invoked."""

    PERMISSION_DENIED = "permission_denied"
    TOO_FEW_ARGUMENTS = "too_few_arguments"
    MISSING_ARGUMENT = "missing_argument"
    INVALID_ARGUMENT = "invalid_argument"
    INVOCATION_ERROR = "invocation_error"


@dataclass
class DispatchResult:
    """Result of dispatching a command line.

    Attributes:
        status: Invoked, rejected or unresolved.
        path: Full path of the resolved command, if any.
        reason: Rejection reason when status is rejected.
        message: Caller-visible message for rejections.
        return_value: What the action returned when invoked.
        failure: Validator failure code for invalid arguments.
        argument: Name of the offending argument, if any.
        metadata: Additional details (e.g. required argument count).
    """

    status: DispatchStatus
    path: str | None = None
    reason: RejectionReason | None = None
    message: str | None = None
    return_value: Any = None
    failure: FailureCode | None = None
    argument: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status is DispatchStatus.INVOKED

    @property
    def handled(self) -> bool:
        """Whether a command matched at all."""
        return self.status is not DispatchStatus.UNRESOLVED

    @classmethod
    def invoked(cls, path: str, return_value: Any = None) -> "DispatchResult":
        """Create a result for an action that ran."""
        return cls(
            status=DispatchStatus.INVOKED,
            path=path,
            return_value=return_value,
        )

    @classmethod
    def rejected(
        cls,
        path: str,
        reason: RejectionReason,
        message: str,
        *,
        failure: FailureCode | None = None,
        argument: str | None = None,
        **metadata: Any,
    ) -> "DispatchResult":
        """Create a result for a command that was refused."""
        return cls(
            status=DispatchStatus.REJECTED,
            path=path,
            reason=reason,
            message=message,
            failure=failure,
            argument=argument,
            metadata=metadata,
        )

    @classmethod
    def unresolved(cls) -> "DispatchResult":
        """Create a result for input that matched no command."""
        return cls(status=DispatchStatus.UNRESOLVED)
