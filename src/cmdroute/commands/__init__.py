"""Command declarations, handlers and the routing registry.

Usage:
    from cmdroute.arguments import ValidatorRegistry, enum_arg
    from cmdroute.commands import CommandRegistry

    registry = CommandRegistry(ValidatorRegistry.with_defaults())

    @registry.command(
        "performance",
        parent="serverinfo",
        arguments=[enum_arg("detail", ["basic", "full"], required=False)],
    )
    def performance(caller, detail):
        return f"detail={detail or 'basic'}"

    result = registry.dispatch(caller, "serverinfo", ["performance", "FULL"])
    assert result.return_value == "detail=full"
"""

from cmdroute.commands.base import (
    CommandDeclaration,
    DispatchResult,
    DispatchStatus,
    RejectionReason,
)
from cmdroute.commands.handler import (
    CommandAction,
    CommandHandler,
    ContextSlot,
    ParameterSlot,
    ValidatedSlot,
    build_slots,
)
from cmdroute.commands.registry import CommandRegistry, Resolution

__all__ = [
    # Declarations and results
    "CommandDeclaration",
    "DispatchResult",
    "DispatchStatus",
    "RejectionReason",
    # Handler
    "CommandAction",
    "CommandHandler",
    "ContextSlot",
    "ParameterSlot",
    "ValidatedSlot",
    "build_slots",
    # Registry
    "CommandRegistry",
    "Resolution",
]
