"""cmdroute: declarative command dispatch with validated arguments.

Commands are declared as data, registered into a dotted namespace, routed
by longest-prefix match and invoked with typed, validated arguments.
"""

from cmdroute.arguments import (
    ArgumentDeclaration,
    ArgumentValidator,
    FailureCode,
    ValidationOutcome,
    ValidatorRegistry,
    bool_arg,
    entity_arg,
    enum_arg,
    number_arg,
    string_arg,
)
from cmdroute.commands import (
    CommandDeclaration,
    CommandHandler,
    CommandRegistry,
    DispatchResult,
    DispatchStatus,
    RejectionReason,
)
from cmdroute.host import ConsoleCaller, EntityDirectory, InMemoryEntityDirectory

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Arguments
    "ArgumentDeclaration",
    "ArgumentValidator",
    "FailureCode",
    "ValidationOutcome",
    "ValidatorRegistry",
    "bool_arg",
    "entity_arg",
    "enum_arg",
    "number_arg",
    "string_arg",
    # Commands
    "CommandDeclaration",
    "CommandHandler",
    "CommandRegistry",
    "DispatchResult",
    "DispatchStatus",
    "RejectionReason",
    # Host
    "ConsoleCaller",
    "EntityDirectory",
    "InMemoryEntityDirectory",
]
