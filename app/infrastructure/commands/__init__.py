"""Command framework for chat commands resolved over several turns.

This framework provides:
- CommandRegistry: Register commands by name and intent
- CommandContext: Platform-agnostic execution context
- CommandReference: Serialisable command + parameters carried by buttons/menus
- QMError / handle_qm_error: User-facing error reporting
- recursive: RecursiveParameterRequestCommand engine
- providers: Slack Bolt integration

Example:
    from infrastructure.commands import CommandRegistry

    registry = CommandRegistry("qm")
    registry.register(Help, description="Show the available commands")
"""

from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import (
    QMError,
    QMErrorType,
    ServiceUnavailableError,
    handle_qm_error,
    raise_for_result,
)
from infrastructure.commands.models import CommandRegistration
from infrastructure.commands.references import CommandReference, CommandReferenceError
from infrastructure.commands.registry import CommandRegistry

__all__ = [
    "CommandContext",
    "CommandRegistration",
    "CommandReference",
    "CommandReferenceError",
    "CommandRegistry",
    "QMError",
    "QMErrorType",
    "ServiceUnavailableError",
    "handle_qm_error",
    "raise_for_result",
]
