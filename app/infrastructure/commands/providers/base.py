"""Base provider for platform-agnostic command handling.

A provider turns a platform event (slash command or interactive click) into
a command instance plus a CommandContext and runs one resolution turn.

Example:
    registry = CommandRegistry("qm")
    provider = SlackCommandProvider(registry)
    bot.command("/qm")(qm_command)  # qm_command calls provider.handle(...)
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import uuid4

from core.logging import bind_correlation_id, get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.commands.parser import CommandParseError, CommandParser
from infrastructure.commands.recursive.command import RecursiveParameterRequestCommand
from infrastructure.commands.recursive.parameters import CORRELATION_ID
from infrastructure.commands.registry import CommandRegistry

logger = get_module_logger()


class CommandProvider(ABC):
    """Base class for platform-specific command providers.

    Implements the generic parse, build, and run flow. Subclasses provide
    platform-specific text extraction, context creation and acknowledgment.
    """

    def __init__(self, registry: CommandRegistry):
        """Initialize provider with command registry.

        Args:
            registry: CommandRegistry with the commands to dispatch
        """
        self.registry = registry
        self.parser = CommandParser(registry)

    @abstractmethod
    def extract_command_text(self, platform_payload: Any) -> str:
        """Extract command text (without the slash command) from the payload."""
        ...  # pylint: disable=unnecessary-ellipsis

    @abstractmethod
    def create_context(self, platform_payload: Any) -> CommandContext:
        """Create CommandContext from a slash command payload.

        Must set up requestor and channel identification, platform metadata
        and the response channel (``ctx._responder``).
        """
        ...  # pylint: disable=unnecessary-ellipsis

    @abstractmethod
    def acknowledge(self, platform_payload: Any) -> None:
        """Acknowledge receipt (Slack requires it within 3 seconds)."""
        ...  # pylint: disable=unnecessary-ellipsis

    @abstractmethod
    def send_help(self, platform_payload: Any, help_text: str) -> None:
        """Send usage text to the user."""
        ...  # pylint: disable=unnecessary-ellipsis

    def generate_help_text(self, error: Optional[str] = None) -> str:
        """Usage text listing every registered intent."""
        lines = []
        if error:
            lines.append(f"❗{error}")
            lines.append("")
        lines.append("Available commands:")
        for registration in self.registry.list_commands():
            if not registration.intent:
                continue
            description = f" - {registration.description}" if registration.description else ""
            lines.append(f"• `{registration.intent}`{description}")
        return "\n".join(lines)

    def handle(self, platform_payload: Any) -> None:
        """Handle a slash command.

        Args:
            platform_payload: Platform-specific command data structure
        """
        self.acknowledge(platform_payload)
        text = self.extract_command_text(platform_payload)

        try:
            parsed = self.parser.parse(text)
        except CommandParseError as e:
            logger.info("command_parse_failed", raw_text=text, error=str(e))
            self.send_help(platform_payload, self.generate_help_text(str(e)))
            return

        ctx = self.create_context(platform_payload)
        command = parsed.registration.create(parsed.parameters)
        logger.info(
            "command_received",
            command=parsed.registration.name,
            user_id=ctx.user_id,
            channel_id=ctx.channel_id,
        )
        self.run(command, ctx)

    def run(self, command: RecursiveParameterRequestCommand, ctx: CommandContext) -> None:
        """Run one resolution turn of ``command`` to completion.

        The correlation id is fixed before the turn starts so every log line
        of the interaction carries it.
        """
        if not command.parameters.is_set(CORRELATION_ID):
            command.parameters[CORRELATION_ID] = str(uuid4())
        with bind_correlation_id(command.parameters[CORRELATION_ID]):
            asyncio.run(command.handle(ctx))

    @staticmethod
    def payload_value(payload: Dict[str, Any], *path: str, default: Any = "") -> Any:
        """Read a nested value from a payload dict, ``default`` when absent."""
        current: Any = payload
        for key in path:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return current
