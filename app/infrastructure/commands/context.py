"""Command execution context - platform agnostic."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from core.logging import get_module_logger
from infrastructure.commands.responses.models import ChatMessage

if TYPE_CHECKING:
    from infrastructure.messaging.base import MessageClient

logger = get_module_logger()


@dataclass
class CommandContext:
    """Platform-agnostic command execution context.

    Provides a unified interface for commands regardless of the chat platform
    that triggered them. One context is created per chat interaction (slash
    command or button/menu click).

    Attributes:
        platform: Platform name (slack, api)
        user_id: Platform-specific requestor user identifier
        channel_id: Platform-specific channel identifier
        user_name: Display/handle of the requestor
        channel_name: Name of the channel the interaction came from
        metadata: Platform-specific metadata (e.g., Slack client, team id)
        correlation_id: Id of the chat message the current invocation edits.
            Set by the command on its first turn when absent.
        responder: Message client answering in the invoking channel
            (injected by the provider)

    Example:
        async def run_command(self, ctx: CommandContext):
            await ctx.respond("Done", message_id=ctx.correlation_id)
    """

    platform: str
    user_id: str
    channel_id: str
    user_name: str = ""
    channel_name: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[str] = None

    # Injected by provider
    _responder: Optional["MessageClient"] = field(default=None)

    def __post_init__(self):
        """Initialize defaults."""
        if self.metadata is None:
            self.metadata = {}

    @property
    def message_client(self) -> Optional["MessageClient"]:
        """Message client bound to the invoking channel, if any."""
        return self._responder

    async def respond(
        self, message: Union[ChatMessage, str], message_id: Optional[str] = None
    ) -> None:
        """Send (or replace) a message in the invoking channel.

        Args:
            message: Plain text or a ChatMessage
            message_id: When given, a previously sent message with the same id
                is edited in place instead of posting a new one
        """
        if self._responder is None:
            logger.warning("respond_called_without_responder", message_id=message_id)
            return
        await self._responder.send(message, message_id=message_id)
