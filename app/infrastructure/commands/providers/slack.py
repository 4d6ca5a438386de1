"""Slack-specific command provider implementation."""

import asyncio
from typing import Any, Callable, Dict, Optional, Protocol

from slack_sdk import WebClient

from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import QMError, handle_qm_error
from infrastructure.commands.providers.base import CommandProvider
from infrastructure.commands.recursive.parameters import CORRELATION_ID
from infrastructure.commands.references import CommandReference, CommandReferenceError
from infrastructure.commands.registry import CommandRegistry
from infrastructure.commands.responses.slack_formatter import MENU_ACTION_ID_PREFIX
from infrastructure.messaging.locator import MessageLocator, message_locator
from infrastructure.messaging.slack import ResponderMessageClient

logger = get_module_logger()


class SlackPayload(Protocol):
    """Structure of a Slack slash command payload.

    Attributes:
        ack: Function to acknowledge command receipt (required within 3 seconds)
        command: Dict with Slack command metadata (user_id, channel_id, text, etc.)
        client: WebClient instance for making Slack API calls
        respond: Function to send a response message to the user
        body: Full request body
    """

    ack: Callable[[], None]
    command: Dict[str, Any]
    client: WebClient
    respond: Callable[..., Any]
    body: Dict[str, Any]


class SlackActionPayload(Protocol):
    """Structure of a Slack interactive (block action) payload.

    Attributes:
        ack: Function to acknowledge the click
        body: Full interaction body (user, channel, container, actions)
        action: The clicked element
        client: WebClient instance
    """

    ack: Callable[[], None]
    body: Dict[str, Any]
    action: Dict[str, Any]
    client: WebClient


class SlackCommandProvider(CommandProvider):
    """Adapter for Slack Bolt SDK.

    Handles the slash command (first turn of a command) and button/menu
    clicks (every later turn). Clicks carry an encoded CommandReference and
    the location of the clicked message, which is recorded so the command
    keeps editing that message.

    Example::

        provider = SlackCommandProvider(registry)
        provider.handle({"ack": ack, "command": command, "client": client,
                         "respond": respond, "body": body})
    """

    def __init__(self, registry: CommandRegistry, locator: Optional[MessageLocator] = None):
        super().__init__(registry)
        self.locator = locator or message_locator

    def extract_command_text(self, platform_payload: Dict[str, Any]) -> str:
        command = platform_payload.get("command", {})
        return command.get("text", "").strip()

    def create_context(self, platform_payload: Dict[str, Any]) -> CommandContext:
        """Create CommandContext from a slash command payload.

        Raises:
            ValueError: If the Slack client is missing
        """
        command = platform_payload.get("command", {})
        client: Optional[WebClient] = platform_payload.get("client")
        if client is None:
            logger.error("slack_client_missing", user_id=command.get("user_id", ""))
            raise ValueError("Slack client required for command execution")

        return self._build_context(
            client,
            user_id=command.get("user_id", ""),
            user_name=command.get("user_name", ""),
            channel_id=command.get("channel_id", ""),
            channel_name=command.get("channel_name", ""),
            metadata={
                "team_id": command.get("team_id", ""),
                "trigger_id": command.get("trigger_id", ""),
                "slack_client": client,
            },
        )

    def create_action_context(self, platform_payload: Dict[str, Any]) -> CommandContext:
        """Create CommandContext from an interaction payload."""
        body = platform_payload.get("body", {})
        client: Optional[WebClient] = platform_payload.get("client")
        if client is None:
            raise ValueError("Slack client required for action handling")

        user = body.get("user", {})
        return self._build_context(
            client,
            user_id=user.get("id", ""),
            user_name=user.get("username") or user.get("name", ""),
            channel_id=self._action_channel_id(body),
            channel_name=self.payload_value(body, "channel", "name"),
            metadata={
                "team_id": self.payload_value(body, "team", "id"),
                "trigger_id": body.get("trigger_id", ""),
                "slack_client": client,
            },
        )

    def _build_context(
        self,
        client: WebClient,
        user_id: str,
        user_name: str,
        channel_id: str,
        channel_name: str,
        metadata: Dict[str, Any],
    ) -> CommandContext:
        ctx = CommandContext(
            platform="slack",
            user_id=user_id,
            channel_id=channel_id,
            user_name=user_name,
            channel_name=channel_name,
            metadata=metadata,
        )
        ctx._responder = ResponderMessageClient(  # pylint: disable=protected-access
            client, channel_id, self.locator
        )
        return ctx

    def acknowledge(self, platform_payload: Dict[str, Any]) -> None:
        ack = platform_payload.get("ack")
        if ack:
            ack()

    def send_help(self, platform_payload: Dict[str, Any], help_text: str) -> None:
        respond = platform_payload.get("respond")
        if respond:
            respond(text=help_text)

    def handle(self, platform_payload: Any) -> None:
        """Handle a Slack slash command.

        Args:
            platform_payload: Dict matching SlackPayload

        Raises:
            ValueError: If required fields are missing from payload
        """
        if not isinstance(platform_payload, dict):
            logger.error(
                "invalid_slack_payload_type",
                payload_type=type(platform_payload).__name__,
            )
            raise ValueError(f"Expected dict payload, got {type(platform_payload).__name__}")

        required_fields = {"ack", "command", "client", "respond"}
        missing = required_fields - set(platform_payload.keys())
        if missing:
            logger.error("slack_payload_missing_fields", missing_fields=missing)
            raise ValueError(f"Slack payload missing required fields: {missing}")

        super().handle(platform_payload)

    def handle_action(self, platform_payload: Dict[str, Any]) -> None:
        """Handle a button click or menu selection carrying a command reference.

        Args:
            platform_payload: Dict matching SlackActionPayload
        """
        self.acknowledge(platform_payload)
        body = platform_payload.get("body", {})
        action = platform_payload.get("action") or (body.get("actions") or [{}])[0]

        try:
            reference = self._action_reference(action)
        except CommandReferenceError as e:
            logger.warning(
                "slack_action_without_command_reference",
                action_id=action.get("action_id"),
                error=str(e),
            )
            return

        correlation_id = reference.parameters.get(CORRELATION_ID)
        channel_id = self._action_channel_id(body)
        message_ts = self.payload_value(body, "container", "message_ts") or self.payload_value(
            body, "message", "ts"
        )
        if correlation_id and channel_id and message_ts:
            self.locator.remember(correlation_id, channel_id, message_ts)

        ctx = self.create_action_context(platform_payload)
        logger.info(
            "command_action_received",
            command=reference.command,
            user_id=ctx.user_id,
            channel_id=ctx.channel_id,
        )

        try:
            command = self.registry.create(reference.command, reference.parameters)
        except KeyError:
            logger.error("command_reference_unknown_command", command=reference.command)
            asyncio.run(
                handle_qm_error(
                    ctx.message_client,
                    QMError(f"The command {reference.command} is no longer available"),
                    message_id=correlation_id,
                )
            )
            return

        self.run(command, ctx)

    @staticmethod
    def _action_reference(action: Dict[str, Any]) -> CommandReference:
        """Rebuild the command reference carried by a clicked element.

        Buttons hold the whole encoded reference in their value. A command
        menu holds it in its block id, names the target parameter in its
        action id and reports the picked value as the selected option.

        Raises:
            CommandReferenceError: If the element carries no reference
        """
        action_id = action.get("action_id", "")
        selected = action.get("selected_option")
        if action_id.startswith(MENU_ACTION_ID_PREFIX):
            if not selected:
                raise CommandReferenceError(f"Menu action {action_id} has no selection")
            reference = CommandReference.decode(action.get("block_id", ""))
            return reference.with_parameter(
                action_id[len(MENU_ACTION_ID_PREFIX) :], selected.get("value", "")
            )
        if selected:
            return CommandReference.decode(selected.get("value", ""))
        return CommandReference.decode(action.get("value", ""))

    def _action_channel_id(self, body: Dict[str, Any]) -> str:
        return self.payload_value(body, "container", "channel_id") or self.payload_value(
            body, "channel", "id"
        )
