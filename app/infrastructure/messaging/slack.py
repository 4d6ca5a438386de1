"""Slack message clients.

Messages are posted with ``chat.postMessage`` the first time a message id is
seen for a channel and edited with ``chat.update`` afterwards. Blocking Web
API calls run in a worker thread so the command coroutines stay responsive.
"""

import asyncio
from typing import Any, Dict, List, Optional, Union

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from core.logging import get_module_logger
from infrastructure.commands.responses.models import ChatMessage
from infrastructure.commands.responses.slack_formatter import SlackResponseFormatter
from infrastructure.messaging.locator import MessageLocator, message_locator

logger = get_module_logger()

# chat.update errors meaning the message cannot be edited and a new one
# should be posted instead.
_STALE_MESSAGE_ERRORS = {"message_not_found", "cant_update_message", "edit_window_closed"}


class SlackMessageClient:
    """Post or edit messages in a set of Slack channels.

    Args:
        client: Slack WebClient
        channels: Channel ids (or names) every message is delivered to
        locator: Map of message ids to Slack timestamps

    Example:
        client = SlackMessageClient(web_client, ["C123"])
        await client.send("Working on it...", message_id=correlation_id)
        await client.send("Done", message_id=correlation_id)  # edits
    """

    def __init__(
        self,
        client: WebClient,
        channels: Optional[List[str]] = None,
        locator: Optional[MessageLocator] = None,
    ):
        self.client = client
        self.channels: List[str] = list(channels or [])
        self.locator = locator or message_locator
        self.formatter = SlackResponseFormatter()

    async def send(
        self, message: Union[ChatMessage, str], message_id: Optional[str] = None
    ) -> None:
        """Send or replace a message in every destination channel.

        Args:
            message: Plain text or ChatMessage
            message_id: Id of the message to replace, if any

        Raises:
            SlackApiError: If Slack rejects the message
        """
        if not self.channels:
            logger.warning("slack_message_without_destination", message_id=message_id)
            return

        payload = self.formatter.format(message)
        for channel in self.channels:
            await asyncio.to_thread(self._deliver, channel, payload, message_id)

    def _deliver(
        self, channel: str, payload: Dict[str, Any], message_id: Optional[str]
    ) -> None:
        ts = self.locator.lookup(message_id, channel) if message_id else None
        if ts is not None:
            try:
                self.client.chat_update(channel=channel, ts=ts, **payload)
                logger.debug("slack_message_updated", channel=channel, message_id=message_id)
                return
            except SlackApiError as e:
                error = e.response.get("error") if e.response is not None else None
                if error not in _STALE_MESSAGE_ERRORS:
                    raise
                logger.warning(
                    "slack_message_update_failed",
                    channel=channel,
                    message_id=message_id,
                    error=error,
                )
                self.locator.forget(message_id, channel)

        response = self.client.chat_postMessage(channel=channel, **payload)
        if message_id:
            self.locator.remember(message_id, channel, response["ts"])
        logger.debug("slack_message_posted", channel=channel, message_id=message_id)


class ResponderMessageClient(SlackMessageClient):
    """Answers in the channel the interaction came from."""

    def __init__(
        self,
        client: WebClient,
        channel_id: str,
        locator: Optional[MessageLocator] = None,
    ):
        super().__init__(client, [channel_id], locator)


class ChannelMessageClient(SlackMessageClient):
    """Addresses explicitly named channels.

    Example:
        await ChannelMessageClient(web_client).add_destination("devops").send(msg)
    """

    def add_destination(self, channel: str) -> "ChannelMessageClient":
        """Add a destination channel and return the client for chaining."""
        if channel not in self.channels:
            self.channels.append(channel)
        return self
