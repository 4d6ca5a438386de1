"""Messaging boundary used by commands and task lists."""

from typing import Optional, Protocol, Union

from infrastructure.commands.responses.models import ChatMessage


class MessageClient(Protocol):
    """Protocol for clients delivering chat messages.

    A message sent with a ``message_id`` replaces the previous message sent
    with the same id (to the same destination) instead of posting a new one.
    """

    async def send(
        self, message: Union[ChatMessage, str], message_id: Optional[str] = None
    ) -> None:
        """Send or replace a message."""
        ...  # pylint: disable=unnecessary-ellipsis
