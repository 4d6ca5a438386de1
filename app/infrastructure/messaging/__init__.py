"""Chat message delivery.

- MessageClient: protocol used by commands and task lists
- SlackMessageClient / ResponderMessageClient / ChannelMessageClient: Slack
  implementations that edit messages in place by message id
- MessageLocator: message id to Slack timestamp map
"""

from infrastructure.messaging.base import MessageClient
from infrastructure.messaging.locator import MessageLocator, message_locator
from infrastructure.messaging.slack import (
    ChannelMessageClient,
    ResponderMessageClient,
    SlackMessageClient,
)

__all__ = [
    "MessageClient",
    "MessageLocator",
    "message_locator",
    "SlackMessageClient",
    "ResponderMessageClient",
    "ChannelMessageClient",
]
