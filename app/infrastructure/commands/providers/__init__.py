"""Command providers bridging chat platforms to the command framework."""

from infrastructure.commands.providers.base import CommandProvider
from infrastructure.commands.providers.slack import SlackCommandProvider

__all__ = ["CommandProvider", "SlackCommandProvider"]
