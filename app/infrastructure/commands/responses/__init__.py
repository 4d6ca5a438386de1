"""Platform-agnostic response models and formatters."""

from infrastructure.commands.responses.formatters import ResponseFormatter
from infrastructure.commands.responses.models import (
    Action,
    Attachment,
    Button,
    ButtonStyle,
    ChatMessage,
    Colours,
    Menu,
    MenuOption,
)
from infrastructure.commands.responses.slack_formatter import (
    ACTION_ID_PREFIX,
    MENU_ACTION_ID_PREFIX,
    SlackResponseFormatter,
)

__all__ = [
    # Models
    "Action",
    "Attachment",
    "Button",
    "ButtonStyle",
    "ChatMessage",
    "Colours",
    "Menu",
    "MenuOption",
    # Formatters
    "ACTION_ID_PREFIX",
    "MENU_ACTION_ID_PREFIX",
    "ResponseFormatter",
    "SlackResponseFormatter",
]
