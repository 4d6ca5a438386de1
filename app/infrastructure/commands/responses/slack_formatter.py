"""Slack-specific response formatter.

Messages are rendered as a top-level ``text`` plus legacy attachments (for
the coloured side bar) whose bodies are Block Kit blocks.

Reference: https://api.slack.com/reference/messaging/attachments
"""

from typing import Any, Dict, List

from core.logging import get_module_logger
from infrastructure.commands.responses.formatters import ResponseFormatter
from infrastructure.commands.responses.models import (
    Action,
    Attachment,
    ButtonStyle,
    ChatMessage,
    Menu,
)

# Every interactive element rendered by this formatter gets an action id
# starting with this prefix so a single Bolt action listener can route them.
ACTION_ID_PREFIX = "qm_command"
# Command menus use this prefix followed by the parameter name.
MENU_ACTION_ID_PREFIX = f"{ACTION_ID_PREFIX}_select:"

# Slack Block Kit size limits.
MAX_OPTION_VALUE_LENGTH = 150
MAX_BLOCK_ID_LENGTH = 255
MAX_BUTTON_VALUE_LENGTH = 2000

logger = get_module_logger()


class SlackResponseFormatter(ResponseFormatter):
    """Formatter for Slack messages.

    Converts platform-agnostic chat messages to Slack's attachment + Block Kit
    format.
    """

    def format_text(self, text: str) -> Dict[str, Any]:
        """Format plain text message for Slack.

        Args:
            text: Plain text message.

        Returns:
            Slack message dict with text key.
        """
        return {"text": text, "attachments": []}

    def format_message(self, message: ChatMessage) -> Dict[str, Any]:
        """Format a chat message for Slack.

        Args:
            message: Platform-agnostic message.

        Returns:
            Slack message with text and attachments.
        """
        return {
            "text": message.text,
            "attachments": [
                self._format_attachment(attachment, index)
                for index, attachment in enumerate(message.attachments)
            ],
        }

    def _format_attachment(self, attachment: Attachment, index: int) -> Dict[str, Any]:
        blocks: List[Dict[str, Any]] = []

        if attachment.text:
            section: Dict[str, Any] = {
                "type": "section",
                "text": {"type": "mrkdwn", "text": attachment.text},
            }
            if attachment.thumb_url:
                section["accessory"] = {
                    "type": "image",
                    "image_url": attachment.thumb_url,
                    "alt_text": attachment.fallback or "thumbnail",
                }
            blocks.append(section)

        elements = [
            self._format_action(action, index, position)
            for position, action in enumerate(attachment.actions)
            if not self._is_command_menu(action)
        ]
        if elements:
            blocks.append(
                {
                    "type": "actions",
                    "block_id": f"{ACTION_ID_PREFIX}_block_{index}",
                    "elements": elements,
                }
            )

        # A command menu gets its own block: the block id carries the command
        # reference and the action id the parameter the selection fills.
        for action in attachment.actions:
            if self._is_command_menu(action):
                blocks.append(self._format_command_menu_block(action))

        formatted: Dict[str, Any] = {
            "fallback": attachment.fallback or attachment.text,
            "blocks": blocks,
        }
        if attachment.color:
            formatted["color"] = attachment.color
        return formatted

    @staticmethod
    def _is_command_menu(action: Action) -> bool:
        return isinstance(action, Menu) and action.reference is not None

    def _format_command_menu_block(self, menu: Menu) -> Dict[str, Any]:
        block_id = menu.reference.encode()
        if len(block_id) > MAX_BLOCK_ID_LENGTH:
            logger.warning(
                "menu_reference_too_long",
                command=menu.reference.command,
                parameter=menu.parameter_name,
                length=len(block_id),
                limit=MAX_BLOCK_ID_LENGTH,
            )
        element = self._format_menu(menu, f"{MENU_ACTION_ID_PREFIX}{menu.parameter_name}")
        return {"type": "actions", "block_id": block_id, "elements": [element]}

    def _format_menu(self, menu: Menu, action_id: str) -> Dict[str, Any]:
        options = []
        for option in menu.options:
            if len(option.value) > MAX_OPTION_VALUE_LENGTH:
                logger.warning(
                    "menu_option_value_too_long",
                    option=option.text,
                    length=len(option.value),
                    limit=MAX_OPTION_VALUE_LENGTH,
                )
            options.append(
                {
                    "text": {"type": "plain_text", "text": option.text},
                    "value": option.value,
                }
            )
        return {
            "type": "static_select",
            "action_id": action_id,
            "placeholder": {"type": "plain_text", "text": menu.placeholder},
            "options": options,
        }

    def _format_action(self, action: Action, index: int, position: int) -> Dict[str, Any]:
        action_id = action.action_id or f"{ACTION_ID_PREFIX}_{index}_{position}"

        if isinstance(action, Menu):
            return self._format_menu(action, action_id)

        element: Dict[str, Any] = {
            "type": "button",
            "text": {"type": "plain_text", "text": action.text},
            "action_id": action_id,
        }
        button_style = self._map_button_style(action.style)
        if button_style:
            element["style"] = button_style
        if action.value:
            if len(action.value) > MAX_BUTTON_VALUE_LENGTH:
                logger.warning(
                    "button_value_too_long",
                    button=action.text,
                    length=len(action.value),
                    limit=MAX_BUTTON_VALUE_LENGTH,
                )
            element["value"] = action.value
        return element

    def _map_button_style(self, style: ButtonStyle) -> str:
        """Map platform-agnostic button style to Slack style.

        Args:
            style: Platform-agnostic button style.

        Returns:
            Slack button style string or empty string for default.
        """
        mapping = {
            ButtonStyle.PRIMARY: "primary",
            ButtonStyle.DANGER: "danger",
            ButtonStyle.DEFAULT: "",
        }
        return mapping.get(style, "")
