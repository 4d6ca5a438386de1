"""Running summary of the parameters a command has collected."""

from typing import Any, Dict, List

from infrastructure.commands.responses.models import ChatMessage


class ParameterStatusDisplay:
    """Ordered ``name -> value`` summary rendered above every prompt.

    Rebuilt from scratch on every resolution turn, so rendering the same set
    of values always gives the same text.
    """

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._order: List[str] = []

    def set_param(self, name: str, value: Any) -> None:
        """Add (or overwrite) a resolved parameter."""
        if name not in self._values:
            self._order.append(name)
        self._values[name] = value

    def get_display_message(self, command_name: str) -> ChatMessage:
        """Render the summary.

        Args:
            command_name: Human readable name of the command

        Returns:
            ChatMessage with the summary text and no attachments
        """
        text = f"Preparing command *{command_name}*: \n"
        for name in self._order:
            text += f"*{name}*: {self._values[name]}\n"
        return ChatMessage(text=text, attachments=[])
