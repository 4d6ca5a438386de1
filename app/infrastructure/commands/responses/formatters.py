"""Response formatters for platform-specific rendering."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union

from infrastructure.commands.responses.models import ChatMessage


class ResponseFormatter(ABC):
    """Base class for platform-specific response formatters.

    Subclasses convert platform-agnostic ``ChatMessage`` objects into the
    payload accepted by the platform's post/update calls.
    """

    def format(self, message: Union[ChatMessage, str]) -> Dict[str, Any]:
        """Format either a plain string or a ChatMessage."""
        if isinstance(message, str):
            return self.format_text(message)
        return self.format_message(message)

    @abstractmethod
    def format_text(self, text: str) -> Dict[str, Any]:
        """Format plain text message.

        Args:
            text: Plain text message to format.

        Returns:
            Platform-specific message format as dictionary.
        """
        pass

    @abstractmethod
    def format_message(self, message: ChatMessage) -> Dict[str, Any]:
        """Format a chat message with attachments and actions.

        Args:
            message: Platform-agnostic message.

        Returns:
            Platform-specific message format as dictionary.
        """
        pass
