"""Command errors and the single user-facing error handler.

Every failure reaching the top of a command turn goes through
``handle_qm_error`` so the user sees exactly one plain-language message in
place of the interaction's status message.
"""

import re
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

from core.config import settings
from core.logging import get_module_logger
from infrastructure.commands.responses.models import Attachment, ChatMessage
from infrastructure.operations import OperationResult, OperationStatus
from infrastructure.operations.classifiers import is_connection_refused

if TYPE_CHECKING:
    from infrastructure.messaging.base import MessageClient

logger = get_module_logger()

SERVICE_DOWN_MESSAGE = (
    "❗Unexpected failure. An external service dependency appears to be down."
)
UNHANDLED_ERROR_MESSAGE = (
    "❗Unhandled exception occurred. Please alert your system admin to check "
    "the logs and correct the issue accordingly."
)

_ENDS_WITH_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()?]$")


class QMErrorType(str, Enum):
    """Kinds of QMError callers may branch on."""

    GENERIC = "generic"
    CONFLICT = "conflict"


class QMError(Exception):
    """User input or business rule failure with a user-facing message.

    Attributes:
        message: Message used for logs (and for the user when no chat
            message is given)
        chat_message: Optional user-facing text or message replacing
            ``message`` in chat
        error_type: QMErrorType of the failure

    Example:
        raise QMError(
            f"Team {team_name} not found",
            "The selected team could not be found. Please try again",
        )
    """

    def __init__(
        self,
        message: str,
        chat_message: Union[ChatMessage, str, None] = None,
        error_type: QMErrorType = QMErrorType.GENERIC,
    ):
        super().__init__(message)
        self.message = message
        self.chat_message = chat_message
        self.error_type = error_type

    def get_chat_message(self) -> ChatMessage:
        """Build the user-facing message with the FAQ hint appended."""
        if self.chat_message is None:
            text = f"❗{self.message}"
            attachments = []
        elif isinstance(self.chat_message, str):
            text = f"❗{self.chat_message}"
            attachments = []
        else:
            text = self.chat_message.text
            attachments = list(self.chat_message.attachments)

        if not _ENDS_WITH_PUNCTUATION.search(text):
            text = f"{text}."

        faq_url = f"{settings.chatops.DOCS_BASE_URL}/FAQ"
        text = f"{text} Consulting the <{faq_url}|FAQ> may be useful."
        return ChatMessage(text=text, attachments=attachments)


class ServiceUnavailableError(Exception):
    """Raised when a backend service could not be reached."""

    code = "ECONNREFUSED"


async def handle_qm_error(
    message_client: "MessageClient",
    error: BaseException,
    message_id: Optional[str] = None,
    attachments: Optional[Sequence[Attachment]] = None,
) -> None:
    """Report a failure to the user as exactly one chat message.

    Args:
        message_client: Client addressing the invoking channel
        error: The exception raised while handling the interaction
        message_id: Id of the message to replace (the correlation id)
        attachments: Follow-up actions (e.g. a retry button) appended to the
            error message
    """
    message: Union[ChatMessage, str]
    if is_connection_refused(error):
        logger.error(
            "external_service_unavailable",
            error=str(error),
            error_type=type(error).__name__,
        )
        message = SERVICE_DOWN_MESSAGE
    elif isinstance(error, QMError):
        logger.error(
            "command_failed",
            error=error.message,
            qm_error_type=error.error_type.value,
        )
        message = error.get_chat_message()
    else:
        logger.error(
            "unhandled_command_exception",
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
        )
        message = UNHANDLED_ERROR_MESSAGE

    if attachments:
        if isinstance(message, str):
            message = ChatMessage(text=message)
        message.attachments.extend(attachments)

    await message_client.send(message, message_id=message_id)


def raise_for_result(
    result: OperationResult,
    message: str,
    chat_message: Union[ChatMessage, str, None] = None,
) -> Any:
    """Return the data of a successful result or raise a matching error.

    Args:
        result: Outcome of a backend call
        message: Log message used when the call failed
        chat_message: User-facing message used when the call failed

    Returns:
        ``result.data`` for successful results

    Raises:
        ServiceUnavailableError: If the backend could not be reached
        QMError: For every other failure (CONFLICT typed for 409s)
    """
    if result.is_success:
        return result.data

    detail = f"{message}: {result.message}"
    if result.status == OperationStatus.UNAVAILABLE:
        raise ServiceUnavailableError(detail)
    if result.status == OperationStatus.CONFLICT:
        raise QMError(detail, chat_message, error_type=QMErrorType.CONFLICT)
    raise QMError(detail, chat_message or message)
