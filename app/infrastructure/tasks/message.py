"""Live checklist message edited in place as tasks progress."""

from typing import Dict, List, Optional
from uuid import uuid4

from core.logging import get_module_logger
from infrastructure.commands.responses.models import Attachment, ChatMessage
from infrastructure.messaging.base import MessageClient
from infrastructure.tasks.models import STATUS_COSMETICS, TaskListEntry, TaskStatus

logger = get_module_logger()


class TaskListMessage:
    """Ordered list of task rows rendered as a single chat message.

    Every status change re-sends the whole list with the same message id, so
    the chat platform shows one message that updates instead of a stream of
    new ones. Rows are never reordered or removed once added.

    Args:
        title: Header text of the message
        message_client: Client the message is delivered with
        message_id: Id of the message to edit; pass the command's correlation
            id to replace the parameter summary with the checklist

    Example:
        task_list = TaskListMessage("Creating environments", ctx.message_client)
        key = task_list.add_task("Create project in Gluon")
        await task_list.display()
        await task_list.succeed_task(key)
    """

    def __init__(
        self,
        title: str,
        message_client: MessageClient,
        message_id: Optional[str] = None,
    ):
        self.title = title
        self.message_client = message_client
        self.message_id = message_id or str(uuid4())
        self._tasks: Dict[str, TaskListEntry] = {}
        self._task_order: List[str] = []

    @staticmethod
    def create_unique_task_name(name: str) -> str:
        """Build a row key that cannot clash with another row's key."""
        return f"{name}{uuid4()}"

    def add_task(self, description: str, key: Optional[str] = None) -> str:
        """Append a pending row.

        Args:
            description: Row text
            key: Row key; a unique key is generated when omitted

        Returns:
            The row key

        Raises:
            ValueError: If the key is already used
        """
        key = key or self.create_unique_task_name(description)
        if key in self._tasks:
            raise ValueError(f"Task '{key}' already added")
        self._tasks[key] = TaskListEntry(description=description)
        self._task_order.append(key)
        return key

    def count_tasks(self) -> int:
        return len(self._task_order)

    def indent_task_at_index(self, index: int, indentation: int) -> None:
        """Prefix every line of the row at ``index`` with tabs."""
        entry = self._tasks[self._task_order[index]]
        prefix = "\t" * indentation
        entry.description = "\n".join(
            f"{prefix}{line}" for line in entry.description.split("\n")
        )

    def get_task_status(self, key: str) -> TaskStatus:
        return self._tasks[key].status

    @property
    def statuses(self) -> List[TaskStatus]:
        """Row statuses in display order."""
        return [self._tasks[key].status for key in self._task_order]

    async def set_task_status(self, key: str, status: TaskStatus) -> None:
        """Change the status of a row and re-send the list."""
        self._tasks[key].status = status
        logger.debug("task_status_changed", task=key, status=status.value)
        await self.display()

    async def start_task(self, key: str) -> None:
        await self.set_task_status(key, TaskStatus.RUNNING)

    async def succeed_task(self, key: str) -> None:
        await self.set_task_status(key, TaskStatus.SUCCESSFUL)

    async def fail_task(self, key: str) -> None:
        await self.set_task_status(key, TaskStatus.FAILED)

    async def fail_remaining_tasks(self) -> None:
        """Mark every running row failed; pending rows stay pending."""
        for key in self._task_order:
            if self._tasks[key].status == TaskStatus.RUNNING:
                self._tasks[key].status = TaskStatus.FAILED
        await self.display()

    async def display(self) -> None:
        """Send the current rendering, replacing the previous one."""
        await self.message_client.send(self.render(), message_id=self.message_id)

    def render(self) -> ChatMessage:
        """Render the list without side effects."""
        attachments = []
        for key in self._task_order:
            entry = self._tasks[key]
            cosmetic = STATUS_COSMETICS[entry.status]
            text = f"{cosmetic.symbol} {entry.description}"
            attachments.append(Attachment(text=text, fallback=text, color=cosmetic.color))
        return ChatMessage(text=self.title, attachments=attachments)
