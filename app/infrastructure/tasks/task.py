"""Unit of work executed by a TaskRunner."""

from abc import ABC, abstractmethod
from typing import Optional

from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import QMError
from infrastructure.tasks.message import TaskListMessage


class Task(ABC):
    """Abstract task.

    Subclasses implement ``execute_task`` and may add their own detail rows
    to the task list in ``configure_task_list_message``; those rows are
    indented under the task's header row.
    """

    description: str = ""

    def __init__(self):
        self.task_list_message: Optional[TaskListMessage] = None

    def set_task_list_message(self, task_list_message: TaskListMessage, indentation: int) -> None:
        """Attach the task list and indent the rows the task adds to it."""
        self.task_list_message = task_list_message
        start = task_list_message.count_tasks()
        self.configure_task_list_message(task_list_message)
        for index in range(start, task_list_message.count_tasks()):
            task_list_message.indent_task_at_index(index, indentation)

    def configure_task_list_message(self, task_list_message: TaskListMessage) -> None:
        """Add detail rows to the task list (hook)."""

    async def execute(self, ctx: CommandContext) -> bool:
        """Run the task.

        Raises:
            QMError: If the task was never attached to a task list
        """
        if self.task_list_message is None:
            raise QMError("TaskListMessage is undefined. Cannot start taskRunner.")
        return await self.execute_task(ctx)

    @abstractmethod
    async def execute_task(self, ctx: CommandContext) -> bool:
        """Do the work; return False (or raise) on failure."""
