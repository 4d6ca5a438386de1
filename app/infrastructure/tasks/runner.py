"""Sequential task runner."""

from dataclasses import dataclass
from typing import List, Optional

from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.tasks.message import TaskListMessage
from infrastructure.tasks.task import Task

logger = get_module_logger()


@dataclass
class _ScheduledTask:
    task: Task
    key: str


class TaskRunner:
    """Run tasks one after another, stopping at the first failure.

    Each task owns a header row in the task list. A task that returns False
    or raises leaves its row failed and every later row pending.

    Example:
        runner = TaskRunner(TaskListMessage("Provisioning", client, message_id))
        runner.add_task(CreateProjectTask(...)).add_task(CreateEnvironmentsTask(...))
        succeeded = await runner.execute(ctx)
    """

    def __init__(self, task_list_message: TaskListMessage):
        self.task_list_message = task_list_message
        self._tasks: List[_ScheduledTask] = []

    def add_task(
        self, task: Task, header: Optional[str] = None, indentation: int = 1
    ) -> "TaskRunner":
        """Schedule a task.

        Args:
            task: Task to run
            header: Header row text, defaults to the task description
            indentation: Tab depth of the detail rows the task adds

        Returns:
            The runner, for chaining
        """
        key = self.task_list_message.add_task(header or task.description)
        task.set_task_list_message(self.task_list_message, indentation)
        self._tasks.append(_ScheduledTask(task=task, key=key))
        return self

    async def execute(self, ctx: CommandContext) -> bool:
        """Run every scheduled task in order.

        Returns:
            True when every task succeeded, False when one returned False

        Raises:
            Exception: Whatever a task raised, after marking its row failed
        """
        await self.task_list_message.display()

        for scheduled in self._tasks:
            await self.task_list_message.start_task(scheduled.key)
            try:
                succeeded = await scheduled.task.execute(ctx)
            except Exception as error:
                logger.error(
                    "task_failed",
                    task=type(scheduled.task).__name__,
                    error=str(error),
                )
                await self.task_list_message.fail_remaining_tasks()
                raise

            if not succeeded:
                logger.warning("task_unsuccessful", task=type(scheduled.task).__name__)
                await self.task_list_message.fail_remaining_tasks()
                return False

            await self.task_list_message.succeed_task(scheduled.key)

        logger.info("task_runner_completed", tasks=len(self._tasks))
        return True
