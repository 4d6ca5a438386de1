"""Ordered task execution with a live checklist message."""

from infrastructure.tasks.message import TaskListMessage
from infrastructure.tasks.models import STATUS_COSMETICS, StatusCosmetic, TaskStatus
from infrastructure.tasks.runner import TaskRunner
from infrastructure.tasks.task import Task

__all__ = [
    "STATUS_COSMETICS",
    "StatusCosmetic",
    "Task",
    "TaskListMessage",
    "TaskRunner",
    "TaskStatus",
]
