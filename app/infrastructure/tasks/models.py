"""Task list status values and their rendering."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from infrastructure.commands.responses.models import Colours


class TaskStatus(str, Enum):
    """Status of one row of a task list."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCESSFUL = "successful"
    FAILED = "failed"


@dataclass(frozen=True)
class StatusCosmetic:
    """Glyph and accent colour a status is rendered with."""

    symbol: str
    color: str


STATUS_COSMETICS: Dict[TaskStatus, StatusCosmetic] = {
    TaskStatus.PENDING: StatusCosmetic(symbol="●", color=Colours.WARNING),
    TaskStatus.RUNNING: StatusCosmetic(symbol="◔", color=Colours.PROMPT),
    TaskStatus.SUCCESSFUL: StatusCosmetic(symbol="✓", color=Colours.SUCCESS),
    TaskStatus.FAILED: StatusCosmetic(symbol="✗", color=Colours.ERROR),
}


@dataclass
class TaskListEntry:
    """One row of a task list."""

    description: str
    status: TaskStatus = TaskStatus.PENDING
