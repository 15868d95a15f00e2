"""Enums for task filtering."""

from enum import Enum

from .task import Task


class TaskFilter(str, Enum):
    """Which tasks the list shows."""

    ALL = "all"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"

    @property
    def label(self) -> str:
        """Button label for this filter."""
        return _LABELS[self]

    def matches(self, task: Task) -> bool:
        """Check if a task passes this filter."""
        if self is TaskFilter.COMPLETED:
            return task.completed
        if self is TaskFilter.INCOMPLETE:
            return not task.completed
        return True

    def next(self) -> "TaskFilter":
        """Next filter in display order, wrapping at the end."""
        members = list(TaskFilter)
        return members[(members.index(self) + 1) % len(members)]


_LABELS = {
    TaskFilter.ALL: "All Tasks",
    TaskFilter.COMPLETED: "Completed",
    TaskFilter.INCOMPLETE: "To Complete",
}
