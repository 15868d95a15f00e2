"""Service for applying list filters to tasks."""

from ..models import Task, TaskFilter, VisibleTask


class FilterService:
    """Service for deriving the visible part of the task list."""

    def parse(self, value: TaskFilter | str) -> TaskFilter:
        """
        Resolve a filter from an enum member or its string value.

        Matching is case-insensitive and ignores surrounding whitespace.

        Raises:
            ValueError: If the value names no known filter.
        """
        if isinstance(value, TaskFilter):
            return value
        return TaskFilter(value.strip().lower())

    def apply(self, tasks: list[Task], filter_: TaskFilter) -> list[VisibleTask]:
        """Apply filter to a list of tasks, keeping each task's list index."""
        return [
            VisibleTask(index=index, task=task)
            for index, task in enumerate(tasks)
            if filter_.matches(task)
        ]
