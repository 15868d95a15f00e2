"""UI components."""

from .screens.task_list import TaskListScreen
from .widgets.task_list_view import TaskListView
from .widgets.task_row import TaskRow

__all__ = [
    "TaskListScreen",
    "TaskListView",
    "TaskRow",
]
