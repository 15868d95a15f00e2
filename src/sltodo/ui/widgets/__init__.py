"""Widget components."""

from .clear_all_modal import ClearAllModal
from .filter_bar import FilterBar
from .task_list_view import EmptyListMessage, TaskListView
from .task_row import TaskRow

__all__ = [
    "ClearAllModal",
    "EmptyListMessage",
    "FilterBar",
    "TaskListView",
    "TaskRow",
]
