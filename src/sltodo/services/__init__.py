"""Service layer for business logic."""

from .config_service import ConfigService
from .filter_service import FilterService
from .task_list_controller import TaskListController

__all__ = [
    "ConfigService",
    "FilterService",
    "TaskListController",
]
