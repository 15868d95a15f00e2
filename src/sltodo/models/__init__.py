"""Data models."""

from .enums import TaskFilter
from .sltodo_config import DEFAULT_DATA_ROOT, DEFAULT_STORAGE_KEY, SltodoConfig
from .task import EditTarget, Task, VisibleTask, dump_tasks, load_tasks

__all__ = [
    "DEFAULT_DATA_ROOT",
    "DEFAULT_STORAGE_KEY",
    "EditTarget",
    "SltodoConfig",
    "Task",
    "TaskFilter",
    "VisibleTask",
    "dump_tasks",
    "load_tasks",
]
