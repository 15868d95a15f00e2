"""Shared fixtures."""

from pathlib import Path

import pytest

from sltodo.models import Task, dump_tasks
from sltodo.repositories import FilesystemStorage, MemoryStorage
from sltodo.services import TaskListController


@pytest.fixture
def storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def controller(storage: MemoryStorage) -> TaskListController:
    """Controller over empty in-memory storage."""
    return TaskListController(storage)


@pytest.fixture
def abc_controller(storage: MemoryStorage) -> TaskListController:
    """Controller preloaded with tasks A, B (completed) and C."""
    storage.save(
        "tasks",
        dump_tasks([Task(text="A"), Task(text="B", completed=True), Task(text="C")]),
    )
    return TaskListController(storage)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Temporary data directory (not created)."""
    return tmp_path / ".sltodo"


@pytest.fixture
def fs_storage(data_dir: Path) -> FilesystemStorage:
    return FilesystemStorage(data_dir)
