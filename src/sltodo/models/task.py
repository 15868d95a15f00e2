"""Task domain model."""

import json

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ..exceptions import TaskDataError


class Task(BaseModel):
    """A single to-do item.

    Tasks are immutable; updates go through ``model_copy``. A task has no
    identifier of its own, its identity is its position in the task list.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    completed: bool = False

    def toggled(self) -> "Task":
        """Return a copy with ``completed`` flipped."""
        return self.model_copy(update={"completed": not self.completed})

    def with_text(self, text: str) -> "Task":
        """Return a copy with new text, keeping completion."""
        return self.model_copy(update={"text": text})


class EditTarget(BaseModel):
    """The task currently loaded into the input for editing."""

    model_config = ConfigDict(frozen=True)

    original_text: str
    index: int


class VisibleTask(BaseModel):
    """A task as shown in a filtered view, with its unfiltered index."""

    model_config = ConfigDict(frozen=True)

    index: int
    task: Task


_TASK_LIST = TypeAdapter(list[Task])


def dump_tasks(tasks: list[Task]) -> str:
    """Serialize the whole task list to a JSON array."""
    return json.dumps([task.model_dump() for task in tasks])


def load_tasks(data: str) -> list[Task]:
    """Parse a JSON array produced by :func:`dump_tasks`.

    Raises:
        TaskDataError: If the data is not a JSON array of task objects.
    """
    try:
        raw = json.loads(data)
    except (TypeError, ValueError) as e:
        raise TaskDataError(f"Stored tasks are not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise TaskDataError(f"Stored tasks must be a list, got {type(raw).__name__}")

    try:
        return _TASK_LIST.validate_python(raw)
    except ValidationError as e:
        raise TaskDataError(f"Stored tasks are invalid: {e.error_count()} error(s)") from e
