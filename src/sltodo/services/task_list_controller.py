"""Controller owning the task list and its transient UI state."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..exceptions import StorageError, TaskDataError
from ..models import (
    DEFAULT_STORAGE_KEY,
    EditTarget,
    Task,
    TaskFilter,
    VisibleTask,
    dump_tasks,
    load_tasks,
)
from ..repositories import StorageProtocol
from .filter_service import FilterService

logger = logging.getLogger(__name__)

Listener = Callable[["TaskListController"], None]


class TaskListController:
    """
    Single owner of the task list and the input/edit/filter state.

    Every mutation replaces the task list with a new list and saves the
    whole list to storage. Listeners are notified after each change so the
    view can re-render from ``visible_tasks()``.

    Indices always refer to positions in the unfiltered list. Out-of-range
    indices are logged and ignored; they never remove or change another task.
    """

    def __init__(
        self,
        storage: StorageProtocol,
        key: str = DEFAULT_STORAGE_KEY,
        active_filter: TaskFilter = TaskFilter.ALL,
        filter_service: FilterService | None = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self._filter_service = filter_service or FilterService()
        self._listeners: list[Listener] = []
        self._tasks: list[Task] = self._load()
        self._draft_text = ""
        self._edit_target: EditTarget | None = None
        self._active_filter = active_filter
        self._last_save_error: str | None = None

    # --- State ---

    @property
    def tasks(self) -> list[Task]:
        """Copy of the full, unfiltered task list."""
        return list(self._tasks)

    @property
    def draft_text(self) -> str:
        return self._draft_text

    @property
    def edit_target(self) -> EditTarget | None:
        return self._edit_target

    @property
    def edit_mode(self) -> bool:
        return self._edit_target is not None

    @property
    def active_filter(self) -> TaskFilter:
        return self._active_filter

    @property
    def last_save_error(self) -> str | None:
        """Message from the most recent failed save, cleared on success."""
        return self._last_save_error

    def counts(self) -> tuple[int, int]:
        """Return (total, completed) task counts."""
        return len(self._tasks), sum(1 for task in self._tasks if task.completed)

    def visible_tasks(self, filter_: TaskFilter | None = None) -> list[VisibleTask]:
        """Tasks matching the active (or given) filter, in list order."""
        return self._filter_service.apply(self._tasks, filter_ or self._active_filter)

    # --- Listeners ---

    def subscribe(self, listener: Listener) -> None:
        """Call listener after every state change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Input ---

    def set_draft(self, text: str) -> None:
        """Track the input field contents."""
        self._draft_text = text

    def submit(self, draft_text: str | None = None) -> bool:
        """Add a new task, or save the edit when in edit mode.

        Returns:
            True if the task list changed.
        """
        if self.edit_mode:
            return self.save_edit(draft_text)
        return self.add(draft_text) is not None

    # --- Operations ---

    def add(self, draft_text: str | None = None) -> Task | None:
        """Append a task with the trimmed draft text.

        Blank input is ignored and returns None.
        """
        text = (self._draft_text if draft_text is None else draft_text).strip()
        if not text:
            logger.debug("Ignoring blank task text")
            return None

        task = Task(text=text)
        self._tasks = [*self._tasks, task]
        self._draft_text = ""
        logger.info("Task added at %d: %r", len(self._tasks) - 1, text)
        self._commit()
        return task

    def delete(self, index: int) -> bool:
        """Remove the task at index; later tasks shift down by one."""
        if not self._check_index(index, "delete"):
            return False

        removed = self._tasks[index]
        self._tasks = [task for i, task in enumerate(self._tasks) if i != index]

        # Keep a pending edit pointing at the same task
        target = self._edit_target
        if target is not None:
            if target.index == index:
                self._end_edit()
            elif target.index > index:
                self._edit_target = target.model_copy(update={"index": target.index - 1})

        logger.info("Task deleted at %d: %r", index, removed.text)
        self._commit()
        return True

    def toggle_complete(self, index: int) -> bool:
        """Flip completion of the task at index."""
        if not self._check_index(index, "toggle"):
            return False

        self._tasks = [
            task.toggled() if i == index else task for i, task in enumerate(self._tasks)
        ]
        logger.info("Task %d completed=%s", index, self._tasks[index].completed)
        self._commit()
        return True

    def begin_edit(self, index: int) -> bool:
        """Load the task at index into the draft for editing."""
        if not self._check_index(index, "edit"):
            return False

        text = self._tasks[index].text
        self._edit_target = EditTarget(original_text=text, index=index)
        self._draft_text = text
        logger.debug("Editing task %d", index)
        self._notify()
        return True

    def save_edit(self, draft_text: str | None = None) -> bool:
        """Replace the edited task's text with the draft, verbatim.

        Does nothing outside edit mode.
        """
        target = self._edit_target
        if target is None:
            logger.warning("save_edit called outside edit mode")
            return False

        text = self._draft_text if draft_text is None else draft_text
        self._end_edit()

        if not 0 <= target.index < len(self._tasks):
            logger.warning("Edited task %d no longer exists", target.index)
            self._notify()
            return False

        self._tasks = [
            task.with_text(text) if i == target.index else task
            for i, task in enumerate(self._tasks)
        ]
        logger.info("Task %d edited: %r -> %r", target.index, target.original_text, text)
        self._commit()
        return True

    def cancel_edit(self) -> None:
        """Leave edit mode and clear the draft without changing any task."""
        if self._edit_target is None:
            return
        self._end_edit()
        self._notify()

    def clear_all(self) -> None:
        """Remove every task."""
        self._tasks = []
        self._end_edit()
        logger.info("All tasks cleared")
        self._commit()

    def set_filter(self, value: TaskFilter | str) -> bool:
        """Select which tasks are visible. Does not touch storage.

        Unknown values are logged and leave the current filter in place.
        """
        try:
            filter_ = self._filter_service.parse(value)
        except (ValueError, AttributeError):
            logger.warning("Ignoring unknown filter %r", value)
            return False

        self._active_filter = filter_
        self._notify()
        return True

    # --- Internals ---

    def _check_index(self, index: int, action: str) -> bool:
        if 0 <= index < len(self._tasks):
            return True
        logger.warning(
            "Ignoring %s of task %d: index out of range (0..%d)",
            action,
            index,
            len(self._tasks) - 1,
        )
        return False

    def _end_edit(self) -> None:
        self._edit_target = None
        self._draft_text = ""

    def _load(self) -> list[Task]:
        data = self.storage.load(self.key)
        if data is None:
            logger.debug("No saved tasks under %r", self.key)
            return []
        try:
            tasks = load_tasks(data)
        except TaskDataError as e:
            logger.warning("Discarding unreadable saved tasks: %s", e)
            return []
        logger.info("Loaded %d task(s)", len(tasks))
        return tasks

    def _save(self) -> None:
        try:
            self.storage.save(self.key, dump_tasks(self._tasks))
        except StorageError as e:
            self._last_save_error = str(e)
            logger.warning("Tasks not saved: %s", e)
        else:
            self._last_save_error = None

    def _commit(self) -> None:
        self._save()
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                # State is already saved; keep notifying the others
                logger.exception("Listener %r failed", listener)
