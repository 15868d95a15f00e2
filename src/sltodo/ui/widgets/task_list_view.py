"""Scrollable list of task rows."""

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import TaskFilter, VisibleTask
from .task_row import TaskRow


class TaskListScroll(VerticalScroll):
    """Scroll container for task rows.

    Raises SkipAction for navigation keys so they bubble up to the App
    for row navigation instead of being handled as scroll actions.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()


class EmptyListMessage(Static):
    """Displayed when no task matches the filter."""

    pass


class TaskListView(Widget):
    """The filtered task list."""

    EMPTY_MESSAGES = {
        TaskFilter.ALL: "No tasks yet. Press n to add one.",
        TaskFilter.COMPLETED: "No completed tasks",
        TaskFilter.INCOMPLETE: "Nothing left to do",
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._tasks: list[VisibleTask] = []
        self._filter = TaskFilter.ALL

    def compose(self) -> ComposeResult:
        yield TaskListScroll(id="task-rows")

    def on_mount(self) -> None:
        """Render rows set before the widget was mounted."""
        self.call_after_refresh(self._refresh_rows)

    def set_tasks(self, tasks: list[VisibleTask], filter_: TaskFilter = TaskFilter.ALL) -> None:
        """Set the visible tasks."""
        self._tasks = tasks
        self._filter = filter_
        # Use call_after_refresh to ensure DOM is ready
        self.call_after_refresh(self._refresh_rows)

    async def _refresh_rows(self) -> None:
        """Rebuild the row widgets."""
        try:
            content = self.query_one("#task-rows", TaskListScroll)
        except Exception as e:
            self.log.error(f"Cannot find task rows: {e}")
            return

        await content.remove_children()

        if not self._tasks:
            await content.mount(EmptyListMessage(self.EMPTY_MESSAGES[self._filter]))
            return

        await content.mount_all(
            TaskRow(visible, id=f"task-{visible.index}") for visible in self._tasks
        )

    @property
    def tasks(self) -> list[VisibleTask]:
        return self._tasks

    @property
    def task_count(self) -> int:
        return len(self._tasks)

    def position_of(self, index: int) -> int | None:
        """Row position of the task with the given list index."""
        for position, visible in enumerate(self._tasks):
            if visible.index == index:
                return position
        return None

    def focus_row(self, position: int) -> bool:
        """
        Focus the row at the given position.

        Returns:
            True if a row was focused, False otherwise
        """
        if not 0 <= position < len(self._tasks):
            return False

        visible = self._tasks[position]
        try:
            row = self.query_one(f"#task-{visible.index}", TaskRow)
        except Exception:
            return False
        row.focus()
        row.scroll_visible()
        return True

    def get_task(self, position: int) -> VisibleTask | None:
        """Get visible task at row position."""
        if 0 <= position < len(self._tasks):
            return self._tasks[position]
        return None
