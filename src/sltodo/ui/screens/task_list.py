"""Main to-do list screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static

from ...models import VisibleTask
from ..widgets.filter_bar import FilterBar
from ..widgets.task_list_view import TaskListView
from ..widgets.task_row import TaskRow

if TYPE_CHECKING:
    from ...services import TaskListController

ADD_PLACEHOLDER = "Add a new task"
EDIT_PLACEHOLDER = "Edit task"


class TaskListScreen(Screen):
    """Input field, filter bar and task list."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_row = 0
        # Whether the input, rather than the list, should hold focus
        self._input_active = False
        # Pending focus state for deferred focus after refresh
        self._pending_focus_index: int | None = None

    @property
    def controller(self) -> TaskListController:
        return self.app.controller  # pyrefly: ignore[missing-attribute]

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="input-row"):
            yield Static("Add", id="mode-indicator")
            yield Input(placeholder=ADD_PLACEHOLDER, id="task-input")
        yield FilterBar(id="filter-bar")
        yield TaskListView(id="task-list")
        yield Footer()

    def on_mount(self) -> None:
        """Render current state and follow controller changes."""
        self.controller.subscribe(self._on_state_changed)
        # Start in the input when there is nothing to select
        self._input_active = not self.controller.tasks
        self.refresh_list()

    def on_unmount(self) -> None:
        self.controller.unsubscribe(self._on_state_changed)

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        """Keep the selection in step with rows focused by mouse."""
        if isinstance(event.widget, TaskRow):
            position = self.query_one(TaskListView).position_of(event.widget.visible_task.index)
            if position is not None:
                self._current_row = position
            self._input_active = False

    def _on_state_changed(self, _controller: TaskListController) -> None:
        self.refresh_list()

    def refresh_list(self, focus_index: int | None = None) -> None:
        """
        Re-render from controller state.

        Args:
            focus_index: List index of a task to focus after refresh.
                         If None, keeps the current row position.
        """
        controller = self.controller
        visible = controller.visible_tasks()

        self.query_one(TaskListView).set_tasks(visible, controller.active_filter)
        total, completed = controller.counts()
        self.query_one(FilterBar).update_state(controller.active_filter, total, completed)
        self._sync_input()

        self._pending_focus_index = focus_index
        # Double-defer so the list has rebuilt its rows first
        self.call_after_refresh(self._schedule_pending_focus)

    def _sync_input(self) -> None:
        """Mirror draft text and edit mode into the input row."""
        controller = self.controller
        input_widget = self.query_one("#task-input", Input)
        if input_widget.value != controller.draft_text:
            input_widget.value = controller.draft_text
        editing = controller.edit_mode
        input_widget.placeholder = EDIT_PLACEHOLDER if editing else ADD_PLACEHOLDER
        indicator = self.query_one("#mode-indicator", Static)
        indicator.update("Save" if editing else "Add")
        indicator.set_class(editing, "-editing")

    def _schedule_pending_focus(self) -> None:
        self.call_after_refresh(self._apply_pending_focus)

    def _apply_pending_focus(self) -> None:
        list_view = self.query_one(TaskListView)
        if self._pending_focus_index is not None:
            position = list_view.position_of(self._pending_focus_index)
            self._pending_focus_index = None
            if position is not None:
                self._current_row = position

        # Clamp to the (possibly shorter) list
        self._current_row = max(0, min(self._current_row, list_view.task_count - 1))

        if self._input_active:
            self.focus_input()
        else:
            list_view.focus_row(self._current_row)

    # --- Input ---

    @property
    def input_has_focus(self) -> bool:
        return self.query_one("#task-input", Input).has_focus

    def focus_input(self) -> None:
        """Move focus to the input, cursor at the end."""
        self._input_active = True
        input_widget = self.query_one("#task-input", Input)
        input_widget.focus()
        input_widget.cursor_position = len(input_widget.value)

    def focus_list(self) -> None:
        """Move focus back to the current row."""
        self._input_active = False
        list_view = self.query_one(TaskListView)
        if not list_view.focus_row(self._current_row):
            self.set_focus(None)

    # --- Navigation ---

    def navigate_row(self, delta: int) -> None:
        """Move the selection up or down."""
        list_view = self.query_one(TaskListView)
        if list_view.task_count == 0:
            return
        self._current_row = max(0, min(self._current_row + delta, list_view.task_count - 1))
        list_view.focus_row(self._current_row)

    def navigate_to_row(self, position: int) -> None:
        """Select a specific row (-1 for last)."""
        list_view = self.query_one(TaskListView)
        if list_view.task_count == 0:
            return
        if position < 0:
            position = list_view.task_count - 1
        self._current_row = min(position, list_view.task_count - 1)
        list_view.focus_row(self._current_row)

    def get_current_task(self) -> VisibleTask | None:
        """Get the selected task, with its unfiltered list index."""
        return self.query_one(TaskListView).get_task(self._current_row)

    @property
    def current_row(self) -> int:
        return self._current_row
