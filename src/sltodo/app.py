"""sltodo TUI Application."""

import logging

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Input

from .config import Settings
from .models import TaskFilter
from .repositories import FilesystemStorage, MemoryStorage, StorageProtocol
from .services import ConfigService, FilterService, TaskListController
from .ui.screens import HelpScreen, TaskListScreen
from .ui.widgets import ClearAllModal

logger = logging.getLogger(__name__)


class SltodoApp(App):
    """sltodo - Terminal to-do list."""

    TITLE = "sltodo"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        # Navigation - vim style
        Binding("j", "nav_down", "↓ Task", show=False),
        Binding("k", "nav_up", "↑ Task", show=False),
        Binding("down", "nav_down", "↓ Task", show=False),
        Binding("up", "nav_up", "↑ Task", show=False),
        Binding("g", "nav_first", "First", show=False),
        Binding("G", "nav_last", "Last", show=False),
        Binding("home", "nav_first", "First", show=False),
        Binding("end", "nav_last", "Last", show=False),
        # Task actions
        Binding("n", "new_task", "New", show=True),
        Binding("i", "new_task", "New", show=False),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("space", "toggle_task", "Done", show=True),
        Binding("d", "delete_task", "Delete", show=True),
        Binding("C", "clear_all", "Clear All", show=True),
        # Filters
        Binding("1", "set_filter('all')", "All", show=False),
        Binding("2", "set_filter('completed')", "Completed", show=False),
        Binding("3", "set_filter('incomplete')", "To Complete", show=False),
        Binding("f", "cycle_filter", "Filter", show=True),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    SCREENS = {
        "tasks": TaskListScreen,
    }

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Initialize storage and the task list controller."""
        self.config_service = ConfigService(self.settings.project_root)
        config = self.config_service.get_config()

        if self.settings.ephemeral:
            self.storage: StorageProtocol = MemoryStorage()
            logger.info("Ephemeral mode: tasks will not be saved")
        else:
            self.storage: StorageProtocol = FilesystemStorage(self.config_service.data_root)
            logger.info("Task store: %s", self.config_service.data_root)

        self.filter_service = FilterService()
        self.controller = TaskListController(
            self.storage,
            key=config.storage_key,
            active_filter=config.default_filter,
            filter_service=self.filter_service,
        )

    def on_mount(self) -> None:
        """Called when app is mounted."""
        if self.config_service.has_config_error:
            self.notify(
                f"{self.config_service.config_error}. Using defaults.",
                severity="warning",
                timeout=6,
            )
        self.push_screen("tasks")

    def action_help(self) -> None:
        """Show help screen."""
        self.push_screen(HelpScreen())

    # Navigation actions
    def action_nav_up(self) -> None:
        """Select previous task."""
        screen = self.screen
        if isinstance(screen, TaskListScreen):
            screen.navigate_row(-1)

    def action_nav_down(self) -> None:
        """Select next task."""
        screen = self.screen
        if isinstance(screen, TaskListScreen):
            screen.navigate_row(1)

    def action_nav_first(self) -> None:
        screen = self.screen
        if isinstance(screen, TaskListScreen):
            screen.navigate_to_row(0)

    def action_nav_last(self) -> None:
        screen = self.screen
        if isinstance(screen, TaskListScreen):
            screen.navigate_to_row(-1)

    # Task actions
    def action_new_task(self) -> None:
        """Focus the input for a new task, abandoning any edit."""
        screen = self.screen
        if not isinstance(screen, TaskListScreen):
            return

        self.controller.cancel_edit()
        screen.focus_input()

    def action_edit_task(self) -> None:
        """Load the selected task into the input."""
        screen = self.screen
        if not isinstance(screen, TaskListScreen):
            return

        visible = screen.get_current_task()
        if visible is None:
            return

        if self.controller.begin_edit(visible.index):
            screen.focus_input()

    def action_toggle_task(self) -> None:
        """Toggle completion of the selected task."""
        screen = self.screen
        if not isinstance(screen, TaskListScreen):
            return

        visible = screen.get_current_task()
        if visible is None:
            return

        self.controller.toggle_complete(visible.index)
        self._report_save_error()

    def action_delete_task(self) -> None:
        """Delete the selected task."""
        screen = self.screen
        if not isinstance(screen, TaskListScreen):
            return

        visible = screen.get_current_task()
        if visible is None:
            return

        if self.controller.delete(visible.index):
            if not self._report_save_error():
                self.notify("Task deleted", timeout=2)

    def action_clear_all(self) -> None:
        """Remove all tasks, asking first when configured to and there is something to lose."""
        if self.controller.tasks and self.config_service.get_config().confirm_clear:
            self.push_screen(  # pyrefly: ignore[no-matching-overload]
                ClearAllModal(len(self.controller.tasks)),
                callback=self._handle_clear_confirm,
            )
        else:
            self._clear_all()

    def _handle_clear_confirm(self, confirmed: bool) -> None:
        """Handle clear-all confirmation result."""
        if confirmed:
            self._clear_all()

    def _clear_all(self) -> None:
        self.controller.clear_all()
        if not self._report_save_error():
            self.notify("All tasks cleared", timeout=2)

    # Filter actions
    def action_set_filter(self, value: str) -> None:
        """Show all, completed or incomplete tasks."""
        self.controller.set_filter(value)

    def action_cycle_filter(self) -> None:
        """Switch to the next filter."""
        self.controller.set_filter(self.controller.active_filter.next())
        self.notify(f"Showing: {self.controller.active_filter.label}", timeout=1)

    def action_escape(self) -> None:
        """Handle escape: dismiss modal, or cancel edit and leave the input."""
        screen = self.screen

        if isinstance(screen, ModalScreen):
            screen.dismiss()
            return

        if not isinstance(screen, TaskListScreen):
            return

        if self.controller.edit_mode:
            self.controller.cancel_edit()
        elif self.controller.active_filter is not TaskFilter.ALL and not screen.input_has_focus:
            self.controller.set_filter(TaskFilter.ALL)
            return
        screen.focus_list()

    # Input events
    def on_input_changed(self, event: Input.Changed) -> None:
        """Track the draft text."""
        if event.input.id == "task-input":
            self.controller.set_draft(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Add a new task, or save the task being edited."""
        if event.input.id != "task-input":
            return

        was_editing = self.controller.edit_mode
        edited_index = self.controller.edit_target.index if was_editing else None
        self.controller.submit(event.value)
        self._report_save_error()

        screen = self.screen
        if not isinstance(screen, TaskListScreen):
            return
        if was_editing:
            screen.refresh_list(focus_index=edited_index)
            screen.focus_list()
        else:
            screen.focus_input()

    def _report_save_error(self) -> bool:
        """Warn when the last change could not be saved."""
        error = self.controller.last_save_error
        if error is None:
            return False
        self.notify(
            f"Changes kept in memory only: {error}",
            severity="warning",
            timeout=5,
        )
        return True


def run(settings: Settings | None = None) -> None:
    """Run the sltodo application."""
    app = SltodoApp(settings)
    app.run()
