"""Confirmation dialog for clearing the task list."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ClearAllModal(ModalScreen[bool]):
    """Asks before every task is removed. Dismisses with True to clear."""

    DEFAULT_CSS = """
    ClearAllModal {
        align: center middle;
    }

    ClearAllModal > Vertical {
        width: 46;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $error;
    }

    ClearAllModal Label {
        width: 100%;
        text-align: center;
        margin-bottom: 1;
    }

    ClearAllModal #clear-buttons {
        width: 100%;
        height: auto;
        align-horizontal: center;
    }

    ClearAllModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Clear"),
        Binding("n", "cancel", "Keep"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, task_count: int) -> None:
        super().__init__()
        self.task_count = task_count

    @property
    def message(self) -> str:
        noun = "task" if self.task_count == 1 else "tasks"
        return f"Delete all {self.task_count} {noun}?"

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.message)
            with Horizontal(id="clear-buttons"):
                yield Button("Clear all", id="clear", variant="error")
                yield Button("Keep", id="keep", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "clear")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
