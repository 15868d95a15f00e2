"""Task row widget."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task, VisibleTask


class TaskRow(Widget, can_focus=True):
    """A single task line: checkbox and text."""

    def __init__(self, visible: VisibleTask, *args, **kwargs) -> None:
        if visible.task.completed:
            kwargs["classes"] = f"{kwargs.get('classes') or ''} -completed".strip()
        super().__init__(*args, **kwargs)
        self._visible = visible

    @property
    def visible_task(self) -> VisibleTask:
        return self._visible

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this row."""
        return self._visible.task

    def compose(self) -> ComposeResult:
        yield Static(self._format_checkbox(), classes="task-checkbox")
        yield Static(self._format_text(), classes="task-text")

    def _format_checkbox(self) -> str:
        return "[green]\\[x][/]" if self.task.completed else "\\[ ]"

    def _format_text(self) -> str:
        text = escape(self.task.text)
        if self.task.completed:
            return f"[strike dim]{text}[/]"
        return text
