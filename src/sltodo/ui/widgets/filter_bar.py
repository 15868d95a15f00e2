"""Filter selector bar."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Static

from ...models import TaskFilter


class FilterBar(Widget):
    """Shows the three filters, the active one highlighted, and task counts."""

    DEFAULT_CSS = """
    FilterBar {
        height: 1;
        margin: 0 1;
    }

    FilterBar .filter-option {
        width: auto;
        padding: 0 1;
        margin-right: 1;
        background: $panel;
    }

    FilterBar .filter-option.-active {
        background: $primary;
        color: $text;
        text-style: bold;
    }

    FilterBar .filter-counts {
        width: 1fr;
        text-align: right;
        color: $text-muted;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._active = TaskFilter.ALL
        self._total = 0
        self._completed = 0

    def compose(self) -> ComposeResult:
        with Horizontal():
            for number, filter_ in enumerate(TaskFilter, start=1):
                yield Static(
                    f"{number} {filter_.label}",
                    id=f"filter-{filter_.value}",
                    classes="filter-option",
                )
            yield Static("", id="filter-counts", classes="filter-counts")

    def update_state(self, active: TaskFilter, total: int, completed: int) -> None:
        """Highlight the active filter and show counts."""
        self._active = active
        self._total = total
        self._completed = completed
        self.call_after_refresh(self._render_state)

    def _render_state(self) -> None:
        for filter_ in TaskFilter:
            option = self.query_one(f"#filter-{filter_.value}", Static)
            option.set_class(filter_ is self._active, "-active")
        counts = self.query_one("#filter-counts", Static)
        counts.update(f"{self._completed}/{self._total} done")
