"""Help screen showing keyboard shortcuts."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

SHORTCUTS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Tasks",
        [
            ("n / i", "Type a new task"),
            ("Enter", "Add task / save edit"),
            ("e", "Edit selected task"),
            ("Space", "Toggle completed"),
            ("d", "Delete selected task"),
            ("C", "Clear all tasks"),
            ("Escape", "Cancel edit / leave input"),
        ],
    ),
    (
        "Filter",
        [
            ("1", "All tasks"),
            ("2", "Completed tasks"),
            ("3", "Tasks to complete"),
            ("f", "Next filter"),
        ],
    ),
    (
        "Navigation",
        [
            ("k / Up", "Previous task"),
            ("j / Down", "Next task"),
            ("g / Home", "First task"),
            ("G / End", "Last task"),
        ],
    ),
    (
        "General",
        [
            ("?", "Show this help"),
            ("q", "Quit"),
        ],
    ),
]


class HelpScreen(ModalScreen):
    """Modal help screen showing keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Vertical {
        width: 56;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    HelpScreen .help-title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
    }

    HelpScreen .section-title {
        text-style: bold;
        color: $primary;
        padding-top: 1;
    }

    HelpScreen .help-row {
        height: 1;
    }

    HelpScreen .help-key {
        width: 12;
        text-style: bold;
    }

    HelpScreen .help-desc {
        width: 1fr;
        color: $text-muted;
    }

    HelpScreen .help-footer {
        text-align: center;
        color: $text-muted;
        padding-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Keyboard Shortcuts", classes="help-title")
            for title, rows in SHORTCUTS:
                yield Static(title, classes="section-title")
                for key, description in rows:
                    with Horizontal(classes="help-row"):
                        yield Static(key, classes="help-key")
                        yield Static(description, classes="help-desc")
            yield Static("Press any key to close", classes="help-footer")

    def on_key(self, event) -> None:
        """Dismiss on any key press and prevent propagation."""
        event.stop()
        self.dismiss()
