"""Modal screen asking for a file or directory to open in a new tab."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label


class OpenFileScreen(ModalScreen[str | None]):
    """A modal prompt returning the entered path, or None when cancelled."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    DEFAULT_CSS = """
    OpenFileScreen {
        align: center middle;
    }

    OpenFileScreen > Vertical {
        width: 70%;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    OpenFileScreen .modal-header {
        width: 100%;
        padding: 0 1;
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    OpenFileScreen Input {
        margin-top: 1;
    }

    OpenFileScreen .close-hint {
        width: 100%;
        margin-top: 1;
        text-align: center;
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("Open File", classes="modal-header")
            yield Input(placeholder="Path to a .jsonl/.json/.log/.txt file or a directory", id="path-input")
            yield Label("Press [ENTER] to open, [ESC] to cancel", classes="close-hint", markup=False)

    def on_mount(self) -> None:
        self.query_one("#path-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        path = event.value.strip()
        self.dismiss(path or None)

    def action_cancel(self) -> None:
        self.dismiss(None)
