"""Panel showing the path and full value of the node inspected in the tree."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Static


class NodeValuePanel(Vertical):
    """Path header above a scrollable display string."""

    DEFAULT_CSS = """
    NodeValuePanel {
        height: 1fr;
        border-top: solid $primary;
    }

    NodeValuePanel .node-path {
        height: auto;
        padding: 0 1;
        background: $surface-darken-1;
        color: $secondary;
        text-style: bold;
    }

    NodeValuePanel .node-value-container {
        height: 1fr;
        padding: 0 1;
    }
    """

    PLACEHOLDER = "Move the cursor to a node to inspect it"

    def compose(self) -> ComposeResult:
        yield Static(Text(self.PLACEHOLDER), id="node-path", classes="node-path")
        with VerticalScroll(classes="node-value-container"):
            yield Static("", id="node-value")

    def show_node(self, path: str, display: str) -> None:
        self.query_one("#node-path", Static).update(Text(path))
        self.query_one("#node-value", Static).update(Text(display))

    def clear(self) -> None:
        self.query_one("#node-path", Static).update(Text(self.PLACEHOLDER))
        self.query_one("#node-value", Static).update("")
