"""
Record Detail panel - shows the selected line as pretty JSON, raw text or a tree.
"""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Static, TabbedContent, TabPane

from jsonl_viewer.core import (
    ClipboardWriter,
    LineRecord,
    TransientFlag,
    TreeModel,
    copy_with_feedback,
)
from jsonl_viewer.tui.data_loader import ViewMode, copy_text, pretty_text
from jsonl_viewer.tui.widgets.json_tree_panel import JsonTreePanel
from jsonl_viewer.tui.widgets.node_value_panel import NodeValuePanel
from jsonl_viewer.tui.widgets.syntax_view import JsonSyntaxView

EMPTY_MESSAGE = "Select a line to view its contents"
NOT_BROWSABLE_MESSAGE = "Tree view is only available for objects and arrays"
COPIED_MESSAGE = "Copied!"


class RecordDetail(Vertical):
    """Detail view of one record with Pretty, Raw and Tree tabs."""

    DEFAULT_CSS = """
    RecordDetail {
        width: 1fr;
        height: 1fr;
        border: solid $primary;
    }

    RecordDetail:focus-within {
        border: solid $accent;
    }

    RecordDetail .detail-header {
        height: 1;
        background: $surface-darken-1;
    }

    RecordDetail #detail-title {
        width: 1fr;
        padding: 0 1;
        text-style: bold;
    }

    RecordDetail #copied {
        width: auto;
        padding: 0 1;
        color: $success;
        text-style: bold;
        display: none;
    }

    RecordDetail #parse-error {
        height: auto;
        padding: 0 1;
        color: $error;
        display: none;
    }

    RecordDetail TabbedContent {
        height: 1fr;
    }

    RecordDetail ContentSwitcher {
        height: 1fr;
    }

    RecordDetail TabPane {
        padding: 0;
        height: 1fr;
    }

    RecordDetail #tree-message {
        padding: 1 2;
        color: $text-muted;
        text-style: italic;
        display: none;
    }

    RecordDetail #tree-panel {
        height: 2fr;
    }
    """

    def __init__(
        self,
        clipboard: ClipboardWriter,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.clipboard = clipboard
        self.record: LineRecord | None = None
        self.tree_model: TreeModel | None = None
        self.copied = TransientFlag(self.set_timer, on_change=self._show_copied)

    def compose(self) -> ComposeResult:
        with Horizontal(classes="detail-header"):
            yield Static(Text(EMPTY_MESSAGE), id="detail-title")
            yield Static(COPIED_MESSAGE, id="copied")
        yield Static("", id="parse-error")
        with TabbedContent(initial=ViewMode.PRETTY.value):
            with TabPane("Pretty", id=ViewMode.PRETTY.value):
                with VerticalScroll():
                    yield JsonSyntaxView("", id="pretty-view")
            with TabPane("Raw", id=ViewMode.RAW.value):
                with VerticalScroll():
                    yield Static("", id="raw-view")
            with TabPane("Tree", id=ViewMode.TREE.value):
                yield Static(Text(NOT_BROWSABLE_MESSAGE), id="tree-message")
                yield JsonTreePanel(id="tree-panel")
                yield NodeValuePanel(id="node-value-panel")

    @property
    def mode(self) -> ViewMode:
        active = self.query_one(TabbedContent).active
        try:
            return ViewMode(active)
        except ValueError:
            return ViewMode.PRETTY

    def show_record(self, record: LineRecord | None) -> None:
        """Display a record, or the empty state when None.

        A different record gets a fresh tree model, which discards the
        previous expansion state and inspected node.
        """
        if record is self.record and record is not None:
            return
        self.record = record
        self.copied.reset()

        title = self.query_one("#detail-title", Static)
        error = self.query_one("#parse-error", Static)
        pretty = self.query_one("#pretty-view", JsonSyntaxView)
        raw = self.query_one("#raw-view", Static)

        if record is None:
            title.update(Text(EMPTY_MESSAGE))
            error.display = False
            pretty.update("")
            raw.update("")
            self._show_tree(None)
            return

        title.update(Text(f"Line {record.id}"))
        raw.update(Text(record.raw_text))
        if record.is_valid:
            error.display = False
            pretty.show_json(pretty_text(record))
            self._show_tree(TreeModel(record.parsed_value))
        else:
            error.update(Text(f"Parse error: {record.parse_error}"))
            error.display = True
            pretty.update(Text(record.raw_text))
            self._show_tree(None)

    def _show_tree(self, model: TreeModel | None) -> None:
        self.tree_model = model
        panel = self.query_one("#tree-panel", JsonTreePanel)
        message = self.query_one("#tree-message", Static)
        self.query_one("#node-value-panel", NodeValuePanel).clear()

        if model is None or not model.is_browsable:
            panel.clear_model()
            panel.display = False
            message.display = model is not None
            return

        message.display = False
        panel.display = True
        panel.load_model(model)

    def on_json_tree_panel_node_inspected(self, event: JsonTreePanel.NodeInspected) -> None:
        self.query_one("#node-value-panel", NodeValuePanel).show_node(event.path, event.display)

    def _copy_source(self) -> str | None:
        """Text the copy action places on the clipboard for the current mode."""
        if self.record is None:
            return None
        mode = self.mode
        if mode is ViewMode.TREE and self.tree_model is not None:
            if self.tree_model.selected_path is not None:
                return self.tree_model.selected_display
        return copy_text(self.record, mode)

    def copy_current(self) -> bool:
        """Copy the text for the current mode and flash the confirmation."""
        text = self._copy_source()
        if text is None:
            return False
        if not copy_with_feedback(self.clipboard, self.copied, text):
            self.notify("Could not copy to the clipboard", severity="warning")
            return False
        return True

    def show_mode(self, mode: ViewMode) -> None:
        self.query_one(TabbedContent).active = mode.value

    def _show_copied(self, active: bool) -> None:
        self.query_one("#copied", Static).display = active
