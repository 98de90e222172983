"""
Document Screen - tabs of open documents, the record list and the detail panel.

The screen holds no document state of its own: the filter, sort direction and
selection live on each Document of the application's DocumentStore, so they
survive switching between tabs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static, Tab, Tabs

from jsonl_viewer.core import Document, DocumentStore
from jsonl_viewer.tui.data_loader import ViewMode, release_records
from jsonl_viewer.tui.mixins import VimNavigationMixin
from jsonl_viewer.tui.screens.open_file import OpenFileScreen
from jsonl_viewer.tui.widgets.record_detail import RecordDetail
from jsonl_viewer.tui.widgets.record_list import RecordList

if TYPE_CHECKING:
    from jsonl_viewer.tui.app import JsonlViewerApp

EMPTY_STATE_MESSAGE = "No files open. Press [o] to open a file."


def tab_label(document: Document) -> Text:
    return Text(f"{document.display_name} ({document.total_count:,})")


class DocumentScreen(VimNavigationMixin, Screen):
    """Main screen: one tab per open document."""

    CSS = """
    DocumentScreen {
        layout: vertical;
    }

    #main {
        height: 1fr;
    }

    #left-panel {
        width: 2fr;
        height: 1fr;
    }

    #record-detail {
        width: 3fr;
    }

    .toolbar {
        height: 3;
    }

    #filter-input {
        width: 1fr;
    }

    #counter, #sort-indicator {
        width: auto;
        padding: 1 1;
        color: $text-muted;
    }

    #empty-state {
        height: 1fr;
        content-align: center middle;
        color: $text-muted;
        text-style: italic;
    }

    Header {
        dock: top;
    }

    Footer {
        dock: bottom;
    }
    """

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("o", "open_file", "Open"),
        Binding("w", "close_tab", "Close Tab"),
        Binding("x", "close_tab", "Close Tab", show=False),
        Binding("s", "toggle_sort", "Sort"),
        Binding("slash", "focus_filter", "Filter"),
        Binding("c", "copy", "Copy"),
        Binding("p", "view_mode('pretty')", "Pretty", show=False),
        Binding("r", "view_mode('raw')", "Raw", show=False),
        Binding("t", "view_mode('tree')", "Tree", show=False),
        Binding("left_square_bracket", "previous_tab", "Prev Tab", show=False),
        Binding("right_square_bracket", "next_tab", "Next Tab", show=False),
        Binding("escape", "focus_list", "List", show=False),
    ]

    if TYPE_CHECKING:
        app: JsonlViewerApp

    @property
    def store(self) -> DocumentStore:
        return self.app.store

    def compose(self) -> ComposeResult:
        yield Header()
        yield Tabs(id="document-tabs")
        with Horizontal(id="main"):
            with Vertical(id="left-panel"):
                with Horizontal(classes="toolbar"):
                    yield Input(placeholder="Filter lines...", id="filter-input")
                    yield Static("0/0", id="counter")
                    yield Static("", id="sort-indicator")
                yield RecordList(id="record-list")
                yield Static(Text(EMPTY_STATE_MESSAGE), id="empty-state")
            yield RecordDetail(self.app.clipboard_writer, id="record-detail")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "JSONL Viewer"
        self.refresh_documents()

    # -- Tabs ----------------------------------------------------------------

    def refresh_documents(self) -> None:
        """Bring the tab bar in line with the store and show the active document."""
        self.run_worker(self._sync_tabs(), exclusive=True, group="tabs")

    async def _sync_tabs(self) -> None:
        tabs = self.query_one("#document-tabs", Tabs)
        target = self.store.active_id
        open_ids = {document.id for document in self.store}

        for tab in list(tabs.query(Tab)):
            if tab.id not in open_ids:
                await tabs.remove_tab(tab)

        present = {tab.id for tab in tabs.query(Tab)}
        for document in self.store:
            if document.id not in present:
                await tabs.add_tab(Tab(tab_label(document), id=document.id))

        if target is not None and target in self.store:
            self.store.activate(target)
            tabs.active = target
        self._show_active_document()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        event.stop()
        tab_id = event.tab.id if event.tab is not None else None
        if tab_id is None or tab_id not in self.store:
            return
        if self.store.active_id != tab_id:
            self.store.activate(tab_id)
        self._show_active_document()

    def on_tabs_cleared(self, event: Tabs.Cleared) -> None:
        event.stop()
        self._show_active_document()

    def action_previous_tab(self) -> None:
        self.query_one("#document-tabs", Tabs).action_previous_tab()

    def action_next_tab(self) -> None:
        self.query_one("#document-tabs", Tabs).action_next_tab()

    def action_close_tab(self) -> None:
        active = self.store.active
        if active is None:
            return
        self.store.close(active.id)
        if not any(doc.lines is active.lines for doc in self.store):
            release_records(active.lines)
        self.refresh_documents()

    def action_open_file(self) -> None:
        self.app.push_screen(OpenFileScreen(), callback=self._on_open_path)

    def _on_open_path(self, path: str | None) -> None:
        if path:
            self.app.open_paths([path])

    # -- Active document -----------------------------------------------------

    def _show_active_document(self) -> None:
        document = self.store.active
        record_list = self.query_one("#record-list", RecordList)
        filter_input = self.query_one("#filter-input", Input)
        empty_state = self.query_one("#empty-state", Static)

        has_document = document is not None
        record_list.display = has_document
        filter_input.disabled = not has_document
        empty_state.display = not has_document

        if document is None:
            record_list.set_records([])
            filter_input.value = ""
            self.sub_title = ""
            self._update_toolbar(None)
            self.query_one("#record-detail", RecordDetail).show_record(None)
            return

        self.sub_title = document.display_name
        if filter_input.value != document.filter_text:
            filter_input.value = document.filter_text
        self._refresh_records(document)

    def _refresh_records(self, document: Document) -> None:
        """Redisplay the list and detail after the view of a document changed."""
        record_list = self.query_one("#record-list", RecordList)
        record_list.set_records(document.displayed_lines, document.selected_id)
        self._update_toolbar(document)
        self.query_one("#record-detail", RecordDetail).show_record(
            document.visible_selection
        )

    def _update_toolbar(self, document: Document | None) -> None:
        counter = self.query_one("#counter", Static)
        sort_indicator = self.query_one("#sort-indicator", Static)
        if document is None:
            counter.update("0/0")
            sort_indicator.update("")
            return
        counter.update(f"{document.displayed_count:,}/{document.total_count:,}")
        sort_indicator.update(f"Sort {document.sort_direction.arrow}")

    # -- Events --------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "filter-input":
            return
        document = self.store.active
        if document is None or document.filter_text == event.value:
            return
        document.set_filter(event.value)
        self._refresh_records(document)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "filter-input":
            self.action_focus_list()

    def on_record_list_record_selected(self, event: RecordList.RecordSelected) -> None:
        document = self.store.active
        if document is None:
            return
        document.select(event.record.id)
        self.query_one("#record-list", RecordList).set_selected_id(document.selected_id)
        self.query_one("#record-detail", RecordDetail).show_record(
            document.visible_selection
        )

    # -- Actions -------------------------------------------------------------

    def action_toggle_sort(self) -> None:
        document = self.store.active
        if document is None:
            return
        document.toggle_sort()
        self._refresh_records(document)

    def action_focus_filter(self) -> None:
        self.query_one("#filter-input", Input).focus()

    def action_focus_list(self) -> None:
        self.query_one("#record-list", RecordList).focus()

    def action_copy(self) -> None:
        self.query_one("#record-detail", RecordDetail).copy_current()

    def action_view_mode(self, mode: str) -> None:
        self.query_one("#record-detail", RecordDetail).show_mode(ViewMode(mode))
