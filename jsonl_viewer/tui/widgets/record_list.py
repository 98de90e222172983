"""
Windowed list of line records.

Only the rows inside the viewport are rendered: the widget tells the core
Viewport its geometry and renders the index range it gets back. The range is
requested again whenever the record count, row height or viewport height
changes.
"""

from __future__ import annotations

from typing import Sequence

from rich.segment import Segment
from rich.style import Style
from textual import events
from textual.binding import Binding
from textual.geometry import Size
from textual.message import Message
from textual.scroll_view import ScrollView
from textual.strip import Strip

from jsonl_viewer.core import DEFAULT_OVERSCAN, LineRecord, Viewport
from jsonl_viewer.tui.data_loader import LIST_PREVIEW_LENGTH, get_line_summary

ID_COLUMN_WIDTH = 7

ID_STYLE = Style(color="bright_black")
ERROR_STYLE = Style(color="red")
CURSOR_STYLE = Style(bgcolor="grey23", bold=True)
SELECTED_STYLE = Style(bgcolor="dark_blue")


class RecordList(ScrollView, can_focus=True):
    """Scrollable list showing one row per record: id and raw text."""

    DEFAULT_CSS = """
    RecordList {
        height: 1fr;
        overflow-x: auto;
        overflow-y: scroll;
        border: solid $primary;
    }

    RecordList:focus {
        border: solid $accent;
    }
    """

    BINDINGS = [
        Binding("up", "cursor_up", "Up", show=False),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("pageup", "page_up", "Page Up", show=False),
        Binding("pagedown", "page_down", "Page Down", show=False),
        Binding("home", "cursor_top", "Top", show=False),
        Binding("end", "cursor_bottom", "Bottom", show=False),
        Binding("enter", "select_cursor", "Select", show=False),
    ]

    # Fixed height of every row, in terminal lines
    ITEM_EXTENT = 1
    OVERSCAN = DEFAULT_OVERSCAN

    class RecordSelected(Message):
        """Posted when a record is chosen with Enter or a click."""

        def __init__(self, record: LineRecord) -> None:
            self.record = record
            super().__init__()

    def __init__(
        self,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._records: Sequence[LineRecord] = ()
        self._selected_id: int | None = None
        self._cursor: int = 0
        self._strip_cache: dict[int, Strip] = {}
        self._cache_width: int = 0

    # -- Geometry ------------------------------------------------------------

    @property
    def viewport(self) -> Viewport:
        return Viewport(
            item_count=len(self._records),
            item_extent=self.ITEM_EXTENT,
            viewport_extent=max(0, self.scrollable_content_region.height),
        )

    @property
    def visible_range(self) -> range:
        return self.viewport.visible_range(int(self.scroll_offset.y), self.OVERSCAN)

    def _update_virtual_size(self) -> None:
        width = ID_COLUMN_WIDTH + LIST_PREVIEW_LENGTH + 3
        self.virtual_size = Size(width, self.viewport.content_extent)

    def on_resize(self, event: events.Resize) -> None:
        self._invalidate()

    # -- Data ----------------------------------------------------------------

    @property
    def records(self) -> Sequence[LineRecord]:
        return self._records

    @property
    def cursor_index(self) -> int:
        return self._cursor

    @property
    def cursor_record(self) -> LineRecord | None:
        if 0 <= self._cursor < len(self._records):
            return self._records[self._cursor]
        return None

    def set_records(
        self, records: Sequence[LineRecord], selected_id: int | None = None
    ) -> None:
        """Replace the displayed records, keeping the cursor on the selection."""
        self._records = records
        self._selected_id = selected_id
        self._cursor = 0
        if selected_id is not None:
            for index, record in enumerate(records):
                if record.id == selected_id:
                    self._cursor = index
                    break
        self._update_virtual_size()
        self._invalidate()
        self._reveal_cursor()

    def set_selected_id(self, selected_id: int | None) -> None:
        self._selected_id = selected_id
        self._invalidate()

    def _invalidate(self) -> None:
        self._strip_cache.clear()
        self.refresh()

    # -- Rendering -----------------------------------------------------------

    def _render_row(self, index: int, width: int) -> Strip:
        record = self._records[index]
        summary = get_line_summary(record)
        text_style = Style() if summary["valid"] else ERROR_STYLE
        segments = [
            Segment(f"{summary['id']:>{ID_COLUMN_WIDTH - 1}} ", ID_STYLE),
            Segment(summary["preview"], text_style),
        ]
        strip = Strip(segments)
        if record.id == self._selected_id:
            strip = strip.apply_style(SELECTED_STYLE)
        if index == self._cursor and self.has_focus:
            strip = strip.apply_style(CURSOR_STYLE)
        return strip.extend_cell_length(width)

    def _prime(self, width: int) -> None:
        """Render the strips of the current visible range into the cache.

        Rows that scrolled out of the range are dropped, so the cache never
        holds more than the viewport plus overscan.
        """
        if width != self._cache_width:
            self._strip_cache.clear()
            self._cache_width = width
        previous = self._strip_cache
        self._strip_cache = {}
        for index in self.visible_range:
            strip = previous.get(index)
            if strip is None:
                strip = self._render_row(index, width)
            self._strip_cache[index] = strip

    def render_line(self, y: int) -> Strip:
        """Line API: render a single line at viewport row y."""
        scroll_x, scroll_y = self.scroll_offset
        width = self.scrollable_content_region.width
        index = self.viewport.index_at(int(scroll_y), y)
        if index is None:
            return Strip.blank(width, self.rich_style)

        if index not in self._strip_cache:
            self._prime(self.virtual_size.width)
        strip = self._strip_cache.get(index)
        if strip is None:
            strip = self._render_row(index, self.virtual_size.width)
        return strip.crop_extend(scroll_x, scroll_x + width, self.rich_style).apply_style(
            self.rich_style
        )

    # -- Cursor --------------------------------------------------------------

    def _move_cursor(self, index: int) -> None:
        if not self._records:
            return
        self._cursor = max(0, min(index, len(self._records) - 1))
        self._invalidate()
        self._reveal_cursor()

    def _reveal_cursor(self) -> None:
        target = self.viewport.scroll_to_reveal(self._cursor, int(self.scroll_offset.y))
        if target != int(self.scroll_offset.y):
            self.scroll_to(y=target, animate=False)

    def _page_size(self) -> int:
        return max(1, self.viewport.viewport_extent // self.ITEM_EXTENT)

    def action_cursor_up(self) -> None:
        self._move_cursor(self._cursor - 1)

    def action_cursor_down(self) -> None:
        self._move_cursor(self._cursor + 1)

    def action_page_up(self) -> None:
        self._move_cursor(self._cursor - self._page_size())

    def action_page_down(self) -> None:
        self._move_cursor(self._cursor + self._page_size())

    def action_cursor_top(self) -> None:
        self._move_cursor(0)

    def action_cursor_bottom(self) -> None:
        self._move_cursor(len(self._records) - 1)

    def action_select_cursor(self) -> None:
        record = self.cursor_record
        if record is not None:
            self.post_message(self.RecordSelected(record))

    def on_click(self, event: events.Click) -> None:
        offset = event.get_content_offset(self)
        if offset is None:
            return
        index = self.viewport.index_at(int(self.scroll_offset.y), offset.y)
        if index is None:
            return
        self._move_cursor(index)
        self.action_select_cursor()

    def on_focus(self, event: events.Focus) -> None:
        self._invalidate()

    def on_blur(self, event: events.Blur) -> None:
        self._invalidate()
