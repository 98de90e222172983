"""
Vim Navigation Mixin for vim-style keybindings.

Provides j/k/g/G navigation by delegating to the focused widget's native
navigation methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.binding import Binding
from textual.widgets import Tree

from jsonl_viewer.tui.widgets.record_list import RecordList

if TYPE_CHECKING:
    from textual.widget import Widget


class VimNavigationMixin:
    """Mixin providing vim-style navigation keybindings.

    This mixin adds vim keybindings that delegate to the focused widget:
    - j/k: Move cursor down/up (works with RecordList and Tree)
    - g: Jump to first item
    - G: Jump to last item

    Usage:
        class MyScreen(VimNavigationMixin, Screen):
            BINDINGS = VimNavigationMixin.VIM_BINDINGS + [...]
    """

    VIM_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
    ]

    def _get_navigable_widget(self) -> Widget | None:
        """Get the currently focused widget if it supports navigation."""
        focused = self.focused
        if isinstance(focused, (RecordList, Tree)):
            return focused
        return None

    def action_vim_down(self) -> None:
        widget = self._get_navigable_widget()
        if widget is not None:
            widget.action_cursor_down()

    def action_vim_up(self) -> None:
        widget = self._get_navigable_widget()
        if widget is not None:
            widget.action_cursor_up()

    def action_vim_top(self) -> None:
        """Jump to first item (vim g)."""
        widget = self._get_navigable_widget()
        if isinstance(widget, RecordList):
            widget.action_cursor_top()
        elif isinstance(widget, Tree):
            widget.select_node(widget.root)
            widget.scroll_home()

    def action_vim_bottom(self) -> None:
        """Jump to last item (vim G)."""
        widget = self._get_navigable_widget()
        if isinstance(widget, RecordList):
            widget.action_cursor_bottom()
        elif isinstance(widget, Tree):
            widget.scroll_end()
