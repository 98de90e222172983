"""Mixins for TUI screens and the application."""

from jsonl_viewer.tui.mixins.background_task import BackgroundTaskMixin
from jsonl_viewer.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "BackgroundTaskMixin",
    "VimNavigationMixin",
]
