"""Reusable screen components for the TUI application."""

from jsonl_viewer.tui.screens.open_file import OpenFileScreen
from jsonl_viewer.tui.screens.progress import (
    LoadingScreen,
    ProgressScreen,
)

__all__ = [
    "LoadingScreen",
    "OpenFileScreen",
    "ProgressScreen",
]
