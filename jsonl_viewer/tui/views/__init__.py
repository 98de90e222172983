"""TUI views for the JSONL viewer."""

from jsonl_viewer.tui.views.document_view import DocumentScreen

__all__ = ["DocumentScreen"]
