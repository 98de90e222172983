"""
Main Textual application for the JSONL Viewer.

Opens one or more JSON Lines files (or directories of them) in tabs. Every
line is parsed on its own: valid lines can be browsed as pretty JSON, raw text
or a tree, and lines that fail to parse are kept and shown with their error.

Accepted extensions (a hint only; every file is read as JSON Lines):
    - .jsonl, .json, .log, .txt
"""

import argparse
import logging
import os
import sys

from textual.app import App
from textual.binding import Binding
from textual.logging import TextualHandler

from jsonl_viewer.core import (
    CallbackClipboard,
    ClipboardWriter,
    Document,
    DocumentStore,
    PyperclipClipboard,
)
from jsonl_viewer.sources import FileTextSource, detect_format, format_file_size
from jsonl_viewer.tui.data_loader import iter_sources
from jsonl_viewer.tui.mixins import BackgroundTaskMixin
from jsonl_viewer.tui.views.document_view import DocumentScreen

logger = logging.getLogger(__name__)

CLIPBOARD_CHOICES = ("system", "terminal")


def make_clipboard(mode: str, app: App) -> ClipboardWriter:
    """Build the clipboard writer for a ``--clipboard`` mode.

    ``system`` goes through pyperclip, ``terminal`` asks the terminal to set
    the clipboard with an OSC 52 escape sequence.
    """
    if mode == "system":
        return PyperclipClipboard()
    return CallbackClipboard(app.copy_to_clipboard)


class JsonlViewerApp(BackgroundTaskMixin, App):
    """A Textual app for browsing JSON Lines files."""

    TITLE = "JSONL Viewer"

    CSS = """
    Screen {
        background: $surface;
    }

    Tree {
        background: $surface;
    }

    Tree > .tree--cursor {
        background: $secondary;
    }

    Tree > .tree--guides {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        paths: list[str] | None = None,
        clipboard_mode: str = "terminal",
        async_threshold: int | None = None,
    ):
        """Initialize the app.

        Args:
            paths: Files or directories to open at startup.
            clipboard_mode: 'system' (pyperclip) or 'terminal' (OSC 52).
            async_threshold: File size in bytes above which the loading
                screen is shown. Uses LARGE_FILE_THRESHOLD if None.
        """
        super().__init__()
        self._initial_paths = list(paths or [])
        self.store = DocumentStore()
        self.clipboard_writer = make_clipboard(clipboard_mode, self)
        self.async_threshold = async_threshold
        self._document_screen: DocumentScreen | None = None

    def on_mount(self) -> None:
        self._document_screen = DocumentScreen()
        self.push_screen(self._document_screen)
        if self._initial_paths:
            self.open_paths(self._initial_paths)

    def open_paths(self, paths: list[str]) -> None:
        """Open files and directories, each file in its own tab.

        Paths that do not exist and directories without accepted files are
        reported and skipped; the remaining sources are still opened.
        """
        sources: list[FileTextSource] = []
        for path in paths:
            path = os.path.expanduser(path)
            if not os.path.exists(path):
                self.notify(f"Path not found: {path}", severity="error")
                continue
            found = list(iter_sources([path]))
            if not found:
                self.notify(f"No .jsonl/.json/.log/.txt files in {path}", severity="warning")
                continue
            sources.extend(found)

        if not sources:
            return

        for source in sources:
            size = source.size
            logger.info(
                "Opening %s (%s)",
                source.path,
                format_file_size(size) if size is not None else "unknown size",
            )

        show_progress = any(
            self.should_load_async(str(source.path), self.async_threshold)
            for source in sources
        )
        self._run_loading_task(
            sources,
            on_document=self._on_document_loaded,
            on_error=self._on_loading_error,
            show_progress=show_progress,
        )

    def _on_document_loaded(self, document: Document) -> None:
        """Called on the UI thread when a source is fully ingested."""
        logger.debug(
            "Loaded %s as %s", document.display_name, detect_format(document.display_name)
        )
        self.store.add_document(document)
        if document.invalid_count:
            self.notify(
                f"{document.display_name}: {document.invalid_count:,} of "
                f"{document.total_count:,} lines could not be parsed",
                severity="warning",
            )
        if self._document_screen is not None:
            self._document_screen.refresh_documents()

    def _on_loading_error(self, name: str, error: str) -> None:
        """Called when a source could not be read."""
        self.notify(f"Error loading {name}: {error}", severity="error")


def main() -> None:
    """Parse arguments and run the application."""
    parser = argparse.ArgumentParser(
        description="Browse JSON Lines files in a terminal UI. "
        "Each line is parsed on its own; invalid lines are kept and flagged."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to open (.jsonl, .json, .log, .txt)",
    )
    parser.add_argument(
        "--clipboard",
        choices=CLIPBOARD_CHOICES,
        default="terminal",
        help="Copy through the system clipboard (pyperclip) or the terminal "
        "(OSC 52, works over SSH). Default: terminal",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for the Textual devtools console (default: WARNING)",
    )
    parser.add_argument(
        "--async-threshold-mb",
        type=float,
        default=BackgroundTaskMixin.LARGE_FILE_THRESHOLD / (1024 * 1024),
        help="Show the loading screen for files larger than this many MB "
        "(default: %(default)s)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, handlers=[TextualHandler()])

    for path in args.paths:
        if os.path.exists(path) and not os.access(path, os.R_OK):
            print(f"Error: Permission denied: {path}", file=sys.stderr)
            sys.exit(1)

    app = JsonlViewerApp(
        paths=args.paths,
        clipboard_mode=args.clipboard,
        async_threshold=int(args.async_threshold_mb * 1024 * 1024),
    )
    app.run()


if __name__ == "__main__":
    main()
