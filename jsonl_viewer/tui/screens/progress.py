"""
Progress Screen components for background ingestion.

Provides a base ProgressScreen class and a LoadingScreen that tracks several
sources being ingested at the same time.
"""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Center, Middle
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Static


class ProgressScreen(Screen):
    """Base screen for displaying progress of background tasks.

    Usage:
        screen = ProgressScreen(title="Working...")
        screen.update_status("Processing item 5")
        screen.set_complete("Done!")
    """

    DEFAULT_CSS = """
    ProgressScreen {
        align: center middle;
    }

    ProgressScreen .progress-container {
        width: 70;
        height: auto;
        padding: 1 2;
        border: solid $primary;
        background: $surface;
    }

    ProgressScreen .progress-title {
        text-style: bold;
        text-align: center;
        color: $accent;
    }

    ProgressScreen .progress-status {
        margin-top: 1;
        text-align: center;
    }

    ProgressScreen .progress-detail {
        color: $text-muted;
        text-align: center;
    }
    """

    TITLE_DEFAULT: str = "Processing..."

    def __init__(
        self,
        title: str | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the progress screen.

        Args:
            title: Title text to display. Uses TITLE_DEFAULT if not provided.
            name: Optional screen name.
            id: Optional screen ID.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._title_text = title or self.TITLE_DEFAULT
        self._status_text = "Preparing..."
        self._detail_text = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Center():
            with Middle(classes="progress-container"):
                yield Static(Text(self._title_text), id="progress-title", classes="progress-title")
                yield Static(Text(self._status_text), id="progress-status", classes="progress-status")
                yield Static(Text(self._detail_text), id="progress-detail", classes="progress-detail")
        yield Footer()

    def _update_static(self, widget_id: str, text: str) -> None:
        # Plain Text so file names are never read as markup; the screen may be
        # updated from a worker before it is composed
        try:
            self.query_one(f"#{widget_id}", Static).update(Text(text))
        except NoMatches:
            pass

    def update_status(self, status: str) -> None:
        self._status_text = status
        self._update_static("progress-status", status)

    def update_detail(self, detail: str) -> None:
        self._detail_text = detail
        self._update_static("progress-detail", detail)

    def set_complete(self, message: str, detail: str = "") -> None:
        self._update_static("progress-title", "Complete")
        self.update_status(message)
        self.update_detail(detail)

    def set_error(self, message: str, detail: str = "") -> None:
        self._update_static("progress-title", "Error")
        self.update_status(message)
        self.update_detail(detail)


class LoadingScreen(ProgressScreen):
    """Screen displayed while one or more sources are ingested.

    Each source reports its own line count; the detail line lists them all.
    """

    TITLE_DEFAULT = "Loading..."

    def __init__(
        self,
        filenames: list[str] | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize loading screen.

        Args:
            filenames: Names of the sources being loaded (for display).
            name: Optional screen name.
            id: Optional screen ID.
            classes: Optional CSS classes.
        """
        filenames = filenames or []
        if len(filenames) == 1:
            title = f"Loading {filenames[0]}..."
        elif filenames:
            title = f"Loading {len(filenames)} files..."
        else:
            title = None
        super().__init__(title=title, name=name, id=id, classes=classes)
        self._counts: dict[str, str] = {filename: "waiting" for filename in filenames}

    def update_source_progress(self, filename: str, count: int, total: int | None = None) -> None:
        """Record the progress of one source and refresh the detail text.

        Args:
            filename: Source being ingested.
            count: Lines ingested so far.
            total: Estimated total lines (if known).
        """
        if total:
            percent = min(count / total, 1.0) * 100
            self._counts[filename] = f"{count:,} lines ({percent:.0f}%)"
        else:
            self._counts[filename] = f"{count:,} lines"
        self.update_status("Parsing lines...")
        self._refresh_counts()

    def mark_source_done(self, filename: str, failed: bool = False) -> None:
        self._counts[filename] = "failed" if failed else "done"
        self._refresh_counts()

    def _refresh_counts(self) -> None:
        self.update_detail(
            "\n".join(f"{name}: {state}" for name, state in self._counts.items())
        )
