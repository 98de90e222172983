"""
Background Task Mixin for ingesting sources with progress feedback.

Provides a reusable pattern for:
- Pushing a loading screen
- Ingesting every source in its own background thread
- Updating progress from the background threads
- Handing each document to the UI only once it is complete
- Dismissing the loading screen when the last source finishes
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Sequence

from textual import work

from jsonl_viewer.core import Document
from jsonl_viewer.sources import TextSource
from jsonl_viewer.tui.data_loader import load_document
from jsonl_viewer.tui.screens.progress import LoadingScreen

logger = logging.getLogger(__name__)


class _LoadBatch:
    """Bookkeeping for one group of sources started together.

    Only touched from the UI thread.
    """

    def __init__(self, screen: LoadingScreen | None, count: int) -> None:
        self.screen = screen
        self.pending = count
        self.loaded = 0
        self.failed = 0


class BackgroundTaskMixin:
    """Mixin providing concurrent source ingestion with progress UI.

    Each source gets its own thread worker, so a slow or failing file never
    holds up the others. Documents are delivered in completion order.

    Usage:
        class MyApp(BackgroundTaskMixin, App):
            def open_sources(self, sources):
                self._run_loading_task(
                    sources,
                    on_document=self._add_document,
                    on_error=self._report_error,
                )
    """

    # Configurable delays
    TASK_COMPLETION_DELAY: float = 1.0
    TASK_ERROR_DELAY: float = 2.0

    # Default size threshold for showing the loading screen (10 MB)
    LARGE_FILE_THRESHOLD: int = 10 * 1024 * 1024

    def _run_loading_task(
        self,
        sources: Sequence[TextSource],
        on_document: Callable[[Document], None],
        on_error: Callable[[str, str], None] | None = None,
        *,
        show_progress: bool = True,
    ) -> None:
        """Ingest sources in background threads.

        Args:
            sources: Sources to read and ingest.
            on_document: Called on the UI thread with each finished document.
            on_error: Called on the UI thread with (source name, message)
                when a source cannot be read.
            show_progress: Whether to push a loading screen while working.
        """
        if not sources:
            return

        screen = None
        if show_progress:
            screen = LoadingScreen([source.name for source in sources])
            self.app.push_screen(screen)

        batch = _LoadBatch(screen, len(sources))
        for source in sources:
            self._run_loading_worker(source, batch, on_document, on_error)

    @work(thread=True)
    def _run_loading_worker(
        self,
        source: TextSource,
        batch: _LoadBatch,
        on_document: Callable[[Document], None],
        on_error: Callable[[str, str], None] | None,
    ) -> None:
        """Background worker ingesting a single source."""
        screen = batch.screen

        def report(count: int, total: int | None) -> None:
            if screen is not None:
                self.app.call_from_thread(
                    screen.update_source_progress, source.name, count, total
                )

        try:
            document = load_document(source, progress_callback=report)
        except OSError as e:
            logger.warning("Failed to read %s: %s", source.name, e)
            self.app.call_from_thread(
                self._finish_source, batch, source.name, None, str(e), on_document, on_error
            )
            return

        self.app.call_from_thread(
            self._finish_source, batch, source.name, document, None, on_document, on_error
        )

    def _finish_source(
        self,
        batch: _LoadBatch,
        name: str,
        document: Document | None,
        error: str | None,
        on_document: Callable[[Document], None],
        on_error: Callable[[str, str], None] | None,
    ) -> None:
        """Deliver one finished source and close the batch when it is the last."""
        batch.pending -= 1
        if document is not None:
            batch.loaded += 1
            on_document(document)
        else:
            batch.failed += 1
            if on_error:
                on_error(name, error or "unknown error")

        if batch.screen is not None:
            batch.screen.mark_source_done(name, failed=document is None)
            if batch.pending == 0:
                self._close_progress(batch)

    def _close_progress(self, batch: _LoadBatch) -> None:
        screen = batch.screen
        if screen is None:
            return

        if batch.loaded == 0:
            screen.set_error("No files could be loaded")
            delay = self.TASK_ERROR_DELAY
        else:
            plural = "" if batch.loaded == 1 else "s"
            message = f"Loaded {batch.loaded} file{plural}"
            if batch.failed:
                message += f", {batch.failed} failed"
            screen.set_complete(message)
            delay = self.TASK_COMPLETION_DELAY

        def dismiss() -> None:
            if self.app.screen is screen:
                self.app.pop_screen()

        self.set_timer(delay, dismiss)

    @staticmethod
    def should_load_async(file_path: str, threshold: int | None = None) -> bool:
        """Check if a file is large enough to warrant the loading screen.

        Args:
            file_path: Path to the file.
            threshold: Size threshold in bytes. Uses LARGE_FILE_THRESHOLD if None.

        Returns:
            True if file is larger than threshold.
        """
        if threshold is None:
            threshold = BackgroundTaskMixin.LARGE_FILE_THRESHOLD

        try:
            return os.path.getsize(file_path) > threshold
        except OSError:
            return False
