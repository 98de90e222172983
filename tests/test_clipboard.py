"""Tests for jsonl_viewer/core/clipboard.py."""

from __future__ import annotations

import pyperclip
import pytest

from jsonl_viewer.core import (
    COPIED_FLAG_SECONDS,
    CallbackClipboard,
    ClipboardWriter,
    PyperclipClipboard,
    TransientFlag,
    copy_with_feedback,
)


class RecordingClipboard(ClipboardWriter):
    """Clipboard that keeps what it was given, or fails on demand."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.copied: list[str] = []

    def write(self, text: str) -> bool:
        if self.succeed:
            self.copied.append(text)
        return self.succeed


class TestTransientFlag:
    """Tests for TransientFlag."""

    def test_trigger_sets_and_schedules_reset(self, scheduler):
        flag = TransientFlag(scheduler)
        flag.trigger()
        assert flag.active
        assert len(scheduler.pending) == 1
        assert scheduler.pending[0].delay == COPIED_FLAG_SECONDS

    def test_resets_when_timer_fires(self, scheduler):
        flag = TransientFlag(scheduler)
        flag.trigger()
        scheduler.timers[0].fire()
        assert not flag.active

    def test_retrigger_cancels_pending_reset(self, scheduler):
        """A new trigger replaces the pending reset instead of adding one."""
        flag = TransientFlag(scheduler, duration=0.5)
        flag.trigger()
        flag.trigger()
        assert scheduler.timers[0].stopped
        assert len(scheduler.pending) == 1

        scheduler.timers[0].fire()
        assert flag.active
        scheduler.timers[1].fire()
        assert not flag.active

    def test_early_reset(self, scheduler):
        flag = TransientFlag(scheduler)
        flag.trigger()
        flag.reset()
        assert not flag.active
        assert scheduler.pending == []

    def test_on_change_only_reports_changes(self, scheduler):
        changes: list[bool] = []
        flag = TransientFlag(scheduler, on_change=changes.append)
        flag.reset()
        flag.trigger()
        flag.trigger()
        scheduler.pending[0].fire()
        assert changes == [True, False]


class TestCopyWithFeedback:
    """Tests for copy_with_feedback()."""

    def test_success_raises_flag(self, scheduler):
        clipboard = RecordingClipboard()
        flag = TransientFlag(scheduler)
        assert copy_with_feedback(clipboard, flag, "hello")
        assert clipboard.copied == ["hello"]
        assert flag.active

    def test_failure_leaves_flag_down(self, scheduler):
        flag = TransientFlag(scheduler)
        assert not copy_with_feedback(RecordingClipboard(succeed=False), flag, "x")
        assert not flag.active
        assert scheduler.timers == []


class TestClipboardWriters:
    """Tests for the concrete clipboard writers."""

    def test_callback_clipboard(self):
        received: list[str] = []
        assert CallbackClipboard(received.append).write("abc")
        assert received == ["abc"]

    def test_callback_failure_returns_false(self):
        def broken(text: str) -> None:
            raise RuntimeError("no terminal")

        assert CallbackClipboard(broken).write("abc") is False

    def test_pyperclip_success(self, monkeypatch):
        received: list[str] = []
        monkeypatch.setattr(pyperclip, "copy", received.append)
        assert PyperclipClipboard().write("abc")
        assert received == ["abc"]

    def test_pyperclip_failure_returns_false(self, monkeypatch, caplog):
        def unavailable(text: str) -> None:
            raise pyperclip.PyperclipException("no clipboard mechanism")

        monkeypatch.setattr(pyperclip, "copy", unavailable)
        assert PyperclipClipboard().write("abc") is False
        assert "no clipboard mechanism" in caplog.text

    def test_writer_is_abstract(self):
        with pytest.raises(TypeError):
            ClipboardWriter()
