"""
Clipboard collaborator and the transient "copied" confirmation flag.

Writing to the clipboard may fail (no display, no clipboard tool, terminal
without OSC 52 support). Failures are logged and reported as ``False``; they
never propagate.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol

import pyperclip

logger = logging.getLogger(__name__)

# Seconds the "copied" confirmation stays visible
COPIED_FLAG_SECONDS = 2.0


class ClipboardWriter(ABC):
    """Something that can place text on a clipboard."""

    @abstractmethod
    def write(self, text: str) -> bool:
        """Copy text. Returns True on success, False on failure."""
        pass


class PyperclipClipboard(ClipboardWriter):
    """System clipboard through pyperclip."""

    def write(self, text: str) -> bool:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning("Failed to copy to system clipboard: %s", e)
            return False
        return True


class CallbackClipboard(ClipboardWriter):
    """Clipboard backed by a plain callable, such as ``App.copy_to_clipboard``."""

    def __init__(self, callback: Callable[[str], Any]) -> None:
        self._callback = callback

    def write(self, text: str) -> bool:
        try:
            self._callback(text)
        except Exception:
            logger.exception("Failed to copy to clipboard")
            return False
        return True


class TimerHandle(Protocol):
    def stop(self) -> Any: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


class TransientFlag:
    """A boolean that resets itself a fixed time after being raised.

    The reset is an explicit scheduled callback. Raising the flag again
    cancels the pending reset before scheduling a new one, and ``reset()``
    clears it early.

    Args:
        schedule: ``schedule(delay, callback)`` returning a handle with
            ``stop()``; Textual's ``set_timer`` fits.
        duration: Seconds until the automatic reset.
        on_change: Optional callback receiving the new flag value.
    """

    def __init__(
        self,
        schedule: Scheduler,
        duration: float = COPIED_FLAG_SECONDS,
        on_change: Callable[[bool], None] | None = None,
    ) -> None:
        self._schedule = schedule
        self._duration = duration
        self._on_change = on_change
        self._pending: TimerHandle | None = None
        self.active = False

    def trigger(self) -> None:
        """Raise the flag and (re)start its reset timer."""
        self._cancel_pending()
        self._set(True)
        self._pending = self._schedule(self._duration, self._expire)

    def reset(self) -> None:
        """Clear the flag now, cancelling any scheduled reset."""
        self._cancel_pending()
        self._set(False)

    def _expire(self) -> None:
        self._pending = None
        self._set(False)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.stop()
            self._pending = None

    def _set(self, value: bool) -> None:
        changed = value != self.active
        self.active = value
        if changed and self._on_change is not None:
            self._on_change(value)


def copy_with_feedback(writer: ClipboardWriter, flag: TransientFlag, text: str) -> bool:
    """Copy text and raise the confirmation flag on success.

    A failed copy leaves any previous confirmation untouched.
    """
    if not writer.write(text):
        return False
    flag.trigger()
    return True
