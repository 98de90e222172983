"""
Text sources backed by files and strings.

No encoding validation is done: bytes that are not valid UTF-8 are replaced
so that any file can still be opened and ingested line by line.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from jsonl_viewer.sources.base import TextSource

logger = logging.getLogger(__name__)


class FileTextSource(TextSource):
    """Text source reading a file from disk.

    Attributes:
        path: Path to the file.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        """Return the file name without its directory."""
        return self.path.name

    @property
    def size(self) -> int | None:
        try:
            return self.path.stat().st_size
        except OSError:
            return None

    def read_text(self) -> str:
        """Read the whole file as UTF-8, dropping a leading byte order mark.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
        """
        logger.debug("Reading %s", self.path)
        with open(self.path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
            return f.read()


class StringTextSource(TextSource):
    """Text source over an in-memory string."""

    def __init__(self, name: str, text: str) -> None:
        self._name = name
        self._text = text

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int | None:
        return len(self._text.encode("utf-8"))

    def read_text(self) -> str:
        return self._text
