"""
Abstract base class for text sources.

A text source supplies the raw text of one document together with the name
shown for it. Where the text comes from (a file on disk, a string in memory) is
up to the implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextSource(ABC):
    """Abstract base class for acquiring raw document text.

    All concrete sources (file, string) must inherit from this class and
    implement all abstract members.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the display name of the source (e.g., the file name)."""
        pass

    @abstractmethod
    def read_text(self) -> str:
        """Read the whole text of the source.

        Returns:
            The raw text, decoded as UTF-8.

        Raises:
            OSError: If the source cannot be read.
        """
        pass

    @property
    def size(self) -> int | None:
        """Size of the source in bytes, or None if unknown."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
