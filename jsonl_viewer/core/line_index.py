"""
Filter/sort view over the records of one document.

The view is a pure function of (lines, filter text, sort direction): it never
reorders or mutates the underlying sequence. "Sorting" is a plain reversal of
the ingestion order, not a comparison by content.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from jsonl_viewer.core.line_ingestor import LineRecord


class SortDirection(Enum):
    """Display order of the records."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    def toggled(self) -> SortDirection:
        """Return the opposite direction."""
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING

    @property
    def arrow(self) -> str:
        return "↑" if self is SortDirection.ASCENDING else "↓"


def view(
    lines: Sequence[LineRecord],
    filter_text: str = "",
    sort_direction: SortDirection = SortDirection.ASCENDING,
) -> list[LineRecord]:
    """Compute the displayed subsequence of records.

    Args:
        lines: Records in ingestion order.
        filter_text: Substring to look for in each record's raw text.
            Blank (empty or whitespace-only) keeps every record.
        sort_direction: ASCENDING keeps ingestion order, DESCENDING
            reverses the filtered result end to end.

    Returns:
        A new list; ``lines`` is left untouched.

    Examples:
        >>> [r.id for r in view(records, "json")]
        [3]
    """
    if filter_text.strip():
        needle = filter_text.lower()
        result = [line for line in lines if needle in line.raw_text.lower()]
    else:
        result = list(lines)

    if sort_direction is SortDirection.DESCENDING:
        result.reverse()
    return result


def find_record(lines: Sequence[LineRecord], record_id: int | None) -> LineRecord | None:
    """Return the record with the given id, or None."""
    if record_id is None:
        return None
    # ids are 1..n in order, so try the direct position first
    if 0 < record_id <= len(lines) and lines[record_id - 1].id == record_id:
        return lines[record_id - 1]
    for line in lines:
        if line.id == record_id:
            return line
    return None


def is_selection_stale(displayed: Sequence[LineRecord], record_id: int | None) -> bool:
    """Whether a selected id is missing from a computed view.

    A stale selection is not an error; callers simply stop showing it.
    """
    if record_id is None:
        return False
    return all(line.id != record_id for line in displayed)


class LineIndex:
    """Memoized view over one document's records.

    Recomputes only when the filter text or sort direction changes, which keeps
    the item count stable between renders of the windowed list.
    """

    def __init__(self, lines: Sequence[LineRecord]) -> None:
        self._lines = lines
        self._key: tuple[str, SortDirection] | None = None
        self._view: tuple[LineRecord, ...] = ()

    @property
    def total(self) -> int:
        return len(self._lines)

    def view(
        self,
        filter_text: str = "",
        sort_direction: SortDirection = SortDirection.ASCENDING,
    ) -> tuple[LineRecord, ...]:
        """Records matching the filter, in the requested order.

        The result is shared between calls with the same inputs, so it is
        returned as a tuple.
        """
        key = (filter_text, sort_direction)
        if key != self._key:
            self._view = tuple(view(self._lines, filter_text, sort_direction))
            self._key = key
        return self._view

    @property
    def count(self) -> int:
        """Number of records in the last computed view."""
        if self._key is None:
            return self.total
        return len(self._view)

    def __len__(self) -> int:
        return self.count
