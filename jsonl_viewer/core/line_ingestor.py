"""
Line ingestor for JSON Lines text.

Turns a raw text blob into an ordered sequence of LineRecord objects, one per
non-blank line. Every line is parsed on its own, so a malformed line never
affects its neighbours: it is kept as a record carrying a parse error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from jsonl_viewer.core.json_value import UNDEFINED, parse_json

logger = logging.getLogger(__name__)

# Error recorded on a line that is not a valid JSON document
INVALID_JSON = "Invalid JSON"


@dataclass(frozen=True)
class LineRecord:
    """Parse result for one input line.

    Exactly one of ``parsed_value`` and ``parse_error`` is present. An absent
    ``parsed_value`` is ``UNDEFINED`` (a parsed JSON ``null`` is ``None``).

    Attributes:
        id: 1-based position among the kept lines of one ingestion.
        raw_text: The line text as read (without its line terminator).
        parsed_value: The parsed JSON value, or UNDEFINED on failure.
        parse_error: Error message on failure, otherwise None.
    """

    id: int
    raw_text: str
    parsed_value: Any = UNDEFINED
    parse_error: str | None = None

    def __post_init__(self) -> None:
        has_value = self.parsed_value is not UNDEFINED
        has_error = self.parse_error is not None
        if has_value == has_error:
            raise ValueError(
                f"Line {self.id} must carry exactly one of parsed_value or parse_error"
            )
        if self.id < 1:
            raise ValueError(f"Line id must be >= 1, got {self.id}")

    @property
    def is_valid(self) -> bool:
        """Whether the line parsed successfully."""
        return self.parse_error is None


def split_lines(text: str) -> Iterator[str]:
    """Split text on ``\\n`` boundaries, dropping a CR of a CRLF pair.

    Only ``\\n`` separates lines, so characters such as U+2028 stay inside
    their line.
    """
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def parse_line(line_id: int, raw_text: str) -> LineRecord:
    """Parse a single line into a LineRecord, capturing any failure."""
    try:
        value = parse_json(raw_text)
    except ValueError:
        return LineRecord(id=line_id, raw_text=raw_text, parse_error=INVALID_JSON)
    return LineRecord(id=line_id, raw_text=raw_text, parsed_value=value)


def iter_records(text: str) -> Iterator[LineRecord]:
    """Lazily ingest text, yielding one record per non-blank line.

    Whitespace-only lines are skipped before numbering, so ids run 1..n over
    the kept lines with no gaps.

    Args:
        text: The raw JSON Lines text.

    Yields:
        LineRecord objects in input order.

    Examples:
        >>> [r.id for r in iter_records('{"a": 1}\\n\\n[2]\\n')]
        [1, 2]
    """
    next_id = 1
    for line in split_lines(text):
        if not line.strip():
            continue
        yield parse_line(next_id, line)
        next_id += 1


def ingest(text: str) -> list[LineRecord]:
    """Ingest a whole text blob into an ordered list of records.

    Args:
        text: The raw JSON Lines text.

    Returns:
        All records, in input order. Never raises for malformed content.
    """
    records = list(iter_records(text))
    if logger.isEnabledFor(logging.DEBUG):
        failed = sum(1 for r in records if not r.is_valid)
        logger.debug("Ingested %d lines (%d invalid)", len(records), failed)
    return records
