"""
Data loading utilities for the viewer.

Glue between text sources and the core: reads a source, ingests its lines into
a Document, and derives the strings shown in the record list and detail views.

Loaded records are cached per file path so reopening an unchanged file in a new
tab does not parse it again.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Callable, Iterator

from jsonl_viewer.core import (
    Document,
    LineRecord,
    format_json,
    iter_records,
)
from jsonl_viewer.sources import FileTextSource, TextSource, discover_source_files

logger = logging.getLogger(__name__)

# Characters of raw text shown per row of the record list
LIST_PREVIEW_LENGTH = 200

# Progress callback is invoked every N records
PROGRESS_UPDATE_FREQUENCY = 1000

# Control characters in list rows are drawn as their Unicode control pictures
# (ESC as \u241b) so raw escape sequences never reach the terminal.
_PRINTABLE_TABLE = {code: 0x2400 + code for code in range(0x20)}
_PRINTABLE_TABLE[ord("\t")] = ord(" ")
_PRINTABLE_TABLE[0x7F] = 0x2421
_PRINTABLE_TABLE.update({code: 0xFFFD for code in range(0x80, 0xA0)})


class ViewMode(Enum):
    """How the selected record is displayed."""

    PRETTY = "pretty"
    RAW = "raw"
    TREE = "tree"


# Global cache for ingested records to prevent repeated parsing. Entries are
# keyed by absolute path and remember the file's (mtime_ns, size) when read.
_record_cache: dict[str, tuple[tuple[int, int], tuple[LineRecord, ...]]] = {}


def cache_key(source: TextSource) -> str | None:
    """Return the cache key for a source, or None if it is not cacheable."""
    if isinstance(source, FileTextSource):
        return str(source.path.absolute())
    return None


def file_signature(path: str) -> tuple[int, int] | None:
    """Return (mtime_ns, size) of a file, or None if it cannot be stat'ed."""
    try:
        stat = os.stat(path)
    except OSError:
        return None
    return stat.st_mtime_ns, stat.st_size


def get_cached_records(key: str) -> tuple[LineRecord, ...] | None:
    """Get records from cache if available and the file is unchanged.

    An entry whose file was modified since it was read is dropped.

    Args:
        key: Cache key of the source (see cache_key()).

    Returns:
        Cached records or None if not cached.
    """
    entry = _record_cache.get(key)
    if entry is None:
        return None
    signature, records = entry
    if signature != file_signature(key):
        logger.debug("Discarding cached records for changed file %s", key)
        _record_cache.pop(key, None)
        return None
    return records


def set_cached_records(
    key: str,
    records: tuple[LineRecord, ...],
    signature: tuple[int, int] | None = None,
) -> None:
    """Store records in cache.

    Args:
        key: Cache key of the source.
        records: The records to cache.
        signature: File signature taken before the file was read. Stat'ed
            now if None. Nothing is stored when the file is gone.
    """
    if signature is None:
        signature = file_signature(key)
    if signature is None:
        return
    _record_cache[key] = (signature, records)


def release_records(records: tuple[LineRecord, ...]) -> None:
    """Drop the cache entries holding exactly these records."""
    for key, (_, cached) in list(_record_cache.items()):
        if cached is records:
            _record_cache.pop(key, None)


def clear_cache(key: str | None = None) -> None:
    """Clear the record cache.

    Args:
        key: If provided, only clear cache for this source.
             If None, clear all cached records.
    """
    if key:
        _record_cache.pop(key, None)
    else:
        _record_cache.clear()


def estimate_line_count(text: str) -> int:
    """Upper bound on the number of records in ``text`` (for progress)."""
    if not text:
        return 0
    return text.count("\n") + 1


def load_records(
    source: TextSource,
    use_cache: bool = True,
    progress_callback: Callable[[int, int | None], None] | None = None,
) -> tuple[LineRecord, ...]:
    """
    Read and ingest every line of a source.

    The full list is returned only once ingestion has finished; the callback
    reports progress but never exposes partial results.

    Args:
        source: Where to read the text from.
        use_cache: Whether to use cached records if available (default True).
        progress_callback: Optional callback(ingested_count, estimated_total).

    Returns:
        All records of the source in input order.

    Raises:
        OSError: If the source cannot be read.
    """
    key = cache_key(source)
    if use_cache and key is not None:
        cached = get_cached_records(key)
        if cached is not None:
            logger.debug("Using cached records for %s", key)
            return cached

    signature = file_signature(key) if key is not None else None
    text = source.read_text()
    total = estimate_line_count(text)

    records: list[LineRecord] = []
    for i, record in enumerate(iter_records(text)):
        records.append(record)
        if progress_callback is not None and i % PROGRESS_UPDATE_FREQUENCY == 0:
            progress_callback(i + 1, total)

    if progress_callback is not None:
        progress_callback(len(records), len(records))

    result = tuple(records)
    if key is not None:
        set_cached_records(key, result, signature)
    return result


def load_document(
    source: TextSource,
    use_cache: bool = True,
    progress_callback: Callable[[int, int | None], None] | None = None,
) -> Document:
    """Load a source into a new Document named after the source."""
    records = load_records(source, use_cache=use_cache, progress_callback=progress_callback)
    return Document.from_records(source.name, records)


def iter_sources(paths: list[str]) -> Iterator[FileTextSource]:
    """Yield a file source per path, expanding directories to their files."""
    for path in paths:
        if os.path.isdir(path):
            for file_info in discover_source_files(path):
                yield FileTextSource(file_info["path"])
        else:
            yield FileTextSource(path)


def preview_raw(text: str, max_len: int = LIST_PREVIEW_LENGTH) -> str:
    """
    Shorten raw line text for a list row, marking the cut with an ellipsis.

    Examples:
        >>> preview_raw("abcdef", 3)
        'abc...'
        >>> preview_raw("abc", 3)
        'abc'
    """
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


def printable(text: str) -> str:
    """Replace control characters with visible one-cell stand-ins.

    Examples:
        >>> printable("\\x1b[31mred\\tx")
        '\u241b[31mred x'
    """
    return text.translate(_PRINTABLE_TABLE)


def get_line_summary(record: LineRecord) -> dict[str, Any]:
    """
    Get a summary of a record for display in the record list.

    Args:
        record: The record to summarize.

    Returns:
        A dictionary with keys: id, preview, valid, error.
    """
    return {
        "id": record.id,
        "preview": printable(preview_raw(record.raw_text)),
        "valid": record.is_valid,
        "error": record.parse_error,
    }


def pretty_text(record: LineRecord) -> str:
    """Two-space-indented JSON of a record's value, or its raw text on error."""
    if not record.is_valid:
        return record.raw_text
    return format_json(record.parsed_value)


def copy_text(record: LineRecord, mode: ViewMode) -> str:
    """Text copied from the detail view for the given mode.

    Raw mode copies the line as read; the other modes copy pretty JSON.
    """
    if mode is ViewMode.RAW:
        return record.raw_text
    return pretty_text(record)
