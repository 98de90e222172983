"""
Text sources: where the raw text of a document comes from.

Usage:
    from jsonl_viewer.sources import FileTextSource, detect_format

    source = FileTextSource("events.jsonl")
    text = source.read_text()
    hint = detect_format(source.name)  # 'jsonl'
"""

from jsonl_viewer.sources.base import TextSource
from jsonl_viewer.sources.directory_loader import (
    discover_source_files,
    format_file_size,
)
from jsonl_viewer.sources.file_source import (
    FileTextSource,
    StringTextSource,
)
from jsonl_viewer.sources.format_detector import (
    EXTENSION_MAP,
    UNKNOWN_FORMAT,
    detect_format,
    is_accepted_extension,
)

__all__ = [
    # Base class
    "TextSource",
    # Sources
    "FileTextSource",
    "StringTextSource",
    # Format hints
    "EXTENSION_MAP",
    "UNKNOWN_FORMAT",
    "detect_format",
    "is_accepted_extension",
    # Directory discovery
    "discover_source_files",
    "format_file_size",
]
