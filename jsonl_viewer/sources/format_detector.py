"""
Format hints for source names.

The extension of a source is only a hint shown next to its name: every source
is ingested as JSON Lines whatever its extension, and nothing is rejected.
"""

from __future__ import annotations

from pathlib import Path

# Mapping of file extensions to format hints
EXTENSION_MAP: dict[str, str] = {
    ".jsonl": "jsonl",
    ".json": "json",
    ".log": "log",
    ".txt": "txt",
}

UNKNOWN_FORMAT = "unknown"


def detect_format(filename: str) -> str:
    """Return the format hint for a source name.

    Args:
        filename: Path or display name of the source.

    Returns:
        One of the EXTENSION_MAP values, or "unknown". Never raises.

    Examples:
        >>> detect_format("data.jsonl")
        'jsonl'
        >>> detect_format("server.LOG")
        'log'
        >>> detect_format("dump.bin")
        'unknown'
    """
    extension = Path(filename).suffix.lower()
    return EXTENSION_MAP.get(extension, UNKNOWN_FORMAT)


def is_accepted_extension(filename: str) -> bool:
    """Whether the name carries one of the extensions offered for opening."""
    return Path(filename).suffix.lower() in EXTENSION_MAP
