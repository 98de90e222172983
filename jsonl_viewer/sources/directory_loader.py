"""
Directory scanning utilities for discovering openable files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jsonl_viewer.sources.format_detector import detect_format, is_accepted_extension

logger = logging.getLogger(__name__)


def discover_source_files(directory: str) -> list[dict]:
    """
    Discover all files with an accepted extension in a directory.

    Args:
        directory: Path to the directory to scan.

    Returns:
        List of dicts with:
        - path: absolute path to file
        - name: filename
        - format: format hint (jsonl, json, log, txt)
        - size: file size in bytes
    """
    dir_path = Path(directory)
    files = []

    # Iterate all files and check extension case-insensitively
    # (glob patterns are case-sensitive on Linux)
    try:
        for file_path in dir_path.iterdir():
            if not file_path.is_file():
                continue

            if not is_accepted_extension(file_path.name):
                continue

            try:
                files.append({
                    "path": str(file_path.absolute()),
                    "name": file_path.name,
                    "format": detect_format(file_path.name),
                    "size": file_path.stat().st_size,
                })
            except OSError as e:
                logger.warning("Skipping unreadable file %s: %s", file_path, e)
                continue
    except OSError as e:
        logger.warning("Cannot scan directory %s: %s", directory, e)
        return []

    return sorted(files, key=lambda f: f["name"].lower())


def format_file_size(size_bytes: int) -> str:
    """Format file size for display (e.g., '1.2 MB').

    Args:
        size_bytes: Size in bytes.

    Returns:
        Human-readable size string.
    """
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"
