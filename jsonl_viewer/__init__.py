"""JSONL Viewer: browse JSON Lines files line by line in the terminal."""

__version__ = "0.1.0"
