"""
Core of the JSONL viewer: ingestion, filter/sort view, tree model and lexer.

Nothing in this package depends on the terminal UI, so it can be used and
tested on its own.

Usage:
    from jsonl_viewer.core import DocumentStore, TreeModel, tokenize

    store = DocumentStore()
    doc = store.add("events.jsonl", text)
    doc.set_filter("error")
    for record in doc.displayed_lines:
        print(record.id, record.raw_text)
"""

from jsonl_viewer.core.clipboard import (
    COPIED_FLAG_SECONDS,
    CallbackClipboard,
    ClipboardWriter,
    PyperclipClipboard,
    TransientFlag,
    copy_with_feedback,
)
from jsonl_viewer.core.document import Document, DocumentStore
from jsonl_viewer.core.json_value import UNDEFINED, format_json, parse_json
from jsonl_viewer.core.line_index import (
    LineIndex,
    SortDirection,
    find_record,
    is_selection_stale,
    view,
)
from jsonl_viewer.core.line_ingestor import (
    INVALID_JSON,
    LineRecord,
    ingest,
    iter_records,
)
from jsonl_viewer.core.tokenizer import Token, TokenKind, tokenize
from jsonl_viewer.core.tree_model import (
    MAX_TREE_DEPTH,
    ROOT_PATH,
    ExpansionState,
    PathResolutionError,
    TreeModel,
    TreeNode,
    children,
    classify,
    format_selected,
    preview,
    unescape_display,
)
from jsonl_viewer.core.windowing import DEFAULT_OVERSCAN, Viewport

__all__ = [
    # Ingestion
    "INVALID_JSON",
    "LineRecord",
    "ingest",
    "iter_records",
    # Filter/sort view
    "LineIndex",
    "SortDirection",
    "find_record",
    "is_selection_stale",
    "view",
    # Documents
    "Document",
    "DocumentStore",
    # Tree model
    "MAX_TREE_DEPTH",
    "ROOT_PATH",
    "ExpansionState",
    "PathResolutionError",
    "TreeModel",
    "TreeNode",
    "children",
    "classify",
    "format_selected",
    "preview",
    "unescape_display",
    # Tokenizer
    "Token",
    "TokenKind",
    "tokenize",
    # JSON helpers
    "UNDEFINED",
    "format_json",
    "parse_json",
    # Windowing
    "DEFAULT_OVERSCAN",
    "Viewport",
    # Clipboard
    "COPIED_FLAG_SECONDS",
    "CallbackClipboard",
    "ClipboardWriter",
    "PyperclipClipboard",
    "TransientFlag",
    "copy_with_feedback",
]
