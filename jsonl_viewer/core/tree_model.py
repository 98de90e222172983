"""
Path-addressed tree model over one parsed JSON value.

Every node reachable from the root has a path string: ``root``, then ``.key``
for each descent into an object and ``[i]`` for each descent into an array.
Children are derived on demand from the value itself, so nothing is built
for parts of the tree that are never expanded.

The expansion state is an immutable set of open paths. Toggling returns a new
state object and leaves the previous one untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from jsonl_viewer.core.json_value import UNDEFINED, format_json

ROOT_PATH = "root"

# Maximum depth for tree traversal to guard against pathological nesting
MAX_TREE_DEPTH = 100

DEFAULT_PREVIEW_LENGTH = 50

_INDEX_SEGMENT = re.compile(r"\[([0-9]+)\]")

# Escape sequences turned into literal characters for display, in order
_DISPLAY_UNESCAPES: tuple[tuple[str, str], ...] = (
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ('\\"', '"'),
    ("\\\\", "\\"),
)


class PathResolutionError(LookupError):
    """Raised when a path does not address a node of the bound root.

    Paths handed out by the model always resolve, so this signals a bug in
    the caller rather than bad input.
    """


def classify(value: Any) -> str:
    """Return the display type of a value.

    One of ``null``, ``array``, ``object``, ``string``, ``number``,
    ``boolean`` or ``undefined``. Arrays are kept apart from objects.
    """
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def is_composite(value: Any) -> bool:
    return isinstance(value, (dict, list))


def number_text(value: int | float) -> str:
    """Render a number the way a JSON serializer would print it."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def preview(value: Any, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Short one-value summary used next to a tree key.

    Examples:
        >>> preview([1, 2, 3])
        'Array(3)'
        >>> preview({"a": 1, "b": 2})
        '{2 keys}'
        >>> preview("x" * 60, 5)
        '"xxxxx..."'
    """
    kind = classify(value)
    if kind == "null":
        return "null"
    if kind == "undefined":
        return "undefined"
    if kind == "boolean":
        return "true" if value else "false"
    if kind == "number":
        return number_text(value)
    if kind == "string":
        shown = value[:max_length] + "..." if len(value) > max_length else value
        return f'"{shown}"'
    if kind == "array":
        return f"Array({len(value)})"
    return f"{{{len(value)} keys}}"


def unescape_display(text: str) -> str:
    """Turn the fixed escape subset ``\\n \\r \\t \\" \\\\`` into characters.

    Other escapes, ``\\u`` sequences included, are left as they are.
    """
    for escaped, literal in _DISPLAY_UNESCAPES:
        text = text.replace(escaped, literal)
    return text


def format_selected(value: Any) -> str:
    """Display string for the node currently inspected in the tree."""
    kind = classify(value)
    if kind in ("null", "undefined"):
        return kind
    if kind == "string":
        return unescape_display(value)
    if kind in ("array", "object"):
        return unescape_display(format_json(value))
    return preview(value)


def child_path(parent: str, key: str | int) -> str:
    """Path of a child: ``[i]`` for array indices, ``.key`` for object keys."""
    if isinstance(key, int):
        return f"{parent}[{key}]"
    return f"{parent}.{key}"


@dataclass(frozen=True)
class TreeNode:
    """One addressable node of the tree.

    Attributes:
        label: Display key (``root``, an object key, or ``[i]``).
        path: Unique path of the node.
        value: The JSON value at this node.
        depth: Distance from the root.
    """

    label: str
    path: str
    value: Any
    depth: int = 0

    @property
    def kind(self) -> str:
        return classify(self.value)

    @property
    def is_expandable(self) -> bool:
        return is_composite(self.value)

    def preview(self, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
        return preview(self.value, max_length)


def children(node: TreeNode) -> list[TreeNode]:
    """Derive the direct children of a node.

    Arrays yield index-keyed children in index order, objects yield key-keyed
    children in insertion order, and leaves have none.
    """
    value = node.value
    depth = node.depth + 1
    if isinstance(value, list):
        return [
            TreeNode(f"[{i}]", child_path(node.path, i), item, depth)
            for i, item in enumerate(value)
        ]
    if isinstance(value, dict):
        return [
            TreeNode(key, child_path(node.path, key), item, depth)
            for key, item in value.items()
        ]
    return []


class ExpansionState:
    """Immutable set of expanded paths. Defaults to just the root."""

    __slots__ = ("_paths",)

    def __init__(self, paths: Iterable[str] = (ROOT_PATH,)) -> None:
        self._paths = frozenset(paths)

    @property
    def paths(self) -> frozenset[str]:
        return self._paths

    def toggle(self, path: str) -> ExpansionState:
        """Return a new state with ``path`` flipped."""
        if path in self._paths:
            return ExpansionState(self._paths - {path})
        return ExpansionState(self._paths | {path})

    def expand(self, path: str) -> ExpansionState:
        if path in self._paths:
            return self
        return ExpansionState(self._paths | {path})

    def collapse(self, path: str) -> ExpansionState:
        if path not in self._paths:
            return self
        return ExpansionState(self._paths - {path})

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpansionState):
            return NotImplemented
        return self._paths == other._paths

    def __hash__(self) -> int:
        return hash(self._paths)

    def __repr__(self) -> str:
        return f"ExpansionState({sorted(self._paths)!r})"


class TreeModel:
    """Tree view session bound to one root value.

    Holds the expansion state and the currently inspected node. A new model
    is created whenever a different record is selected, which discards both.
    """

    def __init__(self, root: Any) -> None:
        self.root = root
        self.expansion = ExpansionState()
        self.selected_path: str | None = None
        self.selected_value: Any = UNDEFINED

    @property
    def root_node(self) -> TreeNode:
        return TreeNode(ROOT_PATH, ROOT_PATH, self.root, 0)

    @property
    def is_browsable(self) -> bool:
        """Only objects and arrays are shown as a tree."""
        return is_composite(self.root)

    def resolve(self, path: str) -> Any:
        """Find the value addressed by ``path``.

        Segments are replayed left to right from the root. Object keys may
        themselves contain ``.`` or ``[``; when a path could be split in more
        than one way, the first key in insertion order whose complete replay
        succeeds wins.

        Raises:
            PathResolutionError: If no node of this root has the path.
        """
        if not path.startswith(ROOT_PATH):
            raise PathResolutionError(path)

        end = len(path)
        # Explicit stack of (value, position in path) for backtracking
        stack: list[tuple[Any, int]] = [(self.root, len(ROOT_PATH))]
        while stack:
            value, pos = stack.pop()
            if pos == end:
                return value
            if isinstance(value, list):
                match = _INDEX_SEGMENT.match(path, pos)
                if match is not None:
                    index = int(match.group(1))
                    if index < len(value):
                        stack.append((value[index], match.end()))
            elif isinstance(value, dict) and path[pos] == ".":
                candidates = []
                for key, item in value.items():
                    stop = pos + 1 + len(key)
                    if path.startswith(key, pos + 1) and (
                        stop == end or path[stop] in ".["
                    ):
                        candidates.append((item, stop))
                stack.extend(reversed(candidates))

        raise PathResolutionError(path)

    def is_expanded(self, path: str) -> bool:
        return path in self.expansion

    def toggle(self, path: str) -> ExpansionState:
        """Flip ``path`` in the expansion set and return the new state."""
        self.expansion = self.expansion.toggle(path)
        return self.expansion

    def select(self, path: str) -> Any:
        """Mark the node at ``path`` as inspected and return its value."""
        value = self.resolve(path)
        self.selected_path = path
        self.selected_value = value
        return value

    @property
    def selected_display(self) -> str:
        """Display string of the inspected node, empty when none."""
        if self.selected_path is None:
            return ""
        return format_selected(self.selected_value)

    def visible_nodes(self) -> list[TreeNode]:
        """Flatten the currently expanded part of the tree, in display order.

        Only composite nodes present in the expansion set are descended into.
        Descent stops at MAX_TREE_DEPTH.
        """
        rows: list[TreeNode] = []
        stack = [self.root_node]
        while stack:
            node = stack.pop()
            rows.append(node)
            if (
                node.is_expandable
                and node.path in self.expansion
                and node.depth < MAX_TREE_DEPTH
            ):
                stack.extend(reversed(children(node)))
        return rows
