"""
Shared helpers for generic JSON values.

A JSON value is one of None, bool, int/float, str, list or dict (insertion
order preserved). Values always come from parsed text, so they never contain
cycles.
"""

from __future__ import annotations

import json
from typing import Any, Union

JsonValue = Union[None, bool, int, float, str, list, dict]

# Fallback text shown when a value cannot be serialized
UNFORMATTABLE = "Unable to format"


class _Undefined:
    """Sentinel for an absent value, distinct from JSON null (None)."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    __str__ = __repr__

    def __bool__(self) -> bool:
        return False


UNDEFINED: Any = _Undefined()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_json(text: str) -> JsonValue:
    """Parse one standalone JSON document.

    Stricter than a bare ``json.loads``: ``NaN`` and ``Infinity`` are rejected
    and input nested too deeply for the interpreter is reported as a
    ``ValueError`` rather than a ``RecursionError``.

    Args:
        text: The serialized JSON document.

    Returns:
        The parsed value.

    Raises:
        ValueError: If the text is not a valid JSON document.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON nesting too deep") from e


def format_json(value: Any) -> str:
    """Serialize a value as two-space-indented JSON for display.

    Examples:
        >>> format_json({"a": [1, 2]})
        '{\\n  "a": [\\n    1,\\n    2\\n  ]\\n}'
    """
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return UNFORMATTABLE
