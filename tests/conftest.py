"""Pytest configuration and shared fixtures for jsonl_viewer tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from jsonl_viewer.core import LineRecord, ingest


@pytest.fixture
def mixed_text() -> str:
    """Two valid lines followed by one that is not JSON."""
    return '{"a":1}\n{"b":2}\nnotjson\n'


@pytest.fixture
def mixed_records(mixed_text: str) -> list[LineRecord]:
    """Records ingested from mixed_text."""
    return ingest(mixed_text)


@pytest.fixture
def log_records() -> list[LineRecord]:
    """A small structured log with one corrupted line."""
    lines = [
        {"level": "info", "msg": "server started", "port": 8080},
        {"level": "error", "msg": "connection refused", "retry": True},
        {"level": "info", "msg": "request", "path": "/api/items", "ms": 12.5},
        {"level": "warn", "msg": "slow query", "ms": 1500},
    ]
    text = "\n".join(json.dumps(line) for line in lines) + '\n{"level": "error", "msg": \n'
    return ingest(text)


@pytest.fixture
def nested_value() -> dict[str, Any]:
    """A parsed record with nested objects and arrays."""
    return {
        "user": {"name": "Ada", "tags": ["admin", "ops"]},
        "events": [{"type": "login", "ok": True}, {"type": "logout", "ok": None}],
        "note": "line1\nline2",
        "count": 3,
    }


class FakeTimer:
    """Timer handle recording whether it was stopped."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True

    def fire(self) -> None:
        if not self.stopped:
            self.callback()


class FakeScheduler:
    """Stands in for ``set_timer``: records timers instead of running them."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if not timer.stopped]


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


def _write_jsonl(path: Path, records: list[Any], extra_lines: list[str] | None = None) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
        for line in extra_lines or []:
            f.write(line + "\n")


@pytest.fixture
def write_jsonl() -> Callable[..., None]:
    """Helper to write records (and optional raw lines) to a JSONL file."""
    return _write_jsonl
