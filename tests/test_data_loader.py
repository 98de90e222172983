"""Tests for jsonl_viewer/tui/data_loader.py."""

from __future__ import annotations

import pytest

from jsonl_viewer.core import ingest
from jsonl_viewer.sources import FileTextSource, StringTextSource
from jsonl_viewer.tui.data_loader import (
    LIST_PREVIEW_LENGTH,
    ViewMode,
    cache_key,
    clear_cache,
    copy_text,
    estimate_line_count,
    get_cached_records,
    get_line_summary,
    iter_sources,
    load_document,
    load_records,
    preview_raw,
    pretty_text,
    printable,
    release_records,
)


@pytest.fixture(autouse=True)
def empty_cache():
    clear_cache()
    yield
    clear_cache()


class TestLoadRecords:
    """Tests for load_records() and load_document()."""

    def test_loads_string_source(self, mixed_text):
        records = load_records(StringTextSource("inline", mixed_text))
        assert [r.id for r in records] == [1, 2, 3]
        assert not records[2].is_valid

    def test_file_records_are_cached(self, tmp_path, mixed_text):
        path = tmp_path / "mixed.jsonl"
        path.write_text(mixed_text)
        source = FileTextSource(path)

        first = load_records(source)
        assert get_cached_records(cache_key(source)) is first
        assert load_records(source) is first
        assert len(load_records(source, use_cache=False)) == 3

    def test_changed_file_is_read_again(self, tmp_path):
        """A log that grew since it was opened is ingested again."""
        path = tmp_path / "growing.log"
        path.write_text('{"n": 1}\n')
        first = load_document(FileTextSource(path))
        assert first.total_count == 1

        path.write_text('{"n": 1}\n{"n": 2}\n{"n": 3}\n')
        second = load_document(FileTextSource(path))
        assert second.total_count == 3
        assert get_cached_records(cache_key(FileTextSource(path))) is second.lines

    def test_deleted_file_is_not_served_from_cache(self, tmp_path):
        path = tmp_path / "gone.jsonl"
        path.write_text("[1]\n")
        source = FileTextSource(path)
        load_records(source)
        path.unlink()
        assert get_cached_records(cache_key(source)) is None
        with pytest.raises(OSError):
            load_records(source)

    def test_release_records(self, tmp_path):
        path = tmp_path / "a.jsonl"
        path.write_text("[1]\n")
        source = FileTextSource(path)
        document = load_document(source)
        assert get_cached_records(cache_key(source)) is document.lines

        release_records(document.lines)
        assert get_cached_records(cache_key(source)) is None

    def test_release_ignores_other_records(self, tmp_path):
        path = tmp_path / "a.jsonl"
        path.write_text("[1]\n")
        source = FileTextSource(path)
        cached = load_records(source)
        release_records(load_records(StringTextSource("inline", "[1]\n")))
        assert get_cached_records(cache_key(source)) is cached

    def test_byte_order_mark_does_not_break_first_line(self, tmp_path):
        path = tmp_path / "windows.jsonl"
        path.write_bytes(b'\xef\xbb\xbf{"a": 1}\r\n{"b": 2}\r\n')
        document = load_document(FileTextSource(path))
        assert document.invalid_count == 0
        assert document.lines[0].parsed_value == {"a": 1}
        assert document.lines[0].raw_text == '{"a": 1}'

    def test_string_sources_are_not_cached(self):
        assert cache_key(StringTextSource("inline", "[1]\n")) is None

    def test_clear_single_entry(self, tmp_path):
        path = tmp_path / "a.jsonl"
        path.write_text("[1]\n")
        source = FileTextSource(path)
        load_records(source)
        clear_cache(cache_key(source))
        assert get_cached_records(cache_key(source)) is None

    def test_progress_reports_final_count(self):
        calls: list[tuple[int, int | None]] = []
        text = "".join(f"[{i}]\n" for i in range(2500))
        load_records(StringTextSource("big", text), progress_callback=lambda c, t: calls.append((c, t)))
        assert calls[0] == (1, 2501)
        assert calls[-1] == (2500, 2500)
        counts = [c for c, _ in calls]
        assert counts == sorted(counts)

    def test_unreadable_source_raises(self, tmp_path):
        with pytest.raises(OSError):
            load_records(FileTextSource(tmp_path / "missing.jsonl"))

    def test_load_document_uses_source_name(self, tmp_path, mixed_text):
        path = tmp_path / "events.log"
        path.write_text(mixed_text)
        document = load_document(FileTextSource(path))
        assert document.display_name == "events.log"
        assert document.total_count == 3

    def test_estimate_line_count(self):
        assert estimate_line_count("") == 0
        assert estimate_line_count("a") == 1
        assert estimate_line_count("a\nb\n") == 3


class TestIterSources:
    """Tests for iter_sources()."""

    def test_expands_directories(self, tmp_path):
        (tmp_path / "b.jsonl").write_text("[1]\n")
        (tmp_path / "a.log").write_text("[2]\n")
        (tmp_path / "skip.csv").write_text("x\n")
        single = tmp_path / "single.data"
        single.write_text("[3]\n")

        names = [s.name for s in iter_sources([str(tmp_path / "b.jsonl"), str(tmp_path), str(single)])]
        assert names == ["b.jsonl", "a.log", "b.jsonl", "single.data"]


class TestDisplayHelpers:
    """Tests for the list and detail display helpers."""

    def test_preview_raw(self):
        assert preview_raw("abc") == "abc"
        assert preview_raw("x" * LIST_PREVIEW_LENGTH) == "x" * LIST_PREVIEW_LENGTH
        assert preview_raw("x" * 250) == "x" * LIST_PREVIEW_LENGTH + "..."

    def test_line_summary(self, mixed_records):
        assert get_line_summary(mixed_records[0]) == {
            "id": 1,
            "preview": '{"a":1}',
            "valid": True,
            "error": None,
        }
        summary = get_line_summary(mixed_records[2])
        assert summary["valid"] is False
        assert summary["error"] == "Invalid JSON"

    def test_line_summary_hides_escape_sequences(self):
        """ANSI colour codes in log lines are not sent to the terminal."""
        record = ingest("\x1b[2J\x1b[31mred log line\x1b[0m\n")[0]
        preview = get_line_summary(record)["preview"]
        assert "\x1b" not in preview
        assert preview == "\u241b[2J\u241b[31mred log line\u241b[0m"

    def test_printable(self):
        assert printable("plain {\"a\": 1}") == "plain {\"a\": 1}"
        assert printable("a\tb") == "a b"
        assert printable("\x00\x07\x7f\x9b") == "\u2400\u2407\u2421\ufffd"
        assert printable("caf\u00e9 \u2713") == "caf\u00e9 \u2713"

    def test_printable_keeps_length(self):
        text = "".join(chr(code) for code in range(0xA0))
        assert len(printable(text)) == len(text)

    def test_pretty_text(self, mixed_records):
        assert pretty_text(mixed_records[0]) == '{\n  "a": 1\n}'
        assert pretty_text(mixed_records[2]) == "notjson"

    def test_pretty_text_keeps_unicode(self):
        record = ingest('{"name": "caf\\u00e9"}\n')[0]
        assert pretty_text(record) == '{\n  "name": "café"\n}'

    def test_copy_text_by_mode(self):
        record = ingest('{"a":  [1,2]}\n')[0]
        assert copy_text(record, ViewMode.RAW) == '{"a":  [1,2]}'
        assert copy_text(record, ViewMode.PRETTY) == '{\n  "a": [\n    1,\n    2\n  ]\n}'
