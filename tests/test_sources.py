"""Tests for the text sources in jsonl_viewer/sources/."""

from __future__ import annotations

import pytest

from jsonl_viewer.sources import (
    UNKNOWN_FORMAT,
    FileTextSource,
    StringTextSource,
    TextSource,
    detect_format,
    discover_source_files,
    format_file_size,
    is_accepted_extension,
)


class TestDetectFormat:
    """Tests for detect_format()."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("data.jsonl", "jsonl"),
            ("data.json", "json"),
            ("server.log", "log"),
            ("notes.txt", "txt"),
            ("DATA.JSONL", "jsonl"),
            ("Data.Json", "json"),
            ("/tmp/dir/app.Log", "log"),
        ],
    )
    def test_known_extensions(self, name, expected):
        assert detect_format(name) == expected

    @pytest.mark.parametrize("name", ["dump.bin", "README", "archive.jsonl.gz", ""])
    def test_unknown_is_not_an_error(self, name):
        assert detect_format(name) == UNKNOWN_FORMAT

    def test_is_accepted_extension(self):
        assert is_accepted_extension("a.jsonl")
        assert not is_accepted_extension("a.parquet")


class TestFileTextSource:
    """Tests for FileTextSource."""

    def test_reads_file(self, tmp_path, write_jsonl):
        path = tmp_path / "events.jsonl"
        write_jsonl(path, [{"a": 1}], extra_lines=["broken"])
        source = FileTextSource(path)
        assert source.name == "events.jsonl"
        assert source.read_text() == '{"a": 1}\nbroken\n'
        assert source.size == path.stat().st_size

    def test_keeps_crlf(self, tmp_path):
        """Line endings are left for the ingestor to handle."""
        path = tmp_path / "dos.jsonl"
        path.write_bytes(b'{"a": 1}\r\n')
        assert FileTextSource(path).read_text() == '{"a": 1}\r\n'

    def test_invalid_utf8_is_replaced(self, tmp_path):
        path = tmp_path / "latin1.log"
        path.write_bytes(b'{"name": "caf\xe9"}\n')
        assert FileTextSource(path).read_text() == '{"name": "caf\ufffd"}\n'

    def test_byte_order_mark_is_dropped(self, tmp_path):
        """Files saved by Windows editors start with a UTF-8 BOM."""
        path = tmp_path / "bom.jsonl"
        path.write_bytes(b'\xef\xbb\xbf{"a": 1}\n{"b": 2}\n')
        assert FileTextSource(path).read_text() == '{"a": 1}\n{"b": 2}\n'

    def test_missing_file_raises(self, tmp_path):
        source = FileTextSource(tmp_path / "missing.jsonl")
        assert source.size is None
        with pytest.raises(FileNotFoundError):
            source.read_text()

    def test_accepts_string_path(self, tmp_path):
        path = tmp_path / "x.txt"
        path.write_text("[1]\n")
        assert FileTextSource(str(path)).name == "x.txt"


class TestStringTextSource:
    """Tests for StringTextSource."""

    def test_read(self):
        source = StringTextSource("inline", "[1]\n")
        assert isinstance(source, TextSource)
        assert source.name == "inline"
        assert source.read_text() == "[1]\n"
        assert source.size == 4


class TestDiscoverSourceFiles:
    """Tests for discover_source_files()."""

    def test_finds_accepted_files_sorted(self, tmp_path):
        for name in ("b.jsonl", "A.log", "c.txt", "skip.parquet", "d.JSON"):
            (tmp_path / name).write_text("[1]\n")
        (tmp_path / "sub.jsonl").mkdir()

        files = discover_source_files(str(tmp_path))
        assert [f["name"] for f in files] == ["A.log", "b.jsonl", "c.txt", "d.JSON"]
        assert [f["format"] for f in files] == ["log", "jsonl", "txt", "json"]
        assert all(f["size"] == 4 for f in files)

    def test_missing_directory(self, tmp_path):
        assert discover_source_files(str(tmp_path / "nope")) == []

    def test_empty_directory(self, tmp_path):
        assert discover_source_files(str(tmp_path)) == []


class TestFormatFileSize:
    """Tests for format_file_size()."""

    def test_units(self):
        assert format_file_size(512) == "512.0 B"
        assert format_file_size(2048) == "2.0 KB"
        assert format_file_size(5 * 1024 * 1024) == "5.0 MB"
