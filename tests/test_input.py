"""Tests for Input handles, lazy access and source models."""

from __future__ import annotations

import builtins
import io
import sys
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from grab_input.errors import AccessError, AccessKind, ErrorKind, InputError
from grab_input.input import Input, InputReader
from grab_input.models import FileSource, StdinSource, TextSource, dump_source, load_source


class TestInputConstruction:
    """Tests for building Input handles."""

    def test_with_defaults_file(self) -> None:
        """Test a file argument with the default config."""
        handle = Input.with_defaults("@/some/file/path")
        assert handle.source == FileSource(path="/some/file/path")

    def test_from_str(self) -> None:
        """Test from_str uses the default config."""
        assert Input.from_str("some text").source == TextSource(content="some text")

    def test_builder_is_empty(self) -> None:
        """Test Input.builder starts with no units."""
        assert not Input.builder().is_valid()

    def test_non_utf8_argument(self) -> None:
        """Test a non UTF-8 OS argument cannot become an Input."""
        with pytest.raises(InputError) as exc_info:
            Input.builder().text().build().parse_os_input("\udcff")
        assert exc_info.value.contains(ErrorKind.REQUIRES_UTF8)

    def test_dispatch_does_not_open_files(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test resolving a file argument never opens it."""
        opened: list[Any] = []
        real_open = builtins.open

        def tracking_open(*args: Any, **kwargs: Any) -> Any:
            opened.append(args[0])
            return real_open(*args, **kwargs)

        monkeypatch.setattr(builtins, "open", tracking_open)
        handle = Input.with_defaults("@does/not/exist.txt")
        assert opened == []
        with pytest.raises(AccessError):
            handle.access()
        assert opened == ["does/not/exist.txt"]

    def test_dispatch_does_not_touch_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test resolving '-' never looks at sys.stdin."""
        touched: list[str] = []

        class WatchedStdin:
            def __getattr__(self, name: str) -> Any:
                touched.append(name)
                raise AttributeError(name)

        monkeypatch.setattr(sys, "stdin", WatchedStdin())
        handle = Input.with_defaults("-")
        assert handle.source == StdinSource()
        assert touched == []


class TestAccess:
    """Tests for turning sources into byte streams."""

    def test_text_round_trip(self) -> None:
        """Test text content is reproduced exactly."""
        content = "some random text ✓\n"
        with Input.with_defaults(content).access() as reader:
            assert reader.read_to_string() == content

    def test_text_read_in_chunks(self) -> None:
        """Test readinto returns counts and 0 at end of stream."""
        reader = Input(TextSource(content="abcdef")).access()
        buffer = bytearray(4)
        assert reader.readinto(buffer) == 4
        assert bytes(buffer) == b"abcd"
        assert reader.readinto(buffer) == 2
        assert bytes(buffer[:2]) == b"ef"
        assert reader.readinto(buffer) == 0

    def test_file(self, text_file: Path) -> None:
        """Test a file source reads the file."""
        with Input.with_defaults(f"@{text_file}").access() as reader:
            assert reader.read() == b"Fred\n"

    def test_file_closed_with_reader(self, text_file: Path) -> None:
        """Test closing the reader closes the owned file."""
        reader = Input(FileSource(path=str(text_file))).access()
        stream = reader._stream
        reader.close()
        assert reader.closed
        assert stream.closed

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unopenable file raises AccessError with the path."""
        missing = tmp_path / "missing.txt"
        handle = Input(FileSource(path=str(missing)))
        with pytest.raises(AccessError) as exc_info:
            handle.access()
        error = exc_info.value
        assert error.kind is AccessKind.FILE
        assert error.path == str(missing)
        assert str(missing) in str(error)
        assert isinstance(error.__cause__, FileNotFoundError)

    def test_access_error_is_not_input_error(self, tmp_path: Path) -> None:
        """Test access errors are a separate family from parse errors."""
        with pytest.raises(AccessError) as exc_info:
            Input(FileSource(path=str(tmp_path / "nope"))).access()
        assert not isinstance(exc_info.value, InputError)

    def test_stdin(self, fake_stdin: io.TextIOWrapper) -> None:
        """Test '-' reads from standard input."""
        with Input.with_defaults("-").access() as reader:
            assert reader.read_to_string() == "Bob from stdin\n"

    def test_stdin_not_closed(self, fake_stdin: io.TextIOWrapper) -> None:
        """Test the shared stdin stream survives closing the reader."""
        reader = Input(StdinSource()).access()
        reader.close()
        assert not fake_stdin.buffer.closed

    def test_trailing_slash_on_file(self, text_file: Path) -> None:
        """Test 'file/' is opened as typed, so a regular file is rejected."""
        with pytest.raises(AccessError) as exc_info:
            Input.with_defaults(f"@{text_file}/").access()
        assert exc_info.value.path == f"{text_file}/"
        assert isinstance(exc_info.value.__cause__, NotADirectoryError)

    def test_empty_path(self) -> None:
        """Test '@' alone does not open the current directory."""
        with pytest.raises(AccessError) as exc_info:
            Input.with_defaults("@").access()
        assert exc_info.value.path == ""
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_nul_in_path(self) -> None:
        """Test an embedded NUL byte is reported as an access error."""
        with pytest.raises(AccessError) as exc_info:
            Input.with_defaults("@a\x00b").access()
        assert exc_info.value.kind is AccessKind.FILE
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_text_only_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a StringIO standing in for stdin is read as UTF-8 bytes."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("typed ✓"))
        with Input(StdinSource()).access() as reader:
            assert reader.read_to_string() == "typed ✓"

    def test_unreadable_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a stdin replacement that is not a stream raises AccessError."""
        monkeypatch.setattr(sys, "stdin", object())
        with pytest.raises(AccessError) as exc_info:
            Input(StdinSource()).access()
        assert exc_info.value.kind is AccessKind.STDIN

    def test_no_data_yet(self) -> None:
        """Test a non-blocking 'no data yet' is not mistaken for end of stream."""

        class NoDataYet(io.RawIOBase):
            def readable(self) -> bool:
                return True

            def readinto(self, buffer: Any) -> None:
                return None

        reader = InputReader(NoDataYet(), owned=True)  # type: ignore[arg-type]
        assert reader.readinto(bytearray(8)) is None

    def test_reader_is_raw_io(self) -> None:
        """Test the reader works with the io module."""
        reader = Input(TextSource(content="line one\nline two\n")).access()
        assert isinstance(reader, InputReader)
        assert reader.readable()
        lines = io.BufferedReader(reader).readlines()
        assert lines == [b"line one\n", b"line two\n"]


class TestSourceModels:
    """Tests for resolved source serialization."""

    @pytest.mark.parametrize(
        "source",
        [StdinSource(), FileSource(path="a/b.txt"), TextSource(content="hi")],
    )
    def test_dump_and_load(self, source: Any) -> None:
        """Test sources survive JSON serialization with their kind."""
        assert load_source(dump_source(source)) == source

    def test_dump_format(self) -> None:
        """Test the JSON carries the kind tag."""
        assert dump_source(FileSource(path="x")) == '{"kind":"file","path":"x"}'

    def test_frozen(self) -> None:
        """Test sources are immutable."""
        source = TextSource(content="x")
        with pytest.raises(ValidationError):
            source.content = "y"  # type: ignore[misc]

    def test_unknown_kind(self) -> None:
        """Test an unknown kind tag is rejected."""
        with pytest.raises(ValueError):
            load_source('{"kind": "socket"}')
