"""Resolved input handle and lazy byte-stream access.

An Input holds a resolved source and owns no OS resource. Only access()
opens files or touches standard input:

    name = Input.with_defaults("@name.txt").access().read_to_string()
"""

from __future__ import annotations

import io
import logging
import sys
from typing import IO

from grab_input.builder import Builder, Config
from grab_input.errors import AccessError, AccessKind
from grab_input.models import FileSource, StdinSource, TextSource

logger = logging.getLogger(__name__)


class Input:
    """A successfully resolved command-line input."""

    def __init__(self, source: StdinSource | FileSource | TextSource) -> None:
        """Wrap a resolved source."""
        self._source = source

    @staticmethod
    def builder() -> Builder:
        """An empty builder for custom configurations."""
        return Builder()

    @classmethod
    def with_defaults(cls, input: str) -> Input:
        """Resolve input with the default file, stdin and text units."""
        return cls(Config.default().parse_str(input))

    @classmethod
    def from_str(cls, input: str) -> Input:
        """Alias of with_defaults."""
        return cls.with_defaults(input)

    @property
    def source(self) -> StdinSource | FileSource | TextSource:
        """The resolved source."""
        return self._source

    def access(self) -> InputReader:
        """Open the resolved source for reading.

        Raises:
            AccessError: The source is a file that cannot be opened.
        """
        stream, owned = _open_source(self._source)
        return InputReader(stream, owned=owned)

    def __repr__(self) -> str:
        return f"Input({self._source!r})"


class InputReader(io.RawIOBase):
    """Uniform byte stream over stdin, a file or captured text."""

    def __init__(self, stream: IO[bytes], *, owned: bool) -> None:
        """Wrap a binary stream; owned streams are closed with the reader."""
        super().__init__()
        self._stream = stream
        self._owned = owned

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int | None:  # type: ignore[override]
        """Read bytes into buffer.

        Returns the count, 0 at end of stream, or None when a non-blocking
        stream has no data yet.
        """
        # readinto1 returns what is available instead of waiting for a full buffer
        readinto = getattr(self._stream, "readinto1", None) or self._stream.readinto
        return readinto(buffer)

    def read_to_string(self, encoding: str = "utf-8") -> str:
        """Read the remaining bytes and decode them."""
        return self.readall().decode(encoding)

    def close(self) -> None:
        if not self.closed and self._owned:
            self._stream.close()
        super().close()


def _stdin_stream() -> IO[bytes]:
    """The binary standard input stream, looked up at access time."""
    stream = sys.stdin
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        return buffer
    if isinstance(stream, io.TextIOBase):
        # Text-only replacement such as io.StringIO
        return io.BytesIO(stream.read().encode("utf-8"))
    raise AccessError(AccessKind.STDIN, f"standard input is not readable as bytes: {stream!r}")


def _open_source(source: StdinSource | FileSource | TextSource) -> tuple[IO[bytes], bool]:
    """Map a resolved source to (stream, owned)."""
    if isinstance(source, StdinSource):
        logger.debug("reading from standard input")
        return _stdin_stream(), False

    if isinstance(source, FileSource):
        logger.debug("opening %s", source.path)
        try:
            return open(source.path, "rb"), True
        except (OSError, ValueError) as e:
            # ValueError: embedded null byte
            raise AccessError.file_with_context(e, source.path) from e

    return io.BytesIO(source.content.encode("utf-8")), True
