"""Parser units that compete to claim an input string.

There is exactly one unit per source kind:
- FileParser: prefix marker ("@" by default), remainder is the path
- StdinParser: exact marker ("-" by default)
- TextParser: empty marker by default, claims anything

Each unit carries a weight; lower weights are tried first by the dispatcher.
The matching function can be replaced with any callable taking
(input, marker) and returning the matched remainder, or None for no match.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import ClassVar

from grab_input.errors import ErrorKind, InputError
from grab_input.models import FileSource, StdinSource, TextSource

Matcher = Callable[[str, str], "str | None"]

MAX_WEIGHT = 255


# =============================================================================
# BUILT-IN MATCHERS
# =============================================================================


def prefix_matcher(input: str, marker: str) -> str | None:
    """Match if input starts with marker; the remainder follows the marker."""
    if input.startswith(marker):
        return input[len(marker) :]
    return None


def exact_matcher(input: str, marker: str) -> str | None:
    """Match only if the whole input is the marker."""
    return "" if input == marker else None


MATCHERS: dict[str, Matcher] = {
    "prefix": prefix_matcher,
    "exact": exact_matcher,
}


# =============================================================================
# INPUT NORMALIZATION
# =============================================================================


def decode_os(value: str | os.PathLike[str]) -> str:
    """Convert an OS-native string to text, requiring it to be valid UTF-8.

    Arguments that were not valid UTF-8 reach Python as str with lone
    surrogates (surrogateescape), which cannot be encoded.
    """
    text = os.fspath(value)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise InputError(ErrorKind.REQUIRES_UTF8) from None
    return text


def decode_bytes(value: bytes) -> str:
    """Decode a raw byte sequence, requiring valid UTF-8."""
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        raise InputError(ErrorKind.REQUIRES_UTF8) from None


# =============================================================================
# PARSER UNITS
# =============================================================================


@dataclass(frozen=True)
class ParserUnit(ABC):
    """A single competitor in dispatch."""

    error_kind: ClassVar[ErrorKind]
    default_matcher: ClassVar[staticmethod]

    marker: str = ""
    matcher: Matcher | None = field(default=None, repr=False)
    weight: int = MAX_WEIGHT

    def __post_init__(self) -> None:
        """Validate marker and weight."""
        if not isinstance(self.marker, str):
            raise ValueError(f"marker must be a string, got {type(self.marker).__name__}")
        if isinstance(self.weight, bool) or not isinstance(self.weight, int):
            raise ValueError(f"weight must be an integer, got {type(self.weight).__name__}")
        if not 0 <= self.weight <= MAX_WEIGHT:
            raise ValueError(f"weight must be between 0 and {MAX_WEIGHT}, got {self.weight}")

    @property
    def name(self) -> str:
        """Lowercase kind name, also used as the settings slot key."""
        return (self.error_kind.name or "").lower()

    @property
    def has_custom_matcher(self) -> bool:
        """True if the default matcher was replaced."""
        return self.matcher is not None

    def with_marker(self, marker: str) -> ParserUnit:
        """Return a copy using a different marker."""
        return replace(self, marker=marker)

    def with_matcher(self, matcher: Matcher) -> ParserUnit:
        """Return a copy using a custom matching function."""
        return replace(self, matcher=matcher)

    def with_weight(self, weight: int) -> ParserUnit:
        """Return a copy with a different dispatch weight."""
        return replace(self, weight=weight)

    def match(self, input: str) -> str | None:
        """Run the matching function against input."""
        matcher = self.matcher if self.matcher is not None else self.default_matcher
        return matcher(input, self.marker)

    def parse_str(self, input: str) -> StdinSource | FileSource | TextSource:
        """Claim input or raise InputError carrying this unit's category."""
        remainder = self.match(input)
        if remainder is None:
            raise InputError(self.error_kind)
        return self._resolve(remainder)

    def parse_os(self, input: str | os.PathLike[str]) -> StdinSource | FileSource | TextSource:
        """Claim an OS-native string; non UTF-8 input fails before matching."""
        return self.parse_str(decode_os(input))

    def parse_bytes(self, input: bytes) -> StdinSource | FileSource | TextSource:
        """Claim a byte string; non UTF-8 input fails before matching."""
        return self.parse_str(decode_bytes(input))

    @abstractmethod
    def _resolve(self, remainder: str) -> StdinSource | FileSource | TextSource:
        """Build the resolved source from the matched remainder."""
        ...


@dataclass(frozen=True)
class FileParser(ParserUnit):
    """Claims inputs that start with the file marker."""

    DEFAULT_MARKER: ClassVar[str] = "@"
    DEFAULT_WEIGHT: ClassVar[int] = 130

    error_kind: ClassVar[ErrorKind] = ErrorKind.FILE
    default_matcher: ClassVar[staticmethod] = staticmethod(prefix_matcher)

    marker: str = DEFAULT_MARKER
    weight: int = DEFAULT_WEIGHT

    def _resolve(self, remainder: str) -> FileSource:
        return FileSource(path=remainder)


@dataclass(frozen=True)
class StdinParser(ParserUnit):
    """Claims inputs that are exactly the stdin marker."""

    DEFAULT_MARKER: ClassVar[str] = "-"
    DEFAULT_WEIGHT: ClassVar[int] = 140

    error_kind: ClassVar[ErrorKind] = ErrorKind.STDIN
    default_matcher: ClassVar[staticmethod] = staticmethod(exact_matcher)

    marker: str = DEFAULT_MARKER
    weight: int = DEFAULT_WEIGHT

    def _resolve(self, remainder: str) -> StdinSource:  # noqa: ARG002 - stdin has no payload
        return StdinSource()


@dataclass(frozen=True)
class TextParser(ParserUnit):
    """Claims everything by default; the last resort of the dispatcher."""

    DEFAULT_MARKER: ClassVar[str] = ""
    DEFAULT_WEIGHT: ClassVar[int] = MAX_WEIGHT

    error_kind: ClassVar[ErrorKind] = ErrorKind.TEXT
    default_matcher: ClassVar[staticmethod] = staticmethod(prefix_matcher)

    marker: str = DEFAULT_MARKER
    weight: int = DEFAULT_WEIGHT

    def _resolve(self, remainder: str) -> TextSource:
        return TextSource(content=remainder)
