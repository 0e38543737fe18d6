"""Parser registry and dispatcher.

Usage:
    config = (
        Builder()
        .file(FileParser(marker="file://"))
        .stdin()
        .text()
        .build()
    )

    source = config.parse_str("file://notes.txt")  # FileSource(path="notes.txt")

Dispatch tries the configured units in ascending weight order and returns the
first success. If every unit rejects the input, the merged InputError listing
each rejecting category is raised.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from grab_input.errors import InputError, RegistryError
from grab_input.models import FileSource, StdinSource, TextSource
from grab_input.parsers import FileParser, ParserUnit, StdinParser, TextParser, decode_bytes, decode_os

if TYPE_CHECKING:
    from grab_input.input import Input

logger = logging.getLogger(__name__)

Source = StdinSource | FileSource | TextSource


# =============================================================================
# BUILDER
# =============================================================================


@dataclass(frozen=True)
class Builder:
    """Immutable registry description: at most one parser unit per kind.

    Each fluent method returns a new Builder; the receiver is never changed.
    """

    file_parser: FileParser | None = None
    stdin_parser: StdinParser | None = None
    text_parser: TextParser | None = None

    @classmethod
    def default(cls) -> Builder:
        """A builder with all three units in their default configuration."""
        return cls().file().stdin().text()

    def file(self, parser: FileParser | None = None) -> Builder:
        """Enable the file unit (default configuration unless given)."""
        return replace(self, file_parser=parser if parser is not None else FileParser())

    def stdin(self, parser: StdinParser | None = None) -> Builder:
        """Enable the stdin unit (default configuration unless given)."""
        return replace(self, stdin_parser=parser if parser is not None else StdinParser())

    def text(self, parser: TextParser | None = None) -> Builder:
        """Enable the text unit (default configuration unless given)."""
        return replace(self, text_parser=parser if parser is not None else TextParser())

    def without_file(self) -> Builder:
        """Disable the file unit."""
        return replace(self, file_parser=None)

    def without_stdin(self) -> Builder:
        """Disable the stdin unit."""
        return replace(self, stdin_parser=None)

    def without_text(self) -> Builder:
        """Disable the text unit."""
        return replace(self, text_parser=None)

    def slots(self) -> tuple[ParserUnit | None, ParserUnit | None, ParserUnit | None]:
        """All slots in declaration order, absent units as None."""
        return (self.file_parser, self.stdin_parser, self.text_parser)

    def is_valid(self) -> bool:
        """A registry needs at least one parser unit."""
        return any(slot is not None for slot in self.slots())

    def build(self) -> Config:
        """Build a Config, raising RegistryError if no unit is enabled."""
        if not self.is_valid():
            raise RegistryError("a Builder must contain at least one parser")
        return Config(self)

    def try_build(self) -> Config | None:
        """Build a Config, or return None if no unit is enabled."""
        if not self.is_valid():
            return None
        return Config(self)


# =============================================================================
# CONFIG / DISPATCH
# =============================================================================


class Config:
    """A validated, read-only registry that dispatches input to parser units."""

    def __init__(self, builder: Builder) -> None:
        """Wrap a builder; an empty builder is a programming error."""
        if not builder.is_valid():
            raise RegistryError("Config should never have less than one parser, this is a bug")
        self._builder = builder
        # Stable sort keeps file, stdin, text order between equal weights
        self._ordered: tuple[ParserUnit, ...] = tuple(
            sorted(
                (unit for unit in builder.slots() if unit is not None),
                key=lambda unit: unit.weight,
            )
        )

    @classmethod
    def default(cls) -> Config:
        """Config with the file, stdin and text units at their defaults."""
        return Builder.default().build()

    @property
    def builder(self) -> Builder:
        """The builder this config was made from."""
        return self._builder

    def parsers(self) -> Iterator[ParserUnit]:
        """Iterate present units in dispatch order."""
        return iter(self._ordered)

    def parse_str(self, input: str) -> Source:
        """Resolve a text string into a source."""
        return self._apply(lambda unit: unit.parse_str(input))

    def parse_os(self, input: str | os.PathLike[str]) -> Source:
        """Resolve an OS-native string. Non UTF-8 input fails immediately."""
        text = decode_os(input)
        return self.parse_str(text)

    def parse_bytes(self, input: bytes) -> Source:
        """Resolve a byte string. Non UTF-8 input fails immediately."""
        text = decode_bytes(input)
        return self.parse_str(text)

    def parse(self, input: str) -> Input:
        """Resolve a text string into an Input handle."""
        from grab_input.input import Input

        return Input(self.parse_str(input))

    def parse_os_input(self, input: str | os.PathLike[str]) -> Input:
        """Resolve an OS-native string into an Input handle."""
        from grab_input.input import Input

        return Input(self.parse_os(input))

    def _apply(self, attempt: Callable[[ParserUnit], Source]) -> Source:
        """Try units in order, returning the first success."""
        error: InputError | None = None
        logger.debug("dispatch order: %s", ", ".join(unit.name for unit in self._ordered))

        for unit in self._ordered:
            try:
                source = attempt(unit)
            except InputError as e:
                logger.debug("%s parser (weight %d) rejected input", unit.name, unit.weight)
                if error is None:
                    error = e
                else:
                    error.extend(e)
                continue
            logger.debug("%s parser (weight %d) claimed input", unit.name, unit.weight)
            return source

        if error is None:
            raise RuntimeError("Config should never have less than one parser, this is a bug")
        raise error

    def __repr__(self) -> str:
        units = ", ".join(
            f"{unit.name}(marker={unit.marker!r}, weight={unit.weight}, "
            f"matcher={'custom' if unit.has_custom_matcher else 'default'})"
            for unit in self._ordered
        )
        return f"Config({units})"
