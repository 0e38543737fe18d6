"""Error types for input resolution.

Two disjoint families:
- InputError: parse-time, accumulates the categories of every parser that
  rejected the input.
- AccessError: access-time, raised when a resolved source cannot be opened.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Flag):
    """Categories a parse failure can be attributed to."""

    TEXT = enum.auto()
    STDIN = enum.auto()
    FILE = enum.auto()
    REQUIRES_UTF8 = enum.auto()


# Canonical order used for counting and display
_ALL_KINDS = (ErrorKind.TEXT, ErrorKind.STDIN, ErrorKind.FILE, ErrorKind.REQUIRES_UTF8)


class GrabError(Exception):
    """Base class for all grab-input errors."""


class InputError(GrabError, ValueError):
    """No parser could claim the input.

    Holds a set of ErrorKind flags. Errors from several parsers are merged with
    extend(), which is a plain union, so accumulation order does not matter.
    """

    def __init__(self, kind: ErrorKind) -> None:
        """Initialize with the categories that failed."""
        self._flags = kind
        super().__init__(str(self))

    @property
    def flags(self) -> ErrorKind:
        """The accumulated failure categories."""
        return self._flags

    def insert(self, kind: ErrorKind) -> InputError:
        """Add categories. Returns self for chaining."""
        self._flags |= kind
        self.args = (str(self),)
        return self

    def extend(self, other: InputError) -> InputError:
        """Merge another error's categories into this one. Returns self."""
        return self.insert(other.flags)

    def contains(self, kind: ErrorKind) -> bool:
        """Return True if every category in kind is set."""
        return kind in self._flags

    def count(self) -> int:
        """Number of distinct categories set."""
        return sum(1 for k in _ALL_KINDS if k in self._flags)

    def kinds(self) -> list[ErrorKind]:
        """Set categories in canonical order."""
        return [k for k in _ALL_KINDS if k in self._flags]

    def __str__(self) -> str:
        names = "|".join(k.name or "" for k in self.kinds())
        if self.count() > 1:
            return f"multiple parsers failed [{names}]"
        return f"parser failed [{names}]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InputError):
            return NotImplemented
        return self._flags == other._flags

    def __hash__(self) -> int:
        return hash(self._flags)

    def __repr__(self) -> str:
        return f"InputError({self._flags!r})"


class AccessKind(enum.Enum):
    """Source kinds that can fail at access time."""

    FILE = "file"
    STDIN = "stdin"


class AccessError(GrabError, OSError):
    """A resolved source could not be turned into a byte stream."""

    def __init__(self, kind: AccessKind, reason: str, path: str | None = None) -> None:
        """Initialize the access error.

        Args:
            kind: Which source kind failed.
            reason: Underlying failure description.
            path: Offending path, when known.
        """
        self.kind = kind
        self.path = path
        self.reason = reason
        if path is not None:
            detail = f"unable to open {path}: {reason}"
        else:
            detail = f"unable to open {kind.value}: {reason}"
        super().__init__(f"{kind.value} access failed: {detail}")

    @classmethod
    def file_with_context(cls, err: OSError | ValueError, path: str) -> AccessError:
        """Build a file access error from the open() failure and the path that failed."""
        error = cls(AccessKind.FILE, getattr(err, "strerror", None) or str(err), path)
        error.__cause__ = err
        return error

    def __str__(self) -> str:
        return str(self.args[0])


class RegistryError(GrabError):
    """A parser registry was built without any parser."""


class SettingsError(GrabError):
    """A settings document is invalid or cannot be produced."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        """Initialize with a summary and the individual validation messages."""
        self.errors = errors or []
        if self.errors:
            message = f"{message}: {'; '.join(self.errors)}"
        super().__init__(message)
