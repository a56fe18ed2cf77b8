"""Error types raised while decoding exercise files.

Every failure of ``parse_exercise`` is a ``ParseError``; no partially built
exercise is ever returned alongside one.
"""

from __future__ import annotations

from typing import Optional


class ParseError(Exception):
    """Base class for all decoder failures.

    Attributes:
        path: File being decoded, when known
        offset: Byte offset where the problem was detected, when known
        phase: Name of the parse phase that failed, set by the phase driver
    """

    def __init__(self, message: str, *, path: Optional[str] = None, offset: Optional[int] = None):
        self.message = message
        self.path = path
        self.offset = offset
        self.phase: Optional[str] = None
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.offset is not None:
            parts.append(f"at offset {self.offset}")
        if self.phase is not None:
            parts.append(f"in phase {self.phase}")
        if self.path is not None:
            parts.append(f"({self.path})")
        return " ".join(parts)


class MissingFileError(ParseError):
    """The exercise file does not exist."""


class UnreadableFileError(ParseError):
    """The exercise file exists but could not be read."""


class UnsupportedFormatError(ParseError):
    """Neither the extension nor the signature matches a known format."""


class MalformedRecordError(ParseError):
    """A record could not be decoded, e.g. the data ended mid-record."""

    def __init__(self, message: str, *, offset: int, path: Optional[str] = None):
        super().__init__(message, path=path, offset=offset)


class ChecksumMismatchError(ParseError):
    """The trailing checksum does not match the bytes read."""

    def __init__(self, expected: int, actual: int, *, offset: Optional[int] = None, path: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"checksum mismatch: file says 0x{expected:04x}, computed 0x{actual:04x}",
            path=path,
            offset=offset,
        )


class CorruptFileError(ParseError):
    """The decoded sections violate an invariant of the exercise model."""

    def __init__(self, message: str, *, field: Optional[str] = None, index: Optional[int] = None, path: Optional[str] = None):
        self.field = field
        self.index = index
        if field is not None:
            message = f"{message} [{field}" + (f"#{index}]" if index is not None else "]")
        super().__init__(message, path=path)
