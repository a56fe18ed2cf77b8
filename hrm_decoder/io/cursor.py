"""Sequential byte reader with a running checksum.

The cursor knows nothing about exercises: it decodes little-endian integers,
packed BCD digit pairs and bit flags, and sums every byte it consumes so the
caller can compare the total with the checksum stored in the file.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import CHECKSUM_MODULUS
from ..errors import ChecksumMismatchError, MalformedRecordError


@dataclass(frozen=True)
class FlagByte:
    """A byte read as a set of bit flags."""
    value: int

    def is_set(self, bit: int) -> bool:
        return bool(self.value & (1 << bit))

    def field(self, shift: int, width: int) -> int:
        """Return the unsigned value of ``width`` bits starting at ``shift``."""
        return (self.value >> shift) & ((1 << width) - 1)


def decode_bcd(value: int) -> int:
    """Decode one packed BCD byte (high nibble tens) into 0..99.

    Returns -1 when a nibble is not a decimal digit.
    """
    high, low = value >> 4, value & 0x0F
    if high > 9 or low > 9:
        return -1
    return high * 10 + low


class BinaryCursor:
    def __init__(self, data: bytes):
        self._data = bytes(data)
        self._offset = 0
        self._sum = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def checksum(self) -> int:
        """Running checksum over all consumed bytes."""
        return self._sum % CHECKSUM_MODULUS

    def _take(self, size: int, accumulate: bool = True) -> bytes:
        if size < 0:
            raise ValueError("size must not be negative")
        if self._offset + size > len(self._data):
            raise MalformedRecordError(
                f"unexpected end of data: need {size} byte(s), {self.remaining} left",
                offset=self._offset,
            )
        chunk = self._data[self._offset:self._offset + size]
        self._offset += size
        if accumulate:
            self._sum += sum(chunk)
        return chunk

    def read_bytes(self, size: int) -> bytes:
        return self._take(size)

    def skip(self, size: int) -> None:
        self._take(size)

    def peek_u8(self) -> int:
        """Return the next byte without consuming it."""
        if self.remaining < 1:
            raise MalformedRecordError("unexpected end of data while peeking", offset=self._offset)
        return self._data[self._offset]

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_i8(self) -> int:
        return int.from_bytes(self._take(1), "little", signed=True)

    def read_u16(self) -> int:
        return int.from_bytes(self._take(2), "little")

    def read_i16(self) -> int:
        return int.from_bytes(self._take(2), "little", signed=True)

    def read_u32(self) -> int:
        return int.from_bytes(self._take(4), "little")

    def read_bcd(self) -> int:
        """Read one BCD byte holding two decimal digits."""
        start = self._offset
        raw = self.read_u8()
        value = decode_bcd(raw)
        if value < 0:
            raise MalformedRecordError(f"invalid BCD byte 0x{raw:02x}", offset=start)
        return value

    def read_bcd_number(self, size: int) -> int:
        """Read a ``size`` byte BCD number, least significant digit pair first."""
        value = 0
        scale = 1
        for _ in range(size):
            value += self.read_bcd() * scale
            scale *= 100
        return value

    def read_flags(self) -> FlagByte:
        return FlagByte(self.read_u8())

    def read_checksum(self) -> int:
        """Read the stored 16-bit checksum; these bytes are not summed."""
        return int.from_bytes(self._take(2, accumulate=False), "little")

    def verify_checksum(self, expected: int) -> None:
        actual = self.checksum
        if actual != expected:
            raise ChecksumMismatchError(expected, actual, offset=self._offset)
