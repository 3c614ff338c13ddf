"""
Bit-level cursor over a byte buffer.

Bits are consumed least-significant first, spanning byte boundaries, which is
how Source 2 packs net messages inside packet chunks. Every read either
succeeds and advances the cursor, or raises BitBufferOverflowError and leaves
the cursor where it was.
"""
from __future__ import annotations

from .exceptions import BitBufferOverflowError

_UBITVAR_EXTRA_BITS = {0x10: 4, 0x20: 8, 0x30: 28}


class BitBuffer:
    """Stateful reader over `data`; `cursor` is a bit offset."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.total_bits = len(self.data) * 8
        self.cursor = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitBuffer":
        return cls(data)

    def remaining_bits(self) -> int:
        return self.total_bits - self.cursor

    def remaining_bytes(self) -> int:
        return self.remaining_bits() >> 3

    def _require(self, num_bits: int) -> None:
        if num_bits > self.remaining_bits():
            raise BitBufferOverflowError(
                f"Read of {num_bits} bits at cursor {self.cursor} exceeds "
                f"{self.remaining_bits()} remaining bits"
            )

    def read_bits(self, num_bits: int) -> int:
        """Read an unsigned little-endian bit field of `num_bits` bits."""
        if num_bits < 0:
            raise ValueError(f"Negative bit count: {num_bits}")
        self._require(num_bits)

        value = 0
        bits_read = 0
        cursor = self.cursor
        while bits_read < num_bits:
            byte_index = cursor >> 3
            bit_offset = cursor & 7
            available = 8 - bit_offset
            take = min(num_bits - bits_read, available)
            chunk = (self.data[byte_index] >> bit_offset) & ((1 << take) - 1)
            value |= chunk << bits_read
            bits_read += take
            cursor += take

        self.cursor = cursor
        return value

    def read_ubitvar(self) -> int:
        """
        Read a variable-width unsigned bit field ("uvarbit").

        Six bits are read first; bits 4-5 select how many further bits extend
        the low nibble (none, 4, 8 or 28).
        """
        start = self.cursor
        value = self.read_bits(6)
        extra = _UBITVAR_EXTRA_BITS.get(value & 0x30)
        if extra is None:
            return value
        try:
            return (value & 0x0F) | (self.read_bits(extra) << 4)
        except BitBufferOverflowError:
            self.cursor = start
            raise

    def _read_varint(self, max_bytes: int) -> int:
        start = self.cursor
        result = 0
        for i in range(max_bytes):
            try:
                byte = self.read_bits(8)
            except BitBufferOverflowError:
                self.cursor = start
                raise
            result |= (byte & 0x7F) << (7 * i)
            if not byte & 0x80:
                return result
        self.cursor = start
        raise BitBufferOverflowError(f"Varint at cursor {start} longer than {max_bytes} bytes")

    def read_uvarint32(self) -> int:
        return self._read_varint(5) & 0xFFFFFFFF

    def read_uvarint64(self) -> int:
        return self._read_varint(10) & 0xFFFFFFFFFFFFFFFF

    def read_bytes(self, count: int) -> bytes:
        """Read `count` raw bytes starting at the current (possibly unaligned) cursor."""
        if count < 0:
            raise ValueError(f"Negative byte count: {count}")
        self._require(count * 8)

        if self.cursor & 7 == 0:
            start = self.cursor >> 3
            self.cursor += count * 8
            return self.data[start:start + count]

        return bytes(self.read_bits(8) for _ in range(count))

    def __repr__(self) -> str:
        return f"BitBuffer(cursor={self.cursor}, total_bits={self.total_bits})"
