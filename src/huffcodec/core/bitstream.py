"""Bit-level buffer, writer and reader.

Layout:
  - bits packed 8 per byte, MSB first
  - the last partial byte is padded with zeros in its low bits
  - persisted form: packed bytes + 1 trailer byte = lastbits (1..8)
  - empty buffer <-> b"" (no trailer)

The reader offers exactly ``bit_length`` bits, so padding never reaches the
decoder.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from huffcodec.errors import CorruptPayload


@dataclass(frozen=True)
class BitBuffer:
    data: bytes
    bit_length: int

    def __post_init__(self) -> None:
        if self.bit_length < 0:
            raise ValueError("bit_length negativo")
        if (self.bit_length + 7) // 8 != len(self.data):
            raise ValueError(
                f"bit_length={self.bit_length} incoerente con {len(self.data)} byte"
            )

    @property
    def lastbits(self) -> int:
        """Bit validi nell'ultimo byte (1..8), oppure 0 se il buffer e' vuoto."""
        if self.bit_length == 0:
            return 0
        return self.bit_length - 8 * (len(self.data) - 1)

    @property
    def padding(self) -> int:
        return 8 * len(self.data) - self.bit_length

    def bits(self) -> list[int]:
        return list(BitReader(self))

    def to_bytes(self) -> bytes:
        if self.bit_length == 0:
            return b""
        return self.data + bytes([self.lastbits])

    @classmethod
    def from_bytes(cls, blob: bytes) -> "BitBuffer":
        blob = bytes(blob)
        if not blob:
            return cls(b"", 0)
        if len(blob) < 2:
            raise CorruptPayload("bit stream troncato (solo trailer, nessun dato)")
        lastbits = blob[-1]
        if not 1 <= lastbits <= 8:
            raise CorruptPayload(f"trailer lastbits non valido: {lastbits}")
        data = blob[:-1]
        return cls(data, 8 * (len(data) - 1) + lastbits)


class BitWriter:
    """Accumula bit in un bytearray, MSB first."""

    def __init__(self) -> None:
        self._out = bytearray()
        self._current = 0
        self._count = 0
        self._bit_length = 0

    def write_bit(self, bit: int) -> None:
        self._current = (self._current << 1) | (1 if bit else 0)
        self._count += 1
        self._bit_length += 1
        if self._count == 8:
            self._out.append(self._current)
            self._current = 0
            self._count = 0

    def write_bits(self, bits: Iterable[int]) -> None:
        for bit in bits:
            self.write_bit(bit)

    @property
    def bit_length(self) -> int:
        return self._bit_length

    def getvalue(self) -> BitBuffer:
        data = bytes(self._out)
        if self._count > 0:
            data += bytes([(self._current << (8 - self._count)) & 0xFF])
        return BitBuffer(data, self._bit_length)


class BitReader:
    """Legge i bit di un BitBuffer uno alla volta, fermandosi a bit_length."""

    def __init__(self, buffer: BitBuffer) -> None:
        self._data = buffer.data
        self._bit_length = buffer.bit_length
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def has_next(self) -> bool:
        return self._pos < self._bit_length

    def read_bit(self) -> int:
        if self._pos >= self._bit_length:
            raise EOFError("bit stream esaurito")
        byte = self._data[self._pos >> 3]
        bit = (byte >> (7 - (self._pos & 7))) & 1
        self._pos += 1
        return bit

    def __iter__(self) -> Iterator[int]:
        while self.has_next():
            yield self.read_bit()
