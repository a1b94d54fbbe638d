"""
Bit-level writer and reader over binary streams.

Bits are packed most-significant-first within each byte; the last byte is
zero-padded. The reader cannot tell padding from data, so callers rely on
an in-band end marker to know where the payload stops.
"""

from typing import BinaryIO


BUFFER_SIZE = 64 * 1024


class BitWriter:
    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.bits_written = 0
        self._buffer = bytearray()
        self._byte = 0
        self._filled = 0
        self._closed = False

    def __enter__(self) -> 'BitWriter':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def write_bit(self, bit: int):
        if self._closed:
            raise ValueError("write to closed BitWriter")

        self._byte = (self._byte << 1) | (1 if bit else 0)
        self._filled += 1
        self.bits_written += 1

        if self._filled == 8:
            self._buffer.append(self._byte)
            self._byte = 0
            self._filled = 0
            if len(self._buffer) >= BUFFER_SIZE:
                self._drain()

    def write_bits(self, code: str):
        for bit in code:
            self.write_bit(bit == '1')

    @property
    def padding(self) -> int:
        return (8 - self.bits_written % 8) % 8

    def _drain(self):
        self.stream.write(bytes(self._buffer))
        self._buffer.clear()

    def close(self):
        if self._closed:
            return

        if self._filled:
            self._buffer.append(self._byte << (8 - self._filled))
            self._byte = 0
            self._filled = 0

        self._drain()
        self._closed = True


class BitReader:
    def __init__(self, stream: BinaryIO, buffer_size: int = BUFFER_SIZE):
        self.stream = stream
        self.buffer_size = buffer_size
        self.bits_read = 0
        self._buffer = b''
        self._pos = 0
        self._byte = 0
        self._remaining = 0

    def _fill(self) -> bool:
        if self._pos >= len(self._buffer):
            self._buffer = self.stream.read(self.buffer_size)
            self._pos = 0
            if not self._buffer:
                return False

        self._byte = self._buffer[self._pos]
        self._pos += 1
        self._remaining = 8
        return True

    def eof(self) -> bool:
        if self._remaining:
            return False
        return not self._fill()

    def read_bit(self) -> int:
        if self.eof():
            raise EOFError("No more bits in stream")

        self._remaining -= 1
        self.bits_read += 1
        return (self._byte >> self._remaining) & 1
