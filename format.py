"""
Header of a compressed file: the frequency map that rebuilds the Huffman
tree, and a CRC32 of the original data.
"""

import io
import struct
import zlib
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Iterator

from huffman import FrequencyMap, PSEUDO_EOF, SYMBOL_SPACE


MAGIC = b'HUFP'
VERSION = 1

PREFIX = struct.Struct('<4sBBHI')
ENTRY = struct.Struct('<HQ')


class HeaderError(ValueError):
    pass


class IntegrityError(ValueError):
    pass


@dataclass
class FileHeader:
    frequencies: FrequencyMap
    crc32: int = 0

    @property
    def original_size(self) -> int:
        return self.frequencies.total() - 1

    def serialize(self) -> bytes:
        output = io.BytesIO()
        items = self.frequencies.items()

        output.write(PREFIX.pack(MAGIC, VERSION, 0, len(items), self.crc32))
        for symbol, count in items:
            output.write(ENTRY.pack(symbol, count))

        return output.getvalue()

    @staticmethod
    def deserialize(data: bytes) -> 'FileHeader':
        if len(data) < PREFIX.size:
            raise HeaderError("Header too small")

        magic, version, _flags, entry_count, crc32 = PREFIX.unpack_from(data, 0)
        if magic != MAGIC:
            raise HeaderError("Invalid magic, not a compressed file")
        if version != VERSION:
            raise HeaderError(f"Unsupported version: {version}")
        if entry_count == 0:
            raise HeaderError("Header has no frequency entries")

        pos = PREFIX.size
        if pos + entry_count * ENTRY.size > len(data):
            raise HeaderError("Corrupted header: frequency table truncated")

        frequencies = FrequencyMap()
        for _ in range(entry_count):
            symbol, count = ENTRY.unpack_from(data, pos)
            pos += ENTRY.size

            if symbol >= SYMBOL_SPACE:
                raise HeaderError(f"Corrupted header: symbol {symbol} out of range")
            if symbol in frequencies:
                raise HeaderError(f"Corrupted header: duplicate symbol {symbol}")
            if count == 0:
                raise HeaderError(f"Corrupted header: zero count for symbol {symbol}")
            frequencies.put(symbol, count)

        if frequencies.get(PSEUDO_EOF) != 1:
            raise HeaderError("Corrupted header: end-of-stream marker missing")

        return FileHeader(frequencies=frequencies, crc32=crc32)

    @staticmethod
    def size_for(entry_count: int) -> int:
        return PREFIX.size + entry_count * ENTRY.size


def write_header(stream: BinaryIO, header: FileHeader) -> int:
    data = header.serialize()
    stream.write(data)
    return len(data)


def read_header(stream: BinaryIO) -> FileHeader:
    prefix = stream.read(PREFIX.size)
    if len(prefix) < PREFIX.size:
        raise HeaderError("Header too small")

    entry_count = PREFIX.unpack(prefix)[3]
    entries = stream.read(entry_count * ENTRY.size)
    return FileHeader.deserialize(prefix + entries)


def calculate_crc32(data: bytes) -> int:
    return zlib.crc32(data) & 0xffffffff


class ChecksumReader:
    """Yields the bytes of `chunks` one by one, keeping a running CRC32."""

    def __init__(self, chunks: Iterable[bytes]):
        self.chunks = chunks
        self._crc = 0

    @property
    def crc32(self) -> int:
        return self._crc & 0xffffffff

    def __iter__(self) -> Iterator[int]:
        for chunk in self.chunks:
            self._crc = zlib.crc32(chunk, self._crc)
            yield from chunk


def verify_integrity(header: FileHeader, decompressed_data: bytes) -> bool:
    if len(decompressed_data) != header.original_size:
        return False

    return calculate_crc32(decompressed_data) == header.crc32
