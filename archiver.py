"""
Compression and decompression of whole files and in-memory buffers.
"""

import io
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional

from bitstream import BitReader, BitWriter
from format import (ChecksumReader, FileHeader, IntegrityError, calculate_crc32,
                    read_header, verify_integrity, write_header)
from huffman import (FrequencyMap, SourceUnavailableError, build_encoding_map,
                     build_encoding_tree, build_frequency_map, count_symbols, decode,
                     encode, read_chunks, read_symbols, symbol_name)


DEFAULT_SUFFIX = '.huf'
DEFAULT_FRAGMENT = '_unc'


def compressed_name(file_path: str, suffix: str = DEFAULT_SUFFIX) -> str:
    return file_path + suffix


def decompressed_name(file_path: str, suffix: str = DEFAULT_SUFFIX,
                      fragment: str = DEFAULT_FRAGMENT) -> str:
    """
    example.txt.huf -> example_unc.txt, archive.tar.gz.huf -> archive_unc.tar.gz
    """
    if suffix and file_path.endswith(suffix):
        file_path = file_path[:-len(suffix)]

    directory, name = os.path.split(file_path)

    # a leading dot belongs to the stem (".bashrc")
    dot = name.find('.', 1)
    if dot < 0:
        stem, ext = name, ''
    else:
        stem, ext = name[:dot], name[dot:]

    return os.path.join(directory, stem + fragment + ext)


@dataclass
class CompressionResult:
    input_path: str
    output_path: str
    original_size: int
    compressed_size: int
    bit_count: int
    bits: str = ''

    @property
    def ratio(self) -> float:
        return (self.compressed_size / self.original_size * 100) if self.original_size > 0 else 0


@dataclass
class DecompressionResult:
    input_path: str
    output_path: str
    original_size: int
    bits: str = ''


@dataclass
class SymbolStats:
    symbol: int
    count: int
    code: str


def _open(path: str, mode: str) -> BinaryIO:
    try:
        return open(path, mode)
    except OSError as e:
        raise SourceUnavailableError(f"Cannot open {path}: {e.strerror or e}") from e


def _check_distinct(file_path: str, output_path: str):
    same = os.path.abspath(output_path) == os.path.abspath(file_path)
    if not same and os.path.exists(output_path) and os.path.exists(file_path):
        same = os.path.samefile(output_path, file_path)
    if same:
        raise SourceUnavailableError(f"Output {output_path} would overwrite input {file_path}")


def _remove_partial(path: str):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def _compress_to(output: BinaryIO, symbols: Iterable[int], frequencies: FrequencyMap,
                 crc32: int, keep_bits: bool = False):
    header_size = write_header(output, FileHeader(frequencies=frequencies, crc32=crc32))

    with build_encoding_tree(frequencies) as tree:
        encoding_map = build_encoding_map(tree)
        with BitWriter(output) as writer:
            bits, size = encode(symbols, encoding_map, writer, keep_bits=keep_bits)

    return header_size + (size + 7) // 8, size, bits


def _decompress_from(stream: BinaryIO, output: Optional[BinaryIO] = None,
                     keep_bits: bool = False):
    header = read_header(stream)

    with build_encoding_tree(header.frequencies) as tree:
        data, bits = decode(BitReader(stream), tree, output, keep_bits=keep_bits)

    if not verify_integrity(header, data):
        raise IntegrityError(
            f"CRC32 mismatch: expected {header.original_size} bytes "
            f"with crc {header.crc32:08x}, got {len(data)} bytes")

    return data, bits


def compress_bytes(data: bytes) -> bytes:
    output = io.BytesIO()
    _compress_to(output, data, count_symbols(data), calculate_crc32(data))
    return output.getvalue()


def compress_string(text: str) -> bytes:
    data = text.encode('utf-8')
    output = io.BytesIO()
    _compress_to(output, data, build_frequency_map(text, is_file=False), calculate_crc32(data))
    return output.getvalue()


def decompress_bytes(blob: bytes) -> bytes:
    data, _ = _decompress_from(io.BytesIO(blob))
    return data


class Archiver:
    def __init__(self, suffix: str = DEFAULT_SUFFIX, fragment: str = DEFAULT_FRAGMENT,
                 verbose: bool = True, keep_bits: bool = False):
        self.suffix = suffix
        self.fragment = fragment
        self.verbose = verbose
        self.keep_bits = keep_bits

    def compress_file(self, file_path: str, output_path: Optional[str] = None) -> CompressionResult:
        output_path = output_path or compressed_name(file_path, self.suffix)

        _check_distinct(file_path, output_path)

        scan = ChecksumReader(read_chunks(file_path))
        frequencies = count_symbols(scan)
        crc32 = scan.crc32

        output = _open(output_path, 'wb')
        try:
            with output:
                compressed_size, bit_count, bits = _compress_to(
                    output, read_symbols(file_path), frequencies, crc32, self.keep_bits)
        except BaseException:
            _remove_partial(output_path)
            raise

        result = CompressionResult(
            input_path=file_path,
            output_path=output_path,
            original_size=frequencies.total() - 1,
            compressed_size=compressed_size,
            bit_count=bit_count,
            bits=bits
        )

        if self.verbose:
            print(f"Compressing {Path(file_path).name}... OK ({result.ratio:.1f}%) -> {output_path}")

        return result

    def decompress_file(self, file_path: str, output_path: Optional[str] = None) -> DecompressionResult:
        output_path = output_path or decompressed_name(file_path, self.suffix, self.fragment)
        _check_distinct(file_path, output_path)

        with _open(file_path, 'rb') as f:
            output = _open(output_path, 'wb')
            try:
                with output:
                    data, bits = _decompress_from(f, output, self.keep_bits)
            except BaseException:
                _remove_partial(output_path)
                raise

        if self.verbose:
            print(f"Extracting {Path(file_path).name}... OK -> {output_path}")

        return DecompressionResult(
            input_path=file_path,
            output_path=output_path,
            original_size=len(data),
            bits=bits
        )

    def inspect_file(self, file_path: str) -> List[SymbolStats]:
        with _open(file_path, 'rb') as f:
            header = read_header(f)

        with build_encoding_tree(header.frequencies) as tree:
            encoding_map = build_encoding_map(tree)

        return [SymbolStats(symbol, count, encoding_map[symbol])
                for symbol, count in header.frequencies.items()]

    def list_file(self, file_path: str):
        stats = self.inspect_file(file_path)

        print(f"{'Symbol':<10} {'Count':>12} {'Bits':>6}  Code")
        print("-" * 60)

        total_count = 0
        total_bits = 0
        for entry in stats:
            print(f"{symbol_name(entry.symbol):<10} {entry.count:>12} {len(entry.code):>6}  {entry.code}")
            total_count += entry.count
            total_bits += entry.count * len(entry.code)

        print("-" * 60)
        average = (total_bits / total_count) if total_count > 0 else 0
        print(f"{len(stats)} symbols, {total_count - 1} bytes, {total_bits} payload bits "
              f"({average:.3f} bits/symbol)")
