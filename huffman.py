"""
Huffman coding core: frequency analysis, tree construction, code table
generation and the bit-level encode/decode transforms.

Symbols are byte values 0-255 plus PSEUDO_EOF, which marks the logical end
of the stream and is always present in a frequency map with count 1.
"""

import heapq
from typing import BinaryIO, Iterable, Iterator, List, Optional, Tuple

from bitstream import BitReader, BitWriter


PSEUDO_EOF = 256
NOT_A_CHAR = 257
SYMBOL_SPACE = 257
NO_CHILD = -1

CHUNK_SIZE = 64 * 1024


class HuffmanError(Exception):
    pass


class UnencodableSymbolError(HuffmanError):
    def __init__(self, symbol: int):
        super().__init__(f"Symbol {symbol!r} has no Huffman code")
        self.symbol = symbol


class TruncatedStreamError(HuffmanError):
    pass


class EmptyModelError(HuffmanError):
    pass


class SourceUnavailableError(HuffmanError):
    pass


def symbol_name(symbol: int) -> str:
    if symbol == PSEUDO_EOF:
        return 'EOF'
    if 32 <= symbol < 127:
        return repr(chr(symbol))
    return f"0x{symbol:02x}"


class FrequencyMap:
    """Symbol -> count table backed by a dense list of SYMBOL_SPACE slots."""

    def __init__(self):
        self._counts: List[int] = [0] * SYMBOL_SPACE

    @staticmethod
    def _check_symbol(symbol: int):
        if not 0 <= symbol < SYMBOL_SPACE:
            raise ValueError(f"Symbol out of range: {symbol}")

    def put(self, symbol: int, count: int):
        self._check_symbol(symbol)
        if count <= 0:
            raise ValueError(f"Count must be positive, got {count} for {symbol_name(symbol)}")
        self._counts[symbol] = count

    def add(self, symbol: int, amount: int = 1):
        self._check_symbol(symbol)
        self.put(symbol, self._counts[symbol] + amount)

    def get(self, symbol: int) -> int:
        self._check_symbol(symbol)
        return self._counts[symbol]

    def contains_key(self, symbol: int) -> bool:
        return 0 <= symbol < SYMBOL_SPACE and self._counts[symbol] > 0

    def __contains__(self, symbol: int) -> bool:
        return self.contains_key(symbol)

    def keys(self) -> List[int]:
        return [s for s, count in enumerate(self._counts) if count]

    def items(self) -> List[Tuple[int, int]]:
        return [(s, count) for s, count in enumerate(self._counts) if count]

    def total(self) -> int:
        return sum(self._counts)

    def __len__(self) -> int:
        return sum(1 for count in self._counts if count)

    def __eq__(self, other):
        if not isinstance(other, FrequencyMap):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self):
        body = ', '.join(f"{symbol_name(s)}: {c}" for s, c in self.items())
        return f"FrequencyMap({{{body}}})"


def read_chunks(path: str, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise SourceUnavailableError(f"Cannot open {path}: {e.strerror or e}") from e

    with f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            yield chunk


def read_symbols(path: str, chunk_size: int = CHUNK_SIZE) -> Iterator[int]:
    for chunk in read_chunks(path, chunk_size):
        yield from chunk


def count_symbols(symbols: Iterable[int]) -> FrequencyMap:
    freq = FrequencyMap()
    for symbol in symbols:
        freq.add(symbol)
    freq.add(PSEUDO_EOF, 1)
    return freq


def build_frequency_map(source: str, is_file: bool = True) -> FrequencyMap:
    """
    Count every byte of the file at `source`, or, when `is_file` is false,
    every UTF-8 byte of the string `source` itself.
    """
    if is_file:
        return count_symbols(read_symbols(source))
    return count_symbols(source.encode('utf-8'))


class HuffmanNode:
    __slots__ = ('symbol', 'weight', 'zero', 'one')

    def __init__(self, symbol: int = NOT_A_CHAR, weight: int = 0,
                 zero: int = NO_CHILD, one: int = NO_CHILD):
        self.symbol = symbol
        self.weight = weight
        self.zero = zero
        self.one = one

    def is_leaf(self) -> bool:
        return self.symbol != NOT_A_CHAR

    def __repr__(self):
        if self.is_leaf():
            return f"Leaf({symbol_name(self.symbol)}, {self.weight})"
        return f"Node({self.weight}, zero={self.zero}, one={self.one})"


class HuffmanTree:
    """
    Arena of HuffmanNode objects. Children are referenced by their index in
    the arena; clear() drops every node at once.
    """

    def __init__(self):
        self.nodes: List[HuffmanNode] = []
        self.root: int = NO_CHILD

    def __enter__(self) -> 'HuffmanTree':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.clear()
        return False

    def add_leaf(self, symbol: int, weight: int) -> int:
        self.nodes.append(HuffmanNode(symbol, weight))
        return len(self.nodes) - 1

    def add_internal(self, zero: int, one: int) -> int:
        weight = self.nodes[zero].weight + self.nodes[one].weight
        self.nodes.append(HuffmanNode(NOT_A_CHAR, weight, zero, one))
        return len(self.nodes) - 1

    def node(self, handle: int) -> HuffmanNode:
        return self.nodes[handle]

    def is_leaf(self, handle: int) -> bool:
        return self.nodes[handle].is_leaf()

    def is_empty(self) -> bool:
        return self.root == NO_CHILD

    def leaf_count(self) -> int:
        return sum(1 for node in self.nodes if node.is_leaf())

    def leaf_depths(self) -> List[Tuple[int, int, int]]:
        """(symbol, weight, depth) for every leaf, zero branch first."""
        if self.is_empty():
            return []

        result = []
        stack = [(self.root, 0)]
        while stack:
            handle, depth = stack.pop()
            node = self.nodes[handle]
            if node.is_leaf():
                result.append((node.symbol, node.weight, depth))
            else:
                stack.append((node.one, depth + 1))
                stack.append((node.zero, depth + 1))
        return result

    def weighted_path_length(self) -> int:
        return sum(weight * depth for _, weight, depth in self.leaf_depths())

    def clear(self):
        self.nodes.clear()
        self.root = NO_CHILD


def build_encoding_tree(freq: FrequencyMap) -> HuffmanTree:
    """
    Greedily merge the two lightest nodes until one root remains. Ties on
    weight go to the most recently inserted node, so the same frequency map
    always yields the same tree.
    """
    if len(freq) == 0:
        raise EmptyModelError("Cannot build a Huffman tree from an empty frequency map")

    tree = HuffmanTree()
    heap: List[Tuple[int, int, int]] = []
    sequence = 0

    for symbol, count in freq.items():
        handle = tree.add_leaf(symbol, count)
        heap.append((count, -sequence, handle))
        sequence += 1
    heapq.heapify(heap)

    while len(heap) > 1:
        _, _, first = heapq.heappop(heap)
        _, _, second = heapq.heappop(heap)

        parent = tree.add_internal(first, second)
        heapq.heappush(heap, (tree.node(parent).weight, -sequence, parent))
        sequence += 1

    tree.root = heap[0][2]
    return tree


def build_encoding_map(tree: HuffmanTree) -> List[Optional[str]]:
    encoding_map: List[Optional[str]] = [None] * SYMBOL_SPACE
    if tree.is_empty():
        return encoding_map

    path: List[str] = []

    def traverse(handle: int):
        node = tree.node(handle)
        if node.is_leaf():
            encoding_map[node.symbol] = ''.join(path)
            return

        path.append('0')
        traverse(node.zero)
        path.pop()

        path.append('1')
        traverse(node.one)
        path.pop()

    traverse(tree.root)
    return encoding_map


def _lookup(encoding_map: List[Optional[str]], symbol: int) -> str:
    code = encoding_map[symbol] if 0 <= symbol < len(encoding_map) else None
    if code is None:
        raise UnencodableSymbolError(symbol)
    return code


def encode(source: Iterable[int], encoding_map: List[Optional[str]],
           writer: BitWriter, keep_bits: bool = True) -> Tuple[str, int]:
    """
    Write the code of every symbol from `source`, then the code of
    PSEUDO_EOF. Returns the emitted bits as a '0'/'1' string (empty unless
    `keep_bits`) and the number of bits written.
    """
    pieces: List[str] = []
    size = 0

    for symbol in source:
        code = _lookup(encoding_map, symbol)
        writer.write_bits(code)
        size += len(code)
        if keep_bits:
            pieces.append(code)

    eof = _lookup(encoding_map, PSEUDO_EOF)
    writer.write_bits(eof)
    size += len(eof)
    if keep_bits:
        pieces.append(eof)

    return ''.join(pieces), size


def decode(reader: BitReader, tree: HuffmanTree, output: Optional[BinaryIO] = None,
           keep_bits: bool = True, chunk_size: int = CHUNK_SIZE) -> Tuple[bytes, str]:
    """
    Walk the tree one bit at a time until the PSEUDO_EOF leaf is reached.
    Returns the decoded bytes and the consumed bits as a '0'/'1' string.
    Decoded bytes go to `output` every `chunk_size` symbols as they are produced.
    """
    if tree.is_empty():
        raise EmptyModelError("Cannot decode with an empty Huffman tree")

    decoded = bytearray()
    bits: List[str] = []
    root = tree.root

    # A lone leaf has an empty code: nothing to read.
    root_node = tree.node(root)
    if root_node.is_leaf():
        if root_node.symbol != PSEUDO_EOF:
            decoded.extend(bytes([root_node.symbol]) * root_node.weight)
            if output is not None:
                output.write(decoded)
        return bytes(decoded), ''

    current = root
    written = 0
    while True:
        node = tree.node(current)

        if node.symbol == PSEUDO_EOF:
            break

        if node.symbol != NOT_A_CHAR:
            decoded.append(node.symbol)
            current = root
            if output is not None and len(decoded) - written >= chunk_size:
                output.write(decoded[written:])
                written = len(decoded)
            continue

        if reader.eof():
            raise TruncatedStreamError(
                f"Bit stream ended before end-of-stream marker "
                f"({len(decoded)} symbols decoded, {reader.bits_read} bits read)")

        bit = reader.read_bit()
        if keep_bits:
            bits.append('1' if bit else '0')
        current = node.one if bit else node.zero

    if output is not None and written < len(decoded):
        output.write(decoded[written:])

    return bytes(decoded), ''.join(bits)
