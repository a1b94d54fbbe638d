import heapq
import io
import os
import random
import shutil
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from bitstream import BitReader, BitWriter
from huffman import (FrequencyMap, PSEUDO_EOF, NOT_A_CHAR, NO_CHILD,
                     EmptyModelError, SourceUnavailableError, TruncatedStreamError,
                     UnencodableSymbolError, build_encoding_map, build_encoding_tree,
                     build_frequency_map, count_symbols, decode, encode, read_chunks)
from format import (ENTRY, MAGIC, PREFIX, VERSION, FileHeader, HeaderError, IntegrityError,
                    ChecksumReader, calculate_crc32, read_header, verify_integrity)
from archiver import (Archiver, compress_bytes, compress_string, compressed_name,
                      decompress_bytes, decompressed_name)
import main


SAMPLE = b"aabbbcc"
SAMPLE_BITS = "1010000111111110"


def reference_cost(weights):
    heap = list(weights)
    heapq.heapify(heap)
    cost = 0
    while len(heap) > 1:
        merged = heapq.heappop(heap) + heapq.heappop(heap)
        cost += merged
        heapq.heappush(heap, merged)
    return cost


def encode_to_bytes(data, encoding_map):
    output = io.BytesIO()
    with BitWriter(output) as writer:
        bits, size = encode(data, encoding_map, writer)
    return output.getvalue(), bits, size


class TestFrequencyMap(unittest.TestCase):
    def test_counts_and_sentinel(self):
        freq = count_symbols(SAMPLE)
        self.assertEqual(freq.items(), [(97, 2), (98, 3), (99, 2), (PSEUDO_EOF, 1)])
        self.assertEqual(len(freq), 4)

    def test_total_is_length_plus_one(self):
        for data in (b"", b"x", SAMPLE, bytes(range(256)) * 3):
            self.assertEqual(count_symbols(data).total(), len(data) + 1)

    def test_empty_input_has_only_sentinel(self):
        freq = count_symbols(b"")
        self.assertEqual(freq.keys(), [PSEUDO_EOF])
        self.assertEqual(freq.get(PSEUDO_EOF), 1)

    def test_sentinel_is_added_not_replaced(self):
        freq = count_symbols([PSEUDO_EOF])
        self.assertEqual(freq.get(PSEUDO_EOF), 2)

    def test_string_mode(self):
        freq = build_frequency_map("hello", is_file=False)
        self.assertEqual(freq.get(ord('l')), 2)
        self.assertEqual(freq.get(ord('h')), 1)
        self.assertEqual(freq.total(), 6)

    def test_file_mode(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "sample.txt")
            with open(path, 'wb') as f:
                f.write(SAMPLE)
            self.assertEqual(build_frequency_map(path), count_symbols(SAMPLE))

    def test_missing_file(self):
        with self.assertRaises(SourceUnavailableError):
            build_frequency_map("/nonexistent/input.txt")

    def test_invalid_entries(self):
        freq = FrequencyMap()
        with self.assertRaises(ValueError):
            freq.put(97, 0)
        with self.assertRaises(ValueError):
            freq.put(NOT_A_CHAR, 1)
        self.assertNotIn(97, freq)
        self.assertNotIn(1000, freq)


class TestEncodingTree(unittest.TestCase):
    def test_sample_codes(self):
        tree = build_encoding_tree(count_symbols(SAMPLE))
        codes = build_encoding_map(tree)
        self.assertEqual(codes[ord('b')], "0")
        self.assertEqual(codes[ord('a')], "10")
        self.assertEqual(codes[PSEUDO_EOF], "110")
        self.assertEqual(codes[ord('c')], "111")
        self.assertIsNone(codes[ord('d')])

    def test_heaviest_symbol_gets_shortest_code(self):
        codes = build_encoding_map(build_encoding_tree(count_symbols(SAMPLE)))
        lengths = [len(code) for code in codes if code is not None]
        self.assertEqual(len(codes[ord('b')]), min(lengths))
        self.assertEqual(len(codes[ord('b')]), 1)

    def test_tree_shape(self):
        tree = build_encoding_tree(count_symbols(b"abracadabra"))
        self.assertEqual(len(tree.nodes), 2 * tree.leaf_count() - 1)
        for node in tree.nodes:
            if node.is_leaf():
                self.assertEqual((node.zero, node.one), (NO_CHILD, NO_CHILD))
            else:
                self.assertEqual(node.symbol, NOT_A_CHAR)
                self.assertNotEqual(node.zero, NO_CHILD)
                self.assertNotEqual(node.one, NO_CHILD)
        self.assertEqual(tree.node(tree.root).weight, 12)

    def test_optimal_weighted_path_length(self):
        inputs = [SAMPLE, b"abracadabra", b"The quick brown fox jumps over the lazy dog",
                  bytes([1] * 40 + [2] * 20 + [3] * 10 + [4] * 5 + [5] * 2)]
        for data in inputs:
            freq = count_symbols(data)
            tree = build_encoding_tree(freq)
            weights = [count for _, count in freq.items()]
            self.assertEqual(tree.weighted_path_length(), reference_cost(weights))

    def test_known_cost(self):
        self.assertEqual(build_encoding_tree(count_symbols(SAMPLE)).weighted_path_length(), 16)

    def test_deterministic(self):
        freq = count_symbols(b"mississippi river")
        first = build_encoding_map(build_encoding_tree(freq))
        second = build_encoding_map(build_encoding_tree(freq))
        self.assertEqual(first, second)

    def test_prefix_property(self):
        random.seed(7)
        data = bytes(random.choice(b"abcdefgh  \n") for _ in range(2000))
        codes = [c for c in build_encoding_map(build_encoding_tree(count_symbols(data))) if c is not None]
        for i, a in enumerate(codes):
            for j, b in enumerate(codes):
                if i != j:
                    self.assertFalse(b.startswith(a), f"{a} is a prefix of {b}")

    def test_empty_model(self):
        with self.assertRaises(EmptyModelError):
            build_encoding_tree(FrequencyMap())

    def test_single_symbol_tree_is_leaf(self):
        freq = FrequencyMap()
        freq.put(ord('a'), 5)
        tree = build_encoding_tree(freq)
        self.assertTrue(tree.is_leaf(tree.root))
        codes = build_encoding_map(tree)
        self.assertEqual(codes[ord('a')], "")
        self.assertEqual([c for c in codes if c is not None], [""])

    def test_release(self):
        with build_encoding_tree(count_symbols(SAMPLE)) as tree:
            self.assertEqual(tree.leaf_count(), 4)
        self.assertTrue(tree.is_empty())
        self.assertEqual(tree.nodes, [])

    def test_release_on_error(self):
        tree = None
        with self.assertRaises(RuntimeError):
            with build_encoding_tree(count_symbols(SAMPLE)) as tree:
                raise RuntimeError("boom")
        self.assertEqual(tree.nodes, [])


class TestEncodeDecode(unittest.TestCase):
    def test_encode_sample(self):
        codes = build_encoding_map(build_encoding_tree(count_symbols(SAMPLE)))
        data, bits, size = encode_to_bytes(SAMPLE, codes)
        self.assertEqual(bits, SAMPLE_BITS)
        self.assertEqual(size, 16)
        self.assertEqual(data, b"\xa1\xfe")

    def test_decode_sample(self):
        tree = build_encoding_tree(count_symbols(SAMPLE))
        output = io.BytesIO()
        decoded, bits = decode(BitReader(io.BytesIO(b"\xa1\xfe")), tree, output)
        self.assertEqual(decoded, SAMPLE)
        self.assertEqual(bits, SAMPLE_BITS)
        self.assertEqual(output.getvalue(), SAMPLE)

    def test_empty_input(self):
        tree = build_encoding_tree(count_symbols(b""))
        self.assertTrue(tree.is_leaf(tree.root))
        codes = build_encoding_map(tree)
        self.assertEqual(codes[PSEUDO_EOF], "")

        data, bits, size = encode_to_bytes(b"", codes)
        self.assertEqual((data, bits, size), (b"", "", 0))

        decoded, bits = decode(BitReader(io.BytesIO(data)), tree)
        self.assertEqual((decoded, bits), (b"", ""))

    def test_repeated_symbol(self):
        freq = count_symbols(b"aaaa")
        tree = build_encoding_tree(freq)
        data, bits, _ = encode_to_bytes(b"aaaa", build_encoding_map(tree))
        self.assertEqual(bits, "11110")
        decoded, _ = decode(BitReader(io.BytesIO(data)), tree)
        self.assertEqual(decoded, b"aaaa")

    def test_single_leaf_real_symbol(self):
        freq = FrequencyMap()
        freq.put(ord('z'), 3)
        tree = build_encoding_tree(freq)
        decoded, bits = decode(BitReader(io.BytesIO(b"")), tree)
        self.assertEqual(decoded, b"zzz")
        self.assertEqual(bits, "")

    def test_table_without_sentinel(self):
        freq = FrequencyMap()
        freq.put(ord('z'), 3)
        codes = build_encoding_map(build_encoding_tree(freq))
        with self.assertRaises(UnencodableSymbolError) as ctx:
            encode_to_bytes(b"zzz", codes)
        self.assertEqual(ctx.exception.symbol, PSEUDO_EOF)

    def test_unencodable_symbol(self):
        codes = build_encoding_map(build_encoding_tree(count_symbols(b"abc")))
        with self.assertRaises(UnencodableSymbolError) as ctx:
            encode_to_bytes(b"abd", codes)
        self.assertEqual(ctx.exception.symbol, ord('d'))

    def test_truncated_stream(self):
        tree = build_encoding_tree(count_symbols(SAMPLE))
        with self.assertRaises(TruncatedStreamError):
            decode(BitReader(io.BytesIO(b"\xa1")), tree)

    def test_output_written_while_decoding(self):
        tree = build_encoding_tree(count_symbols(SAMPLE))
        output = io.BytesIO()
        with self.assertRaises(TruncatedStreamError):
            decode(BitReader(io.BytesIO(b"\xa1")), tree, output, chunk_size=2)
        self.assertEqual(output.getvalue(), b"aabb")

    def test_no_bits_at_all(self):
        tree = build_encoding_tree(count_symbols(SAMPLE))
        with self.assertRaises(TruncatedStreamError):
            decode(BitReader(io.BytesIO(b"")), tree)

    def test_round_trip_core(self):
        random.seed(42)
        inputs = [b"x", bytes(range(256)), bytes(random.getrandbits(8) for _ in range(4096)),
                  b"Lorem ipsum dolor sit amet " * 50]
        for data in inputs:
            tree = build_encoding_tree(count_symbols(data))
            payload, bits, size = encode_to_bytes(data, build_encoding_map(tree))
            self.assertEqual(len(payload), (size + 7) // 8)
            decoded, read_bits = decode(BitReader(io.BytesIO(payload)), tree)
            self.assertEqual(decoded, data)
            self.assertEqual(read_bits, bits)


class TestBitStream(unittest.TestCase):
    def test_msb_first_with_padding(self):
        output = io.BytesIO()
        writer = BitWriter(output)
        writer.write_bits("101")
        self.assertEqual(writer.padding, 5)
        writer.close()
        self.assertEqual(output.getvalue(), b"\xa0")
        self.assertEqual(writer.bits_written, 3)

    def test_full_byte(self):
        output = io.BytesIO()
        with BitWriter(output) as writer:
            writer.write_bits("01000001")
        self.assertEqual(output.getvalue(), b"A")
        self.assertEqual(writer.padding, 0)

    def test_write_after_close(self):
        writer = BitWriter(io.BytesIO())
        writer.close()
        with self.assertRaises(ValueError):
            writer.write_bit(1)

    def test_reader(self):
        reader = BitReader(io.BytesIO(b"\x80\x01"), buffer_size=1)
        bits = []
        while not reader.eof():
            bits.append(reader.read_bit())
        self.assertEqual(bits, [1] + [0] * 14 + [1])
        self.assertEqual(reader.bits_read, 16)
        with self.assertRaises(EOFError):
            reader.read_bit()


class TestHeaderFormat(unittest.TestCase):
    def setUp(self):
        self.header = FileHeader(frequencies=count_symbols(SAMPLE), crc32=calculate_crc32(SAMPLE))

    def test_round_trip(self):
        data = self.header.serialize()
        self.assertEqual(len(data), FileHeader.size_for(4))
        parsed = FileHeader.deserialize(data)
        self.assertEqual(parsed.frequencies, self.header.frequencies)
        self.assertEqual(parsed.crc32, self.header.crc32)
        self.assertEqual(parsed.original_size, len(SAMPLE))

    def test_stream_leaves_payload(self):
        stream = io.BytesIO(self.header.serialize() + b"payload")
        read_header(stream)
        self.assertEqual(stream.read(), b"payload")

    def test_bad_magic(self):
        data = self.header.serialize()
        with self.assertRaises(HeaderError):
            FileHeader.deserialize(b"XXXX" + data[4:])

    def test_bad_version(self):
        data = bytearray(self.header.serialize())
        data[4] = VERSION + 1
        with self.assertRaises(HeaderError):
            FileHeader.deserialize(bytes(data))

    def test_truncated(self):
        data = self.header.serialize()
        with self.assertRaises(HeaderError):
            FileHeader.deserialize(data[:-1])
        with self.assertRaises(HeaderError):
            read_header(io.BytesIO(data[:5]))

    def test_invalid_entries(self):
        cases = [
            PREFIX.pack(MAGIC, VERSION, 0, 0, 0),
            PREFIX.pack(MAGIC, VERSION, 0, 2, 0) + ENTRY.pack(300, 1) + ENTRY.pack(PSEUDO_EOF, 1),
            PREFIX.pack(MAGIC, VERSION, 0, 2, 0) + ENTRY.pack(97, 0) + ENTRY.pack(PSEUDO_EOF, 1),
            PREFIX.pack(MAGIC, VERSION, 0, 2, 0) + ENTRY.pack(PSEUDO_EOF, 1) + ENTRY.pack(PSEUDO_EOF, 1),
            PREFIX.pack(MAGIC, VERSION, 0, 1, 0) + ENTRY.pack(97, 4),
            PREFIX.pack(MAGIC, VERSION, 0, 1, 0) + ENTRY.pack(PSEUDO_EOF, 2),
        ]
        for data in cases:
            with self.assertRaises(HeaderError):
                FileHeader.deserialize(data)

    def test_crc32_verification(self):
        self.assertTrue(verify_integrity(self.header, SAMPLE))
        self.assertFalse(verify_integrity(self.header, b"aabbbcd"))
        self.assertFalse(verify_integrity(self.header, SAMPLE + b"c"))

    def test_checksum_reader(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "data.bin")
            data = bytes(range(256)) * 10
            with open(path, 'wb') as f:
                f.write(data)

            scan = ChecksumReader(read_chunks(path, chunk_size=100))
            freq = count_symbols(scan)
            self.assertEqual(scan.crc32, calculate_crc32(data))
            self.assertEqual(freq, count_symbols(data))


class TestInMemory(unittest.TestCase):
    def test_round_trip(self):
        random.seed(1)
        inputs = [b"", b"A", b"AAAA", SAMPLE, bytes(range(256)),
                  bytes(random.getrandbits(8) for _ in range(10 * 1024)),
                  b"The quick brown fox jumps over the lazy dog" * 20]
        for data in inputs:
            self.assertEqual(decompress_bytes(compress_bytes(data)), data)

    def test_empty_is_header_only(self):
        blob = compress_bytes(b"")
        self.assertEqual(len(blob), FileHeader.size_for(1))
        self.assertEqual(decompress_bytes(blob), b"")

    def test_string_mode(self):
        text = "héllo wörld"
        self.assertEqual(decompress_bytes(compress_string(text)), text.encode('utf-8'))

    def test_crc_mismatch(self):
        blob = bytearray(compress_bytes(b"hello world"))
        blob[8] ^= 0xff
        with self.assertRaises(IntegrityError):
            decompress_bytes(bytes(blob))

    def test_missing_payload(self):
        data = b"hello world"
        blob = compress_bytes(data)
        header_size = FileHeader.size_for(len(count_symbols(data)))
        with self.assertRaises(TruncatedStreamError):
            decompress_bytes(blob[:header_size])

    def test_cut_payload(self):
        data = b"Lorem ipsum dolor sit amet " * 40
        blob = compress_bytes(data)
        header_size = FileHeader.size_for(len(count_symbols(data)))
        for end in range(header_size, len(blob)):
            with self.assertRaises(TruncatedStreamError):
                decompress_bytes(blob[:end])


class TestNaming(unittest.TestCase):
    def test_compressed_name(self):
        self.assertEqual(compressed_name("example.txt"), "example.txt.huf")
        self.assertEqual(compressed_name("example.txt", ".hz"), "example.txt.hz")

    def test_decompressed_name(self):
        self.assertEqual(decompressed_name("example.txt.huf"), "example_unc.txt")
        self.assertEqual(decompressed_name("archive.tar.gz.huf"), "archive_unc.tar.gz")
        self.assertEqual(decompressed_name("README.huf"), "README_unc")
        self.assertEqual(decompressed_name(".bashrc.huf"), ".bashrc_unc")
        self.assertEqual(decompressed_name("plain"), "plain_unc")
        self.assertEqual(decompressed_name(os.path.join("my.dir", "file.huf")),
                         os.path.join("my.dir", "file_unc"))
        self.assertEqual(decompressed_name("notes.md.hz", ".hz", "_out"), "notes_out.md")


class TestArchiver(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.archiver = Archiver(verbose=False, keep_bits=True)

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, name, data):
        path = os.path.join(self.temp_dir, name)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def test_compress_decompress_file(self):
        path = self._write("example.txt", SAMPLE)

        result = self.archiver.compress_file(path)
        self.assertEqual(result.output_path, path + ".huf")
        self.assertEqual(result.bits, SAMPLE_BITS)
        self.assertEqual(result.bit_count, 16)
        self.assertEqual(result.original_size, len(SAMPLE))
        self.assertEqual(result.compressed_size, os.path.getsize(result.output_path))

        restored = self.archiver.decompress_file(result.output_path)
        self.assertEqual(restored.output_path, os.path.join(self.temp_dir, "example_unc.txt"))
        self.assertEqual(restored.bits, SAMPLE_BITS)
        with open(restored.output_path, 'rb') as f:
            self.assertEqual(f.read(), SAMPLE)

    def test_large_file(self):
        data = b"Hello World! " * 5000
        path = self._write("large.txt", data)
        result = self.archiver.compress_file(path)
        self.assertLess(result.compressed_size, result.original_size)
        restored = self.archiver.decompress_file(result.output_path)
        with open(restored.output_path, 'rb') as f:
            self.assertEqual(f.read(), data)

    def test_empty_file(self):
        path = self._write("empty.txt", b"")
        result = self.archiver.compress_file(path)
        self.assertEqual(result.bits, "")
        restored = self.archiver.decompress_file(result.output_path)
        self.assertEqual(os.path.getsize(restored.output_path), 0)

    def test_missing_input(self):
        path = os.path.join(self.temp_dir, "missing.txt")
        with self.assertRaises(SourceUnavailableError):
            self.archiver.compress_file(path)
        self.assertFalse(os.path.exists(path + ".huf"))
        with self.assertRaises(SourceUnavailableError):
            self.archiver.decompress_file(path + ".huf")

    def test_corrupted_file_leaves_no_output(self):
        path = self._write("data.txt", b"some text to compress " * 20)
        result = self.archiver.compress_file(path)

        with open(result.output_path, 'r+b') as f:
            f.seek(8)
            f.write(b"\x00\x00\x00\x00")

        with self.assertRaises(IntegrityError):
            self.archiver.decompress_file(result.output_path)
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir, "data_unc.txt")))

    def test_compress_refuses_to_overwrite_input(self):
        path = self._write("example.txt", SAMPLE * 20)

        with self.assertRaises(SourceUnavailableError):
            Archiver(suffix='', verbose=False).compress_file(path)
        with self.assertRaises(SourceUnavailableError):
            self.archiver.compress_file(path, os.path.join(self.temp_dir, ".", "example.txt"))

        with open(path, 'rb') as f:
            self.assertEqual(f.read(), SAMPLE * 20)

    def test_decompress_refuses_to_overwrite_input(self):
        path = self._write("example.txt", SAMPLE * 20)
        compressed = self.archiver.compress_file(path).output_path
        with open(compressed, 'rb') as f:
            blob = f.read()

        with self.assertRaises(SourceUnavailableError):
            self.archiver.decompress_file(compressed, compressed)
        with open(compressed, 'rb') as f:
            self.assertEqual(f.read(), blob)

        with self.assertRaises(SourceUnavailableError):
            Archiver(fragment='', verbose=False).decompress_file(path)
        with open(path, 'rb') as f:
            self.assertEqual(f.read(), SAMPLE * 20)

        self.assertEqual(decompress_bytes(blob), SAMPLE * 20)

    def test_not_a_compressed_file(self):
        path = self._write("plain.txt.huf", b"this is not a compressed file")
        with self.assertRaises(HeaderError):
            self.archiver.decompress_file(path)

    def test_inspect_file(self):
        path = self._write("example.txt", SAMPLE)
        result = self.archiver.compress_file(path)
        stats = self.archiver.inspect_file(result.output_path)
        self.assertEqual([(s.symbol, s.count, s.code) for s in stats],
                         [(97, 2, "10"), (98, 3, "0"), (99, 2, "111"), (PSEUDO_EOF, 1, "110")])

        out = io.StringIO()
        with redirect_stdout(out):
            self.archiver.list_file(result.output_path)
        self.assertIn("4 symbols, 7 bytes, 16 payload bits", out.getvalue())


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_compress_and_decompress(self):
        path = os.path.join(self.temp_dir, "notes.txt")
        with open(path, 'wb') as f:
            f.write(b"Content of notes\n" * 30)

        self.assertEqual(main.main(['-q', 'compress', path]), 0)
        self.assertTrue(os.path.isfile(path + ".huf"))

        self.assertEqual(main.main(['-q', 'decompress', path + ".huf"]), 0)
        with open(os.path.join(self.temp_dir, "notes_unc.txt"), 'rb') as f:
            self.assertEqual(f.read(), b"Content of notes\n" * 30)

        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main.main(['info', path + ".huf"]), 0)
        self.assertIn("EOF", out.getvalue())

    def test_missing_file(self):
        err = io.StringIO()
        with redirect_stderr(err):
            code = main.main(['-q', 'compress', os.path.join(self.temp_dir, "nope.txt")])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err.getvalue())

    def test_output_onto_input(self):
        path = os.path.join(self.temp_dir, "notes.txt")
        with open(path, 'wb') as f:
            f.write(b"keep me\n" * 10)

        with redirect_stderr(io.StringIO()):
            self.assertEqual(main.main(['-q', 'compress', path, '-o', path]), 1)
            self.assertEqual(main.main(['-q', '--suffix', '', 'compress', path]), 1)

        with open(path, 'rb') as f:
            self.assertEqual(f.read(), b"keep me\n" * 10)

    def test_no_command(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main.main([]), 0)


def run_tests():
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestFrequencyMap))
    suite.addTests(loader.loadTestsFromTestCase(TestEncodingTree))
    suite.addTests(loader.loadTestsFromTestCase(TestEncodeDecode))
    suite.addTests(loader.loadTestsFromTestCase(TestBitStream))
    suite.addTests(loader.loadTestsFromTestCase(TestHeaderFormat))
    suite.addTests(loader.loadTestsFromTestCase(TestInMemory))
    suite.addTests(loader.loadTestsFromTestCase(TestNaming))
    suite.addTests(loader.loadTestsFromTestCase(TestArchiver))
    suite.addTests(loader.loadTestsFromTestCase(TestCommandLine))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
