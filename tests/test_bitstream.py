from bitstream import pack_bits, path_to_code, walk_bits
from huffman import Inner, Leaf, build_huffman_tree, generate_codes


def pack(data, paths, chunk=4096):
    chunks = [data[i:i + chunk] for i in range(0, len(data), chunk)]
    return b"".join(pack_bits(chunks, paths))


def walk(root, payload, chunk=4096):
    chunks = [payload[i:i + chunk] for i in range(0, len(payload), chunk)]
    return b"".join(walk_bits(root, chunks))


def test_path_to_code_stores_first_step_in_bit_zero():
    assert path_to_code([True, False, False]) == (0b001, 3)
    assert path_to_code([False, False, True]) == (0b100, 3)
    assert path_to_code([]) == (0, 0)


def test_packing_is_lsb_first_and_zero_padded():
    paths = {0x41: [False], 0x42: [True]}
    assert pack(b"AAB", paths) == bytes([0x04])


def test_full_bytes_need_no_padding():
    paths = {0x41: [False], 0x42: [True]}
    assert pack(b"BABABABA", paths) == bytes([0b01010101])


def test_codes_straddle_byte_boundaries():
    paths = {0x61: [True, True, True], 0x62: [False, True]}
    # aaa b -> 111 111 111 01 -> bits 0..10
    assert pack(b"aaab", paths) == bytes([0xFF, 0b00000101])


def test_one_output_piece_per_input_chunk():
    paths = {0x41: [False], 0x42: [True]}
    pieces = list(pack_bits([b"AAAA", b"BBBB", b"A"], paths))
    assert pieces == [b"", bytes([0xF0]), b"", bytes([0x00])]


def test_example_payload_decodes_exactly():
    root = Inner(Leaf(0x41, 2), Leaf(0x42, 1))
    assert walk(root, bytes([0x04])) == b"AAB"


def test_count_guard_drops_pad_bit_symbols():
    # five trailing zero pad bits would otherwise decode as five more 'A's
    root = Inner(Leaf(0x41, 2), Leaf(0x42, 1))
    out = walk(root, bytes([0x04]))
    assert len(out) == 3
    assert root.left.count == 0
    assert root.right.count == 0


def test_walk_spans_chunk_boundaries():
    freq = [0] * 256
    data = b"abracadabra" * 50
    for b in data:
        freq[b] += 1
    paths = generate_codes(build_huffman_tree(freq))
    payload = pack(data, paths)
    assert walk(build_huffman_tree(freq), payload, chunk=3) == data


def test_walk_of_empty_tree_yields_nothing():
    assert walk(None, b"") == b""


def test_walk_stopping_mid_code_is_silent():
    root = Inner(Leaf(0x01, 1), Inner(Leaf(0x02, 0), Leaf(0x03, 0)))
    # bit0=0 -> 0x01, bit1=1 -> into the right subtree, then only pad leaves
    assert walk(root, bytes([0b00000010])) == b"\x01"
