from huffman import Leaf


### BIT PACKING ###
def path_to_code(path):
    """Turns a path into ``(value, length)`` with step i stored in bit i."""
    value = 0
    for i, step in enumerate(path):
        if step:
            value |= 1 << i
    return value, len(path)


def pack_bits(chunks, paths):
    """
    Re-encodes byte chunks with the code table, packing bits LSB-first.

    Yields one bytes object per input chunk (possibly empty) and, if bits are
    left over at the end, a final byte padded with zero (left) steps.
    """
    codes = {symbol: path_to_code(path) for symbol, path in paths.items()}
    buffer = 0
    bit_count = 0

    for chunk in chunks:
        packed = bytearray()
        for byte in chunk:
            value, length = codes[byte]
            buffer |= value << bit_count
            bit_count += length
            while bit_count >= 8:
                packed.append(buffer & 0xFF)
                buffer >>= 8
                bit_count -= 8
        yield bytes(packed)

    if bit_count > 0:
        yield bytes([buffer & 0xFF])


### BIT WALKING ###
def walk_bits(root, chunks):
    """
    Replays a packed payload against the tree, yielding decoded bytes per chunk.

    Each leaf's count is spent as it is emitted; a leaf reached with nothing
    left is a pad-bit artefact and produces no output. A walk left mid-code
    when the payload ends is dropped.
    """
    if root is None:
        return

    node = root
    for chunk in chunks:
        decoded = bytearray()
        for byte in chunk:
            for i in range(8):
                node = node.right if (byte >> i) & 1 else node.left
                if isinstance(node, Leaf):
                    if node.count > 0:
                        decoded.append(node.symbol)
                        node.count -= 1
                    node = root
        yield bytes(decoded)
