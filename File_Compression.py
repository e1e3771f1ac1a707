import io
import os

import numpy as np

from bitstream import pack_bits, walk_bits
from huffman import FormatError, HuffmanError, build_huffman_tree, deserialize_tree, serialize_tree

MAGIC = bytes([0x7B, 0x68, 0x75, 0x7C, 0x6D, 0x7D, 0x66, 0x66])
HUFF_SUFFIX = ".huff"
CHUNK_SIZE = 4096


class FileError(HuffmanError):
    """A file could not be opened, read or written."""


### FREQUENCY COUNTING ###
def frequency_of(data):
    """Counts every byte value (0-255) in a bytes-like object."""
    return np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=256).astype(np.uint64)


def byte_stream(path, chunk_size=CHUNK_SIZE):
    """Yields the file's content in chunks."""
    try:
        with open(path, "rb") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                yield chunk
    except OSError as e:
        raise FileError(f"cannot read {path}: {e}") from e


def frequency_table(path):
    """Returns a 256-entry uint64 table of byte occurrences in the file."""
    table = np.zeros(256, dtype=np.uint64)
    for chunk in byte_stream(path):
        table += frequency_of(chunk)
    return table


def _chunks_of(data, chunk_size=CHUNK_SIZE):
    view = memoryview(data)
    for start in range(0, len(view), chunk_size):
        yield bytes(view[start:start + chunk_size])


### STREAM CODEC ###
def encode_stream(freq, chunks, sink):
    """
    Writes magic, tree header and packed payload to a binary sink.

    ``freq`` must describe exactly the bytes produced by ``chunks``.
    Returns the number of bytes written.
    """
    root = build_huffman_tree(freq)
    header, paths = serialize_tree(root)

    written = sink.write(MAGIC) + sink.write(header)
    try:
        for packed in pack_bits(chunks, paths):
            written += sink.write(packed)
    except KeyError as e:
        raise FileError(f"input changed while it was being compressed (byte {e.args[0]:#04x})") from e
    return written


def decode_stream(source, sink):
    """
    Reads a .huff stream from a binary source and writes the original bytes.

    The whole header is validated before anything reaches the sink.
    Returns the number of bytes written.
    """
    if source.read(len(MAGIC)) != MAGIC:
        raise FormatError("missing .huff magic preamble")
    root = deserialize_tree(source)

    def payload():
        while True:
            chunk = source.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk

    written = 0
    for decoded in walk_bits(root, payload()):
        if decoded:
            written += sink.write(decoded)
    return written


def compress_bytes(data):
    """In-memory counterpart of compress_file."""
    out = io.BytesIO()
    encode_stream(frequency_of(data), _chunks_of(data), out)
    return out.getvalue()


def decompress_bytes(blob):
    """In-memory counterpart of decompress_file."""
    out = io.BytesIO()
    decode_stream(io.BytesIO(blob), out)
    return out.getvalue()


### FILE CODEC ###
def _write_atomically(output_path, produce):
    """Runs ``produce(sink)`` against a temporary file and moves it into place on success."""
    tmp_path = output_path + ".part"
    try:
        with open(tmp_path, "wb") as sink:
            result = produce(sink)
        os.replace(tmp_path, output_path)
        return result
    except OSError as e:
        raise FileError(f"{output_path}: {e}") from e
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


def compress_file(input_path, output_path=None):
    """
    Compresses ``input_path`` into ``output_path`` (default ``<input>.huff``).

    The input is read twice: once for the frequency table, once for the payload.
    Returns the output path.
    """
    if output_path is None:
        output_path = input_path + HUFF_SUFFIX

    freq = frequency_table(input_path)
    _write_atomically(output_path, lambda sink: encode_stream(freq, byte_stream(input_path), sink))
    return output_path


def decompress_file(input_path, output_path=None):
    """
    Restores the original file from ``input_path``.

    The default output path strips the .huff suffix. A malformed header raises
    FormatError and leaves no output file behind. Returns the output path.
    """
    if output_path is None:
        if not input_path.endswith(HUFF_SUFFIX) or len(input_path) == len(HUFF_SUFFIX):
            raise ValueError(f"{input_path!r} does not end in {HUFF_SUFFIX}")
        output_path = input_path[:-len(HUFF_SUFFIX)]

    try:
        source = open(input_path, "rb")
    except OSError as e:
        raise FileError(f"cannot read {input_path}: {e}") from e

    with source:
        _write_atomically(output_path, lambda sink: decode_stream(source, sink))
    return output_path
