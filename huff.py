import os
import sys

from File_Compression import HUFF_SUFFIX, compress_file, decompress_file
from huffman import HuffmanError


def _report(input_path, output_path):
    original_size = os.path.getsize(input_path)
    new_size = os.path.getsize(output_path)
    print(f"{input_path} ({original_size} bytes) -> {output_path} ({new_size} bytes)")
    if original_size:
        change = 100 * (1 - new_size / original_size)
        print(f"Size change: {change:.2f}% reduction.")


def encode_main(argv=None):
    """Entry point of ``huff-encode <file>``: writes ``<file>.huff``."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Argument Error")
        return 2

    try:
        output_path = compress_file(args[0])
        _report(args[0], output_path)
    except (HuffmanError, OSError):
        print("File Error")
        return 1
    return 0


def decode_main(argv=None):
    """Entry point of ``huff-decode <file>.huff``: writes ``<file>``."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1 or not args[0].endswith(HUFF_SUFFIX) or len(args[0]) <= len(HUFF_SUFFIX):
        print("Argument Error")
        return 2

    try:
        output_path = decompress_file(args[0])
        _report(args[0], output_path)
    except (HuffmanError, OSError):
        print("File Error")
        return 1
    return 0


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] in ("encode", "decode"):
        main = encode_main if sys.argv[1] == "encode" else decode_main
        sys.exit(main(sys.argv[2:]))
    print("Argument Error")
    sys.exit(2)
