"""
Command line front end for the fixed-table Huffman codec
"""

import argparse
import sys

from huffman import Huffman
from huffman_errors import HuffmanError
from huffman_table import HuffmanTable


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="huffman-codec",
        description="Compress or decompress a file with a fixed Huffman code table",
    )
    ap.add_argument("mode", choices=["compress", "decompress"])
    ap.add_argument("input", help="path to the input file")
    ap.add_argument("output", help="path to the output file")
    ap.add_argument(
        "--table",
        required=True,
        help="JSON table: values/bit_counts arrays or a sparse codes dict, "
        "optionally with terminal_code",
    )
    ap.add_argument(
        "--validate",
        action="store_true",
        help="reject tables with overlapping prefixes",
    )
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        table, terminal_code = HuffmanTable.load_json(args.table)
        codec = Huffman(table, terminal_code, validate=args.validate)
        if args.mode == "compress":
            codec.compress_file(args.input, args.output, verbose=args.verbose)
        else:
            codec.decompress_file(args.input, args.output, verbose=args.verbose)
    except HuffmanError as e:
        print(f"[{args.mode}] error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"[{args.mode}] wrote {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
