"""Main CLI entry point for structkit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..cli.decode import decode_hex
from ..exceptions import StructkitError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the structkit CLI.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="structkit: Declarative Binary Record Codecs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  structkit --decode formats.py:Header 0200010002     Decode bytes as JSON
  structkit --decode formats.py:Header 0200 --sizes   Also show field sizes
  structkit --version                                 Show version
        """,
    )

    parser.add_argument(
        "--decode",
        nargs=2,
        metavar=("FILE:NAME", "HEX"),
        help="Decode hex bytes with codec NAME defined in FILE",
    )

    parser.add_argument(
        "--sizes",
        action="store_true",
        help="Show the size of each record field after decoding",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="structkit 0.1.0",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.decode:
        target, hex_data = args.decode
        file_name, sep, name = target.rpartition(":")
        if not sep or not file_name or not name:
            print(f"Error: Expected FILE:NAME, got {target!r}", file=sys.stderr)
            return 1

        file_path = Path(file_name)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            decode_hex(file_path, name, hex_data, show_sizes=args.sizes)
            return 0
        except StructkitError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
