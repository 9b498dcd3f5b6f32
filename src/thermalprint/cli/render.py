"""CLI tool for converting print node trees to printer commands."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from thermalprint.config import Settings, load_options, load_tree
from thermalprint.converter import print_nodes_to_escpos
from thermalprint.errors import ConversionError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a print node tree (JSON or YAML) to thermal printer commands.",
        prog="thermalprint-render",
    )
    parser.add_argument(
        "tree",
        type=Path,
        help="Path to the print node tree file",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("output.bin"),
        help="Output file path (default: output.bin)",
    )
    parser.add_argument(
        "--options",
        type=Path,
        dest="options_file",
        help="YAML file with conversion options",
    )
    parser.add_argument(
        "--adapter",
        choices=["escpos", "escbematech"],
        help="Command protocol (default: escpos)",
    )
    parser.add_argument(
        "--paper-width",
        type=int,
        help="Paper width in characters (default: 48)",
    )
    parser.add_argument(
        "--encoding",
        help="Code page for text (default: cp860)",
    )
    parser.add_argument(
        "--cut",
        choices=["full", "partial", "none"],
        help="Cut after printing (default: full)",
    )
    parser.add_argument(
        "--feed-before-cut",
        type=int,
        help="Lines to feed before cutting (default: 3)",
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        help="Write a hex dump instead of raw bytes",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log the tree and every emitted command",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for thermalprint-render CLI."""
    args = build_parser().parse_args(argv)
    settings = Settings()

    debug = args.debug or settings.debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.tree.exists():
        print(f"Error: Tree file not found: {args.tree}", file=sys.stderr)
        return 1

    overrides = {
        key: value
        for key, value in {
            "command_adapter": args.adapter,
            "paper_width": args.paper_width,
            "encoding": args.encoding,
            "cut": args.cut,
            "feed_before_cut": args.feed_before_cut,
        }.items()
        if value is not None
    }
    if debug:
        overrides["debug"] = True

    try:
        if args.options_file:
            options = load_options(args.options_file, settings, **overrides)
        else:
            options = settings.to_options(**overrides)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        print(f"Error loading options: {e}", file=sys.stderr)
        return 1

    try:
        tree = load_tree(args.tree)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        print(f"Error loading tree: {e}", file=sys.stderr)
        return 1

    try:
        output = asyncio.run(print_nodes_to_escpos(tree, options))
    except ConversionError as e:
        print(f"Error converting tree: {e}", file=sys.stderr)
        return 1

    try:
        if args.hex:
            args.output.write_text(output.hex(" ") + "\n")
        else:
            args.output.write_bytes(output)
        print(f"Wrote {len(output)} bytes to {args.output}")
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
