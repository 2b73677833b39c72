"""Command-line entry point: format template files."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from tqdm import tqdm

from regularfmt.diagnostics import LocatableError
from regularfmt.format import FormatOptions, run_format

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="regularfmt", description="Format regular templates")
    parser.add_argument("files", nargs="+", type=Path, metavar="FILE", help="Template files to format")
    parser.add_argument(
        "-w",
        "--write",
        action="store_true",
        help="Write the result back to each file instead of printing it",
    )
    parser.add_argument("-t", "--tab-size", type=_positive_int, default=2, help="Indent per level (default: 2)")
    parser.add_argument(
        "-p",
        "--print-width",
        type=_positive_int,
        default=80,
        help="Target line width (default: 80)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the tqdm progress bar when writing several files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log layout decisions to stderr")
    return parser


def format_file(path: Path, options: FormatOptions, *, write: bool) -> str:
    """Format one template file; returns the formatted text."""
    text = path.read_text(encoding="utf-8")
    result = run_format(text, options, source_name=str(path))
    if write and result.changed:
        path.write_text(result.formatted_text, encoding="utf-8")
        logger.debug("rewrote %s", path)
    return result.formatted_text


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    missing = [path for path in args.files if not path.is_file()]
    if missing:
        print(f"file: {missing[0]} does not exist", file=sys.stderr)
        return 1

    options = FormatOptions(print_width=args.print_width, tab_size=args.tab_size)
    files: list[Path] = args.files
    show_progress = args.write and len(files) > 1 and not args.no_progress
    iterator = tqdm(files, desc="formatting", unit="file") if show_progress else files
    for path in iterator:
        try:
            formatted = format_file(path, options, write=args.write)
        except LocatableError as err:
            print(f"{path}: {err.describe()}", file=sys.stderr)
            return 1
        except (OSError, UnicodeDecodeError) as err:
            print(f"file: {path} could not be processed: {err}", file=sys.stderr)
            return 1
        if not args.write:
            print(formatted)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
