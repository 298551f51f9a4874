"""
CLI for subsheet.

    subsheet payload.txt -o subscription_data.xlsx
    cat payload.txt | subsheet
"""

from __future__ import annotations

import argparse
import copy
import logging
import sys
from pathlib import Path

from .config import get_config
from .converter import convert
from .errors import ConversionError
from .excel_export import write_workbook


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="subsheet",
        description="Convert a subscription JSON payload into a two-sheet Excel workbook",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input file with the JSON payload (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Workbook to write (default from config: subscription_data.xlsx)",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on malformed serversTopology entries instead of skipping them",
    )

    parser.add_argument(
        "--no-unwrap",
        action="store_false",
        dest="unwrap",
        default=None,
        help="Do not strip HTML markup around the payload",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="More logging (-v info, -vv debug)",
    )

    return parser.parse_args(args)


def configure_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")


def read_input(filepath: str | None) -> str:
    """Read from file or stdin."""
    if filepath:
        return Path(filepath).read_text(encoding="utf-8")
    return sys.stdin.read()


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)

    cfg = copy.deepcopy(get_config())
    if parsed.strict is not None:
        cfg.topology.strict = parsed.strict
    if parsed.unwrap is not None:
        cfg.input.unwrap_markup = parsed.unwrap
    output = Path(parsed.output or cfg.export.output_file)

    try:
        content = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        result = convert(content, cfg)
        write_workbook(result, output)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error writing {output}: {e}", file=sys.stderr)
        return 1

    print(f"Excel file created successfully: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
