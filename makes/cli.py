"""Command-line interface for the make target picker."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import orjson

from makes import __version__
from makes.menu import select_target
from makes.models import MakesError
from makes.runner import discover_targets, run_target
from makes.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Sequence

    from makes.models import Target

logger = logging.getLogger(__name__)

PRODUCT_NAME = "makes"
PRODUCT_DESCRIPTION = "Interactively select make targets from a Makefile"


@dataclass
class Args:
    """Command-line arguments for the picker.

    Attributes:
        file: Makefile to read, None to use the configured default
        make: make executable, None to use the configured default
        max_size: Maximum number of menu rows, None to use the configured default
        list_only: Print the targets instead of opening the menu
        as_json: Print the targets as JSON instead of opening the menu
        verbose: Enable debug logging
    """

    file: str | None = None
    make: str | None = None
    max_size: int | None = None
    list_only: bool = False
    as_json: bool = False
    verbose: bool = False


def _menu_rows(value: str) -> int:
    """Parse a positive number of menu rows for argparse."""
    try:
        rows = int(value)
    except ValueError:
        rows = 0
    if rows < 1:
        msg = f"expected a positive integer, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return rows


def get_args(argv: list[str] | None = None) -> Args:
    """Parse command-line arguments and return Args dataclass."""
    parser = argparse.ArgumentParser(
        prog=PRODUCT_NAME,
        description=PRODUCT_DESCRIPTION,
        epilog="""
Environment Variables:
  MAKES_MAKE       - make executable (default: make)
  MAKES_MAKEFILE   - makefile to read (default: Makefile)
  MAKES_MAX_SIZE   - maximum number of menu rows (default: 10)
  MAKES_LOG_LEVEL  - logging level (default: WARNING)
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--file",
        "-f",
        help="Makefile to read and pass to make (default: $MAKES_MAKEFILE or Makefile)",
    )
    parser.add_argument(
        "--make",
        help="make executable to run (default: $MAKES_MAKE or make)",
    )
    parser.add_argument(
        "--max-size",
        type=_menu_rows,
        help="Maximum number of menu rows (default: $MAKES_MAX_SIZE or 10)",
    )
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--list",
        "-l",
        action="store_true",
        dest="list_only",
        help="List targets and their help instead of opening the menu",
    )
    output_group.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print targets as JSON instead of opening the menu",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return Args(**vars(parser.parse_args(argv)))


def setup_logging(level: str) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def list_targets(targets: Sequence[Target], *, as_json: bool) -> None:
    """Write the targets to stdout, one per line or as a JSON array."""
    if as_json:
        payload = orjson.dumps([t.to_dict() for t in targets], option=orjson.OPT_INDENT_2)
        sys.stdout.write(payload.decode() + "\n")
        return
    width = max((len(t.name) for t in targets), default=0)
    for target in targets:
        sys.stdout.write(f"{target.name:<{width}}  {target.help}".rstrip() + "\n")


def run(args: Args, settings: Settings) -> int:
    """Discover targets, let the operator choose one and build it.

    Returns:
        Exit status of the make run, 0 when only listing
    """
    started = time.perf_counter()
    version, targets = discover_targets(settings)

    if args.list_only or args.as_json:
        list_targets(targets, as_json=args.as_json)
        return 0

    sys.stdout.write(f"\n{version} (duration={time.perf_counter() - started:.3f}s)\n\n")
    sys.stdout.flush()
    target = select_target(targets, settings.max_size)

    sys.stdout.write(f"Running \"make {target.name}\" ...\n")
    sys.stdout.flush()
    return run_target(target.name, settings)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code of the selected make target, or 1 on failure
    """
    args = get_args(argv)
    settings = Settings()
    if args.file:
        settings.makefile = args.file
    if args.make:
        settings.make = args.make
    if args.max_size is not None:
        settings.max_size = args.max_size
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        return run(args, settings)
    except (MakesError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        return 1


if __name__ == "__main__":
    sys.exit(main())
