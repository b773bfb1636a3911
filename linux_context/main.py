#!/usr/bin/env python3
"""
Main entry point for the Linux context gatherer.
"""

import sys
import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from . import __version__
from . import privilege
from .modules import COLLECTORS, COLLECTOR_NAMES, get_modules
from .ui.report import ReportGenerator

logger = logging.getLogger("linux_context")

# Collected when no collector flag is given
DEFAULT_COLLECTORS = ("identity", "system_info")


@dataclass(frozen=True)
class Options:
    """Parsed command line: which collectors run, and how."""

    collectors: Tuple[str, ...] = DEFAULT_COLLECTORS
    verbose: bool = False
    elevate: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gather-linux-context",
        description="Gather Linux system information as a plain-text report "
                    "for troubleshooting with a human or an AI assistant.",
        epilog="With no collector options, user identity and basic system information are collected.",
    )
    for collector in COLLECTORS:
        parser.add_argument(f"-{collector.flag}", f"--{collector.long_flag}", dest=collector.name,
                            action="store_true", help=collector.help)
    parser.add_argument("-a", "--all", action="store_true", help="Collect all information")
    parser.add_argument("-E", "--elevate", action="store_true",
                        help="Offer to re-run with sudo when not running as root")
    parser.add_argument("-V", "--verbose", action="store_true", help="Log progress to stderr")
    parser.add_argument("--version", action="store_true", help="Show version information")
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def build_options(args: argparse.Namespace) -> Options:
    """Turn parsed arguments into the collector selection."""
    if args.all:
        selected = tuple(COLLECTOR_NAMES)
    else:
        selected = tuple(name for name in COLLECTOR_NAMES if getattr(args, name))

    return Options(
        collectors=selected or DEFAULT_COLLECTORS,
        verbose=args.verbose,
        elevate=args.elevate,
    )


def setup_logging(verbose: bool) -> None:
    """Send logs to stderr so the report on stdout stays clean."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def check_root_privileges() -> bool:
    """Check if running with root privileges."""
    if not privilege.is_root():
        logger.warning("Not running as root. Some information may be unavailable.")
        logger.warning("Consider running with -E or under sudo for a complete report.")
        return False
    return True


def show_version():
    """Show version information."""
    print(f"gather-linux-context version {__version__}")


def run(options: Options, argv: List[str]) -> None:
    """Run the selected collectors and write the report to stdout."""
    if options.elevate:
        privilege.offer_elevation(argv)
    else:
        check_root_privileges()

    collectors = get_modules(options.collectors)
    logger.info(f"Running collectors: {', '.join(c.name for c in collectors)}")
    ReportGenerator(collectors).write()


def main(argv: Optional[List[str]] = None):
    """Main function."""
    if argv is None:
        argv = sys.argv[1:]
    args = parse_arguments(argv)

    if args.version:
        show_version()
        sys.exit(0)

    options = build_options(args)
    setup_logging(options.verbose)

    try:
        run(options, argv)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
