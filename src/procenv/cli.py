"""Command line entry point for procenv."""

import argparse
import logging
import sys

from procenv.collector import ProcessCollector
from procenv.output import OutputFormat, emit_snapshot
from procenv.walker import PROC_ROOT


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="procenv",
        description="Snapshot the environment and command line of every visible process.",
    )
    parser.add_argument("--root", default=PROC_ROOT, help="procfs mount point (default: %(default)s)")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.JSON.value,
        help="output format (default: %(default)s)",
    )
    parser.add_argument("--indent", type=int, default=None, help="JSON indentation")
    parser.add_argument("--tui", action="store_true", help="browse the snapshot interactively")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log every skipped entry")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log warnings and errors")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the procenv command."""
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    collector = ProcessCollector(root=args.root)
    snapshot = collector.collect()

    if args.tui:
        from procenv.app import ProcenvApp

        ProcenvApp(snapshot=snapshot, collector=collector).run()
        return 0

    emit_snapshot(snapshot, sys.stdout, OutputFormat(args.output_format), indent=args.indent)
    return 0


if __name__ == "__main__":
    sys.exit(main())
