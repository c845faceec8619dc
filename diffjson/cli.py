"""Command line entry point: ``diffjson checkdiff --f1 A.json --f2 B.json``."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from diffjson.config import ConfigError, load_config
from diffjson.diff import DiffOptions, diff
from diffjson.loader import DocumentLoadError, load_document
from diffjson.report import ReportSerializationError, serialize_report

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="diffjson", description="Structural diff of JSON documents")
    subparsers = parser.add_subparsers(dest="command")

    checkdiff = subparsers.add_parser("checkdiff", help="Check diff between two JSON files")
    checkdiff.add_argument("--f1", required=True, help="First JSON file (required)")
    checkdiff.add_argument("--f2", required=True, help="Second JSON file (required)")
    checkdiff.add_argument(
        "--ignore-order",
        action="store_true",
        default=None,
        help="Ignore array element order (treat arrays as sets)",
    )
    checkdiff.add_argument("--config", help="YAML config file (default: $DIFFJSON_CONFIG or config/diffjson.yaml)")
    checkdiff.add_argument("--indent", type=int, help="Indentation of the JSON report")
    checkdiff.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    checkdiff.set_defaults(handler=run_checkdiff)
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_checkdiff(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Error loading config: {exc}", file=sys.stderr)
        return 1
    _configure_logging("DEBUG" if args.verbose else config.log_level)

    ignore_order = config.ignore_array_order if args.ignore_order is None else args.ignore_order
    indent = config.indent if args.indent is None else args.indent

    try:
        first = load_document(args.f1)
        second = load_document(args.f2)
    except DocumentLoadError as exc:
        print(exc, file=sys.stderr)
        return 1

    report = diff(first, second, args.f1, args.f2, DiffOptions(ignore_array_order=ignore_order))
    LOGGER.info("%s vs %s: %d difference(s)", args.f1, args.f2, len(report.records))

    try:
        output = serialize_report(report, indent=indent, ensure_ascii=config.ensure_ascii)
    except ReportSerializationError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(sys.stderr)
        return 1
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
