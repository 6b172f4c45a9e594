"""Command line entry point for profile analysis."""

from __future__ import annotations

import argparse
import logging
import sys

import yaml

from protoprofile.config import AnalyzeOptions
from protoprofile.errors import ProfileNotFoundError, ProtoProfileError
from protoprofile.profiling.loader import load_access_info
from protoprofile.registry import TypeRegistry
from protoprofile.report import analyze_profile, compile_filter, render_text, report_to_dict
from protoprofile.resolver import DEFAULT_NAMESPACE_SEPARATOR

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protoprofile",
        description="Report profile-guided storage optimizations for message fields.",
    )
    parser.add_argument("profile", help="Profile dataset (YAML or JSON)")
    parser.add_argument(
        "--schema",
        action="append",
        required=True,
        metavar="FILE",
        help="Schema YAML file; may be given more than once",
    )
    parser.add_argument(
        "--filter",
        default="",
        dest="message_filter",
        metavar="REGEX",
        help="Only report messages whose full name matches (default: all)",
    )
    parser.add_argument(
        "--all-fields", action="store_true", help="List every field, not only optimized ones"
    )
    parser.add_argument(
        "--analysis", action="store_true", help="Show presence and usage buckets"
    )
    parser.add_argument(
        "--unused-threshold",
        action="store_true",
        help="Print the unlikely-used threshold before the report",
    )
    parser.add_argument(
        "--separator",
        default=DEFAULT_NAMESPACE_SEPARATOR,
        help=f"Namespace separator in profiled names (default: {DEFAULT_NAMESPACE_SEPARATOR})",
    )
    parser.add_argument("--hot-ratio", type=float, default=None)
    parser.add_argument("--cold-ratio", type=float, default=None)
    parser.add_argument("--format", choices=["text", "yaml"], default="text")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        options = AnalyzeOptions(
            registry=TypeRegistry.from_files(args.schema),
            message_filter=args.message_filter,
            print_all_fields=args.all_fields,
            print_analysis=args.analysis,
            print_unused_threshold=args.unused_threshold,
            namespace_separator=args.separator,
            hot_ratio=args.hot_ratio,
            cold_ratio=args.cold_ratio,
        )
        options.validate()
        compile_filter(options.message_filter)
        report = analyze_profile(load_access_info(args.profile), options)
    except ProfileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except ProtoProfileError as e:
        print(f"error: {e}", file=sys.stderr)
        for detail in e.errors[1:]:
            print(f"  {detail}", file=sys.stderr)
        return EXIT_ERROR

    if args.format == "yaml":
        yaml.safe_dump(
            report_to_dict(report), sys.stdout, default_flow_style=False, sort_keys=False
        )
    else:
        render_text(report, sys.stdout, options)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
