"""
CLI entry point for guidelint.

Usage:
    guidelint [PATH ...]                  Lint files/directories (default: .)
    guidelint src --format json           JSON output
    guidelint src --output report.txt     Write report to a file
    guidelint --select N --ignore N012    Only naming rules, minus N012
    guidelint --list-rules                Show every rule

Exit codes:
    0  no violations at or above --fail-on
    1  violations at or above --fail-on
    2  configuration or usage error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from guidelint import __version__
from guidelint.config import ConfigError, load_settings
from guidelint.rules.registry import builtin_rules
from guidelint.runner import run
from guidelint.scanner.languages import PROFILES

logger = logging.getLogger("guidelint")

EXIT_USAGE = 2


def _split_ids(values: Optional[list[str]]) -> Optional[list[str]]:
    """Accept both `--select N001 --select F` and `--select N001,F`."""
    if not values:
        return None
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guidelint",
        description=f"guidelint v{__version__} - naming, formatting and comment style checker",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        default=[Path(".")],
        help="Files or directories to lint (default: current directory)",
    )
    parser.add_argument("--config", type=Path, help="Path to a .guidelint.yaml file")
    parser.add_argument(
        "--format",
        choices=["human", "json"],
        default="human",
        help="Output format (default: human)",
    )
    parser.add_argument("--output", "-o", type=Path, help="Write the report to this file")
    parser.add_argument("--select", action="append", metavar="IDS", help="Only run rules matching these ID prefixes")
    parser.add_argument("--ignore", action="append", metavar="IDS", help="Skip rules matching these ID prefixes")
    parser.add_argument(
        "--fail-on",
        choices=["error", "warning", "info", "hint"],
        help="Lowest severity that causes a non-zero exit (default: error)",
    )
    parser.add_argument(
        "--language",
        choices=sorted(PROFILES),
        help="Treat every source file as this language",
    )
    parser.add_argument("--no-docs", action="store_true", help="Skip Markdown documents")
    parser.add_argument("--list-rules", action="store_true", help="List available rules and exit")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"guidelint {__version__}")
    return parser


def configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def list_rules() -> str:
    lines = []
    for rule in builtin_rules():
        lines.append(f"{rule.rule_id}  {rule.severity.value:<7}  {rule.name:<22}  {rule.description}")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if args.list_rules:
        print(list_rules())
        return 0

    overrides = {
        "language": args.language,
        "fail_on": args.fail_on,
        "select": _split_ids(args.select),
        "ignore": _split_ids(args.ignore),
        "check_docs": False if args.no_docs else None,
    }

    try:
        settings = load_settings(args.config, overrides)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        reporter = run(args.paths, settings)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    reporter.write(args.format, path=args.output)
    if args.output:
        logger.info(f"Report written to {args.output}")

    return reporter.exit_code(settings.fail_on)


if __name__ == "__main__":
    raise SystemExit(main())
