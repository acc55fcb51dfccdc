#!/usr/bin/env python3
"""
k6r CLI -- convert k6 JSON output to a Markdown report.

Usage:
  k6r JSON_FILE [MARKDOWN_FILE] [--config PATH] [--console MODE]
                [--verbose | --quiet]

JSON_FILE is either a handleSummary export or an ``--out json`` event
log. MARKDOWN_FILE defaults to JSON_FILE with a ``.md`` extension.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from k6r import __version__
from k6r.config import CONSOLE_BACKENDS, LOG_FORMAT, Settings, load_settings
from k6r.console import configure, console
from k6r.domain.errors import K6rError
from k6r.domain.models import InputFormat
from k6r.pipeline import convert_file
from k6r.report.renderer import collect_checks

logger = logging.getLogger("k6r")

_handler: logging.Handler | None = None


def _setup_logging(settings: Settings, *, verbose: bool, quiet: bool) -> None:
    """Route k6r log records to the configured file, or to stderr."""
    global _handler  # noqa: PLW0603

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = settings.log_level_value

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setLevel(level)
    else:
        # Without a log file only problems reach the terminal unless asked.
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level if verbose else max(level, logging.WARNING))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()
    _handler = handler
    logger.addHandler(handler)
    logger.setLevel(level)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="k6r",
        description="Convert K6 JSON output to Markdown reports",
    )
    parser.add_argument(
        "input",
        metavar="JSON_FILE",
        type=Path,
        help="Input K6 JSON file (handleSummary or --out json format)",
    )
    parser.add_argument(
        "output",
        metavar="MARKDOWN_FILE",
        type=Path,
        nargs="?",
        default=None,
        help="Output Markdown file (defaults to input filename with .md extension)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")
    parser.add_argument(
        "--console",
        choices=CONSOLE_BACKENDS,
        default=None,
        help="Status output style (default: from settings, else auto)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def run(args: argparse.Namespace) -> None:
    """Read, convert and write one report, reporting progress on stderr."""
    result, output_path = convert_file(
        args.input,
        args.output,
        on_detect=lambda fmt: console.info(f"Detected format: {fmt.label}"),
    )
    summary = result.summary

    if result.format is InputFormat.EVENT_LOG and summary.state is None:
        console.warning("Run duration unavailable: no readable timestamps in event log")

    if args.verbose:
        console.kv(
            {
                "Metrics": str(len(summary.metrics)),
                "Checks": str(len(collect_checks(summary))),
                "Thresholds": str(sum(len(m.thresholds) for m in summary.metrics.values())),
            },
            title="Report contents",
        )
    console.success(f"Report generated: {output_path}")


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """Entry point for the `k6r` command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except K6rError as exc:
        configure(backend=args.console or "auto")
        console.error(str(exc))
        sys.exit(1)

    # -- Console configuration (status output) ------------------------------
    configure(backend=args.console or settings.console)

    # -- Logging configuration ----------------------------------------------
    _setup_logging(settings, verbose=args.verbose, quiet=args.quiet)

    try:
        run(args)
    except K6rError as exc:
        logger.info("Conversion failed: %s", exc)
        console.error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
