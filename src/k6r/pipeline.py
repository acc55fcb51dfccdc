"""Detector-driven conversion from raw k6 output to a Markdown report."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from k6r.config import REPORT_SUFFIX
from k6r.domain.errors import ReportIOError
from k6r.domain.models import InputFormat, Summary
from k6r.parsing.detector import detect_format
from k6r.parsing.events import parse_event_log
from k6r.parsing.summary import parse_summary
from k6r.report.renderer import render_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conversion:
    """Result of converting one input."""

    format: InputFormat
    summary: Summary
    markdown: str


FormatCallback = Callable[[InputFormat], None]


def parse_input(
    text: str, on_detect: FormatCallback | None = None
) -> tuple[InputFormat, Summary]:
    """Detect the input shape and parse it with the matching parser.

    ``on_detect`` is called with the detected format before parsing starts.
    Raises ParseError for a malformed handleSummary document. Event logs
    never fail.
    """
    fmt = detect_format(text)
    logger.info("Detected format: %s", fmt.label)
    if on_detect is not None:
        on_detect(fmt)
    if fmt is InputFormat.STRUCTURED_SUMMARY:
        return fmt, parse_summary(text)
    return fmt, parse_event_log(text)


def convert(text: str, on_detect: FormatCallback | None = None) -> Conversion:
    """Turn raw k6 output into a rendered report."""
    fmt, summary = parse_input(text, on_detect)
    return Conversion(format=fmt, summary=summary, markdown=render_report(summary))


def default_output_path(input_path: Path) -> Path:
    """The input path with its extension replaced by ``.md``."""
    return input_path.with_suffix(REPORT_SUFFIX)


def read_input(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportIOError(f"Failed to read '{path}': {exc}", path) from exc


def write_report(path: Path, markdown: str) -> None:
    try:
        path.write_text(markdown, encoding="utf-8")
    except OSError as exc:
        raise ReportIOError(f"Failed to write '{path}': {exc}", path) from exc


def convert_file(
    input_path: Path,
    output_path: Path | None = None,
    on_detect: FormatCallback | None = None,
) -> tuple[Conversion, Path]:
    """Convert ``input_path`` and write the report.

    Returns the conversion and the path the report was written to. Nothing
    is written when reading or parsing fails.
    """
    target = output_path if output_path is not None else default_output_path(input_path)
    text = read_input(input_path)
    result = convert(text, on_detect)
    write_report(target, result.markdown)
    logger.info("Wrote %d bytes to %s", len(result.markdown.encode("utf-8")), target)
    return result, target
