"""Sniff which k6 output shape a piece of text is."""

from __future__ import annotations

import logging

from k6r.domain.models import InputFormat
from k6r.parsing import _json

logger = logging.getLogger(__name__)


def detect_format(text: str) -> InputFormat:
    """Classify raw k6 output.

    A single JSON object with a top-level ``metrics`` key is a
    handleSummary export; anything else is treated as an NDJSON event log.
    Never raises.
    """
    trimmed = text.strip()
    if trimmed.startswith("{"):
        try:
            document = _json.loads(trimmed)
        except (ValueError, RecursionError):
            logger.debug("Input is not a single JSON document, assuming event log")
        else:
            if isinstance(document, dict) and "metrics" in document:
                return InputFormat.STRUCTURED_SUMMARY
    return InputFormat.EVENT_LOG
