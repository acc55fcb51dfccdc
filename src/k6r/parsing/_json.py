"""Strict JSON decoding shared by the parsers."""

from __future__ import annotations

import json
from typing import Any


def _reject_constant(token: str) -> Any:
    raise ValueError(f"invalid JSON constant {token!r}")


def loads(text: str) -> Any:
    """Like json.loads, but NaN, Infinity and -Infinity are errors."""
    return json.loads(text, parse_constant=_reject_constant)
