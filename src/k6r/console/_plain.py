"""k6r.console._plain -- Plain-text fallback backend.

Used when Rich is not wanted or stderr is not a TTY.
"""

from __future__ import annotations

import sys


class PlainBackend:
    """ConsoleProtocol implementation using only built-in print()."""

    def _emit(self, text: str) -> None:
        print(text, file=sys.stderr)

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        self._emit(message)

    def success(self, message: str) -> None:
        self._emit(message)

    def warning(self, message: str) -> None:
        self._emit(f"warning: {message}")

    def error(self, message: str) -> None:
        self._emit(f"error: {message}")

    # -- Structured output --------------------------------------------------

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        if title:
            self._emit(f"{title}:")
        if not data:
            return
        max_key = max(len(k) for k in data)
        for k, v in data.items():
            self._emit(f"  {k.rjust(max_key)}: {v}")
