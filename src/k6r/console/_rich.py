"""k6r.console._rich -- Rich-based backend.

Coloured status output on standard error.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "info": "blue",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
    }
)


class RichBackend:
    """ConsoleProtocol implementation backed by Rich."""

    def __init__(self) -> None:
        self._con = Console(theme=_THEME, highlight=False, stderr=True)

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        self._con.print(escape(message), style="info")

    def success(self, message: str) -> None:
        self._con.print(f"✓ {escape(message)}", style="success")

    def warning(self, message: str) -> None:
        self._con.print(f"⚠ {escape(message)}", style="warning")

    def error(self, message: str) -> None:
        self._con.print(f"✗ {escape(message)}", style="error")

    # -- Structured output --------------------------------------------------

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        t = Table(
            title=title or None,
            box=box.SIMPLE,
            show_header=False,
            show_edge=False,
            pad_edge=True,
        )
        t.add_column("Key", style="bold", justify="right")
        t.add_column("Value")
        for k, v in data.items():
            t.add_row(escape(k), escape(v))
        self._con.print(t)
