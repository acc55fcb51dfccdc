"""k6r.console._protocol -- ConsoleProtocol definition.

Pure standard-library typing.Protocol. No external dependencies allowed
in this file.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleProtocol(Protocol):
    """Terminal output protocol for status messages.

    All output goes to standard error so that it never mixes with a
    report written to standard output::

        console.info("Detected format: handleSummary JSON")
        console.success("Report generated: report.md")
        console.error("Failed to read 'missing.json': ...")
    """

    def info(self, message: str) -> None:
        """Informational message."""
        ...

    def success(self, message: str) -> None:
        """Success / positive-outcome message."""
        ...

    def warning(self, message: str) -> None:
        """Warning message."""
        ...

    def error(self, message: str) -> None:
        """Error message."""
        ...

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        """Display key-value pairs."""
        ...
