"""Errors raised by the k6r pipeline."""

from __future__ import annotations

from pathlib import Path


class K6rError(Exception):
    """Base class for every error the CLI reports to the user."""


class ParseError(K6rError):
    """Raised when a structured summary does not match the expected shape."""


class ConfigError(K6rError):
    """Raised when a settings file cannot be used."""


class ReportIOError(K6rError):
    """Raised when the input cannot be read or the report cannot be written."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path
