"""Constants and settings loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from k6r.domain.errors import ConfigError

REPORT_TITLE = "K6 Load Test Report"
REPORT_SUFFIX = ".md"

# Looked up in the working directory when --config is not given
CONFIG_FILE = ".k6r.yaml"

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

CONSOLE_BACKENDS = ("auto", "rich", "plain")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    """User settings for the command-line tool."""

    console: str = "auto"
    log_level: str = "INFO"
    log_file: Path | None = None

    @property
    def log_level_value(self) -> int:
        level: int = logging.getLevelName(self.log_level)
        return level


def config_file(project_root: Path) -> Path:
    """Return the default settings file path for a directory."""
    return project_root / CONFIG_FILE


def _settings_from_dict(d: dict[str, Any], source: Path) -> Settings:
    console = str(d.get("console", "auto")).lower()
    if console not in CONSOLE_BACKENDS:
        raise ConfigError(f"{source}: console must be one of {', '.join(CONSOLE_BACKENDS)}")

    log_level = str(d.get("log_level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"{source}: log_level must be one of {', '.join(LOG_LEVELS)}")

    log_file = d.get("log_file")
    return Settings(
        console=console,
        log_level=log_level,
        log_file=None if log_file is None else Path(str(log_file)).expanduser(),
    )


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from YAML.

    With an explicit ``path`` the file must exist. Without one, the
    default file in the working directory is used when present and
    built-in defaults otherwise.
    """
    explicit = path is not None
    source = path if path is not None else config_file(Path.cwd())

    if not source.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {source}")
        return Settings()

    try:
        data = yaml.safe_load(source.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config '{source}': {exc}") from exc

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping at the top level")
    return _settings_from_dict(data, source)
