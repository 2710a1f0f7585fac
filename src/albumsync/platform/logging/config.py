"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Build the console and rotating-file handlers of the ``albumsync`` logger from ``LogSettings``.
Why: Let the CLI swap handlers after loading the user configuration without re-importing modules.
"""

from __future__ import annotations

import logging
import logging.handlers
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from rich.console import Console

from albumsync.config.paths import default_log_file

from .handlers import ReconcileRichHandler

LOGGER_NAME: Final[str] = "albumsync"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()
_FILE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_level(level: str | int) -> int:
    """Turn a level name such as ``"debug"`` into its ``logging`` constant.

    Raises:
        ValueError: If ``level`` names no logging level.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelNamesMapping().get(level.strip().upper())
    if value is None:
        raise ValueError(f"Unknown log level: {level!r}")
    return value


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Where the application logs and at which levels.

    Attributes:
        console_level: Threshold of the Rich console handler on stderr.
        file: Rotating log file, or None for console-only logging.
        file_level: Threshold of the file handler.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files kept next to the active one.
    """

    console_level: int = logging.INFO
    file: Path | None = None
    file_level: int = logging.DEBUG
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5


def _file_handler(settings: LogSettings, log_file: Path) -> logging.Handler:
    resolved = log_file.expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        resolved,
        maxBytes=max(settings.max_bytes, 0),
        backupCount=max(settings.backup_count, 0),
        encoding="utf-8",
    )
    handler.setLevel(settings.file_level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logger(settings: LogSettings | None = None) -> logging.Logger:
    """Replace the handlers of the application logger according to ``settings``.

    Handlers from an earlier call are closed first, so calling this again
    (as the CLI does once the configuration is loaded) never duplicates output.
    """
    settings = settings or LogSettings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = ReconcileRichHandler(console=Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(settings.console_level)
    logger.addHandler(console_handler)

    if settings.file is not None:
        logger.addHandler(_file_handler(settings, settings.file))
    return logger


# Console-only until the CLI attaches the configured log file.
logger: Final[logging.Logger] = setup_logger()


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "LogSettings", "logger", "parse_level", "setup_logger"]
