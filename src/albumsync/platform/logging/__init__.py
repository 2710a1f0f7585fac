"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the configured logger, its settings and the Rich handler.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .config import DEFAULT_LOG_FILE, LOGGER_NAME, LogSettings, logger, parse_level, setup_logger
from .handlers import ReconcileRichHandler

__all__ = [
    "DEFAULT_LOG_FILE",
    "LOGGER_NAME",
    "LogSettings",
    "ReconcileRichHandler",
    "logger",
    "parse_level",
    "setup_logger",
]
