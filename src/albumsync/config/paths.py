"""Shared path utilities for configuration and log locations.

Policy (portable by default):
- Config: ``ALBUMSYNC_CONFIG`` if set, else ``<repo_root>/config/config.toml``
- Logs: ``<repo_root>/logs/albumsync.log``
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


_ENV_CONFIG_FILE: Final[str] = "ALBUMSYNC_CONFIG"


def resolve_overridable_path(
    *,
    env: Mapping[str, str] | None,
    env_var: str,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a path from ``env_var`` when it is set and not blank, else from ``default_factory``."""

    mapping = env if env is not None else os.environ
    candidate = (mapping.get(env_var) or "").strip()
    if candidate:
        return Path(candidate).expanduser().resolve()

    return default_factory().expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Detect the repository root by walking up parents.

    Looks for ``pyproject.toml`` or ``.git``; falls back to the current
    working directory.
    """
    here = (start or Path(__file__).resolve()).parent
    for p in [here, *here.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return Path.cwd()


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the path to the TOML config file."""

    return resolve_overridable_path(
        env=env,
        env_var=_ENV_CONFIG_FILE,
        default_factory=lambda: _detect_repo_root() / "config" / "config.toml",
    )


def default_log_dir() -> Path:
    """Get the default directory for log files."""

    return (_detect_repo_root() / "logs").resolve()


def default_log_file() -> Path:
    """Get the default log file path."""

    return (default_log_dir() / "albumsync.log").resolve()


__all__ = [
    "default_config_path",
    "default_log_dir",
    "default_log_file",
    "resolve_overridable_path",
]
