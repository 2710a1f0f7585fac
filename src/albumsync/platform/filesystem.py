"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import shutil
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def write_text_file(path: Path, content: str) -> None:
    """Persist textual content ensuring parent directories exist."""

    _ = ensure_parent_directory(path)
    _ = path.write_text(content, encoding="utf-8")


def write_bytes_file(path: Path, content: bytes) -> None:
    """Persist binary content ensuring parent directories exist."""

    _ = ensure_parent_directory(path)
    _ = path.write_bytes(content)


def copy_file(source: Path, target: Path) -> Path:
    """Copy ``source`` to ``target`` with its metadata, creating parent folders.

    An existing ``target`` is replaced.
    """

    _ = ensure_parent_directory(target)
    return Path(shutil.copy2(source, target))


__all__ = [
    "copy_file",
    "ensure_directory",
    "ensure_parent_directory",
    "write_bytes_file",
    "write_text_file",
]
