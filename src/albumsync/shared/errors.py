"""Where: albumsync.shared.errors
What: Error taxonomy for reconcile operations.
Why: Let callers separate run-aborting failures from per-file ones.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .album import Track


class AlbumSyncError(Exception):
    """Base class for every error raised by albumsync."""


class IoError(AlbumSyncError, OSError):
    """A path could not be read or written, or a directory is missing."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path: Path | None = path

    def __str__(self) -> str:
        message = str(self.args[0]) if self.args else ""
        return f"{message}: {self.path}" if self.path is not None else message


class ManifestFormatError(AlbumSyncError, ValueError):
    """The manifest text is malformed or violates an album invariant."""

    def __init__(self, message: str, *, key: str | None = None, line: int | None = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.key: str | None = key
        self.line: int | None = line

    def __str__(self) -> str:
        location: list[str] = []
        if self.line is not None:
            location.append(f"line {self.line}")
        if self.key is not None:
            location.append(f"key '{self.key}'")
        if not location:
            return self.message
        return f"{self.message} ({', '.join(location)})"


class TagReadError(AlbumSyncError):
    """The tag container of a file is corrupt or unreadable."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Couldn't read tags from {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class TagWriteError(AlbumSyncError):
    """The tag container of a file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Couldn't write tags to {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class UnmatchedTrackWarning(UserWarning):
    """A manifest track has no file. Collected in reports, never raised."""

    def __init__(self, track: Track) -> None:
        disc = f"disc {track.disc_key}, " if track.disc is not None else ""
        super().__init__(f"No file found for {disc}track {track.number} '{track.title}'")
        self.track: Track = track


__all__ = [
    "AlbumSyncError",
    "IoError",
    "ManifestFormatError",
    "TagReadError",
    "TagWriteError",
    "UnmatchedTrackWarning",
]
