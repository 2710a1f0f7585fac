"""Domain types shared across features."""

from .album import Album, Track
from .errors import (
    AlbumSyncError,
    IoError,
    ManifestFormatError,
    TagReadError,
    TagWriteError,
    UnmatchedTrackWarning,
)

__all__ = [
    "Album",
    "AlbumSyncError",
    "IoError",
    "ManifestFormatError",
    "TagReadError",
    "TagWriteError",
    "Track",
    "UnmatchedTrackWarning",
]
