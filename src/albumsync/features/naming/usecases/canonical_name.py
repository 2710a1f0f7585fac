"""Summary: Derive the canonical file name of a manifest track.
Why: Renames converge only if the same album and track always give the same name.
"""

from __future__ import annotations

from typing import Final

from albumsync.config.settings import MAX_FILENAME_BYTES
from albumsync.shared.album import Album, Track

from ..domain.sanitizer import Sanitizer

DEFAULT_EXTENSION: Final[str] = ".mp3"
MIN_TRACK_WIDTH: Final[int] = 2


def track_number_width(album: Album, disc: int) -> int:
    """Zero-padding width for track numbers on ``disc``.

    ``max(2, digits(max track number on that disc))``.
    """
    return max(MIN_TRACK_WIDTH, len(str(album.max_track_number(disc))))


def canonical_name(
    album: Album,
    track: Track,
    extension: str = DEFAULT_EXTENSION,
    max_bytes: int | None = None,
) -> str:
    """Canonical file name of ``track``: ``[{disc}-]{number} - {title}{extension}``.

    The disc prefix only appears on multi-disc albums. The title part is
    sanitized and truncated so the whole name fits in ``max_bytes`` UTF-8
    bytes; the numeric prefix and the extension are never cut.
    """
    limit = max_bytes if max_bytes is not None else MAX_FILENAME_BYTES
    extension = extension.lower()

    width = track_number_width(album, track.disc_key)
    prefix = f"{track.disc_key}-" if album.is_multi_disc else ""
    prefix = f"{prefix}{track.number:0{width}d} - "

    title = track.ascii_title or track.title
    return prefix + Sanitizer.sanitize_filename(
        title,
        extension,
        max_bytes=limit - len(prefix.encode("utf-8")),
    )


def disc_folder_name(album: Album, disc: int) -> str | None:
    """Folder name for ``disc`` in an exported album, e.g. ``Disc 1``.

    Single-disc albums have no disc folders. The number is padded to the
    digit count of the highest disc number.
    """
    discs = album.disc_numbers()
    if len(discs) <= 1:
        return None
    width = len(str(max(discs)))
    return f"Disc {disc:0{width}d}"


__all__ = ["DEFAULT_EXTENSION", "canonical_name", "disc_folder_name", "track_number_width"]
