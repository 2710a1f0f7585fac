"""Summary: Build an Album from the tags already present in a directory.
Why: Seed a manifest for albums that do not have one yet.

Album-level values (title, artist, year, genre) are the most frequent
non-empty tag value across files; ties go to the value seen first in file
name order. Track-level values are only kept when they differ from the album
value. The album artist prefers the album artist frame over the track
artist frame when any file carries one.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

from albumsync.features.tags import CoverImage
from albumsync.shared.album import Album, Track

from ..domain.models import FileEntry
from .scanner import scan_directory

_T = TypeVar("_T")


def _most_common(values: Sequence[_T | None]) -> _T | None:
    present = [value for value in values if value not in (None, "")]
    if not present:
        return None
    counts = Counter(present)
    best = max(counts.values())
    # Counter keeps insertion order, so the first value reaching ``best`` wins.
    return next(value for value, count in counts.items() if count == best)


def _album_value(entries: Sequence[FileEntry], getter: Callable[[FileEntry], _T | None]) -> _T | None:
    return _most_common([getter(entry) for entry in sorted(entries, key=lambda e: e.name)])


def _sort_key(entry: FileEntry) -> tuple[int, float, str]:
    snapshot = entry.snapshot
    disc = snapshot.disc_number if snapshot.disc_number is not None else 1
    number = snapshot.track_number if snapshot.track_number is not None else float("inf")
    return (disc, number, entry.name)


def _assign_numbers(ordered: Sequence[FileEntry]) -> list[int]:
    """Keep unique tag numbers; number the rest by position on their disc."""
    used: dict[int, set[int]] = {}
    for entry in ordered:
        number = entry.snapshot.track_number
        if number is not None:
            used.setdefault(_sort_key(entry)[0], set()).add(number)

    seen: dict[int, set[int]] = {}
    positions: dict[int, int] = {}
    numbers: list[int] = []
    for entry in ordered:
        disc = _sort_key(entry)[0]
        position = positions.get(disc, 0) + 1
        positions[disc] = position
        taken = seen.setdefault(disc, set())
        number = entry.snapshot.track_number
        if number is None or number in taken:
            number = position
            while number in taken or number in used.get(disc, set()):
                number += 1
        taken.add(number)
        numbers.append(number)
    return numbers


def build_album(entries: Sequence[FileEntry]) -> Album:
    """Synthesize an Album from scanned entries without touching the disk."""

    album = Album(
        title=_album_value(entries, lambda e: e.snapshot.album) or "",
        artist=(
            _album_value(entries, lambda e: e.snapshot.album_artist)
            or _album_value(entries, lambda e: e.snapshot.artist)
            or ""
        ),
        year=_album_value(entries, lambda e: e.snapshot.year),
        genre=_album_value(entries, lambda e: e.snapshot.genre),
    )

    ordered = sorted(entries, key=_sort_key)
    for entry, number in zip(ordered, _assign_numbers(ordered)):
        snapshot = entry.snapshot
        album.tracks.append(
            Track(
                title=snapshot.title or entry.path.stem,
                number=number,
                artist=snapshot.artist if snapshot.artist and snapshot.artist != album.artist else None,
                disc=snapshot.disc_number,
                year=snapshot.year if snapshot.year != album.year else None,
                genre=snapshot.genre if snapshot.genre != album.genre else None,
                comment=snapshot.comment,
                lyrics=snapshot.lyrics,
            )
        )
    return album


def shared_cover(entries: Sequence[FileEntry]) -> CoverImage | None:
    """The embedded picture when every file holds exactly that one picture."""
    if not entries:
        return None
    first = entries[0].snapshot.cover
    if first is None:
        return None
    for entry in entries:
        snapshot = entry.snapshot
        if snapshot.cover_count != 1 or snapshot.cover is None or snapshot.cover.data != first.data:
            return None
    try:
        return CoverImage.from_bytes(first.data, first.mime)
    except ValueError:
        return None


def extract(directory: Path) -> Album:
    """Scan ``directory`` and build an Album from its tags.

    An empty directory yields an Album with no tracks.

    Raises:
        IoError: If the directory is missing or unreadable.
    """
    return build_album(scan_directory(directory))


__all__ = ["build_album", "extract", "shared_cover"]
