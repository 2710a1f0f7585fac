"""Track to file matching.

Where: src/albumsync/features/reconcile/usecases/matching.py
What: Pair manifest tracks with scanned files.
Why: Rename, update, validate and clear must all agree on which file is which track.

Files are considered in file name order. A file whose tags carry a
(disc, track) pair present in the manifest claims that track; when several
files carry the same pair the first one wins and the others stay unmatched.
Files without a usable pair are then paired by position with the remaining
tracks in (disc, number) order.
"""

from __future__ import annotations

from collections.abc import Sequence

from albumsync.shared.album import Album, Track

from ..domain.models import FileEntry, MatchResult


def match(album: Album, entries: Sequence[FileEntry]) -> MatchResult:
    """Pair ``album`` tracks with ``entries``.

    The result is deterministic for a given album and set of file names.
    Pairs are returned in (disc, number) order.
    """
    tracks = album.ordered_tracks()
    by_key: dict[tuple[int, int], Track] = {track.key: track for track in tracks}
    files = sorted(entries, key=lambda entry: entry.name)

    claimed: dict[tuple[int, int], FileEntry] = {}
    duplicates: list[FileEntry] = []
    loose: list[FileEntry] = []
    for entry in files:
        key = entry.tag_key
        if key is None or key not in by_key:
            loose.append(entry)
        elif key in claimed:
            duplicates.append(entry)
        else:
            claimed[key] = entry

    remaining = [track for track in tracks if track.key not in claimed]
    positional = dict(zip((t.key for t in remaining), loose))

    result = MatchResult()
    for track in tracks:
        entry = claimed.get(track.key) or positional.get(track.key)
        if entry is None:
            result.unmatched_tracks.append(track)
        else:
            result.pairs.append((track, entry))

    unmatched = duplicates + loose[len(remaining):]
    result.unmatched_files = sorted(unmatched, key=lambda entry: entry.name)
    return result


__all__ = ["match"]
