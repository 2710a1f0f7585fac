"""Summary: Write manifest fields into the tags of matched files.
Why: Bring embedded metadata in line with the manifest, one file at a time.

Each file is loaded, edited and saved inside ``open_tags`` so a failing file
is left as it was. Failures are collected and the remaining files are still
processed. Unchanged values are never rewritten, so a second run saves nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from albumsync.features.manifest import load_cover
from albumsync.features.tags import CoverImage, Id3TagEditor, open_tags
from albumsync.platform.logging import logger
from albumsync.shared.album import Album, Track
from albumsync.shared.errors import AlbumSyncError

from ..domain.models import FileEntry, OperationReport, ProgressCallback
from .events import ReconcileEvent, event_extra
from .matching import match
from .scanner import scan_directory


def apply_track(editor: Id3TagEditor, album: Album, track: Track, cover: CoverImage | None) -> None:
    """Set every manifest-controlled field of ``track`` on ``editor``.

    The album artist frame is only kept when the track artist differs from
    the album artist. Year, genre, comment and lyrics are only written when
    the manifest declares them, the cover only when the album has one.
    """
    artist = album.artist_for(track)
    editor.set_title(track.title)
    editor.set_artist(artist)
    editor.set_album_artist(album.album_artist_for(track), implied=artist)
    editor.set_album(album.title)
    editor.set_track_number(track.number)
    editor.set_disc_number(track.disc)

    year = album.year_for(track)
    if year is not None:
        editor.set_year(year)
    genre = album.genre_for(track)
    if genre:
        editor.set_genre(genre)
    if track.comment:
        editor.set_comment(track.comment)
    if track.lyrics:
        editor.set_lyrics(track.lyrics)
    if cover is not None:
        editor.replace_cover(cover)


def run_per_file(
    report: OperationReport,
    pairs: list[tuple[Track, FileEntry]],
    handle: Callable[[Track, FileEntry, int, int], None],
    progress: ProgressCallback | None,
) -> None:
    """Call ``handle`` for each pair, collecting per-file errors in ``report``."""

    total = len(pairs)
    for index, (track, entry) in enumerate(pairs, start=1):
        try:
            handle(track, entry, index, total)
        except AlbumSyncError as exc:
            logger.error(
                "%s",
                exc,
                extra=event_extra(
                    ReconcileEvent.FILE_ERROR,
                    source=entry.path,
                    sequence=index,
                    total=total,
                    detail=str(getattr(exc, "reason", exc)),
                ),
            )
            report.record_failure(entry.path, exc)
        if progress is not None:
            progress(index, total, entry.path)


def update(
    directory: Path,
    album: Album,
    *,
    dry_run: bool = False,
    progress: ProgressCallback | None = None,
    entries: list[FileEntry] | None = None,
) -> OperationReport:
    """Write ``album`` into the tags of the matched files of ``directory``.

    ``report.succeeded`` lists the files that were (or, with ``dry_run``,
    would be) modified.

    Raises:
        IoError: If the directory cannot be scanned or the cover cannot be read.
        ManifestFormatError: If the declared cover is not a PNG or JPEG image.
    """
    report = OperationReport(operation="update", directory=directory, dry_run=dry_run)
    cover = load_cover(directory, album)
    if entries is None:
        entries = scan_directory(directory)
    result = match(album, entries)
    report.absorb_match(result)

    def handle(track: Track, entry: FileEntry, index: int, total: int) -> None:
        with open_tags(entry.path, dry_run=dry_run) as editor:
            apply_track(editor, album, track, cover)
        if editor.changed:
            logger.info(
                "Updated %s (%s)",
                entry.path.name,
                ", ".join(editor.changed_fields),
                extra=event_extra(
                    ReconcileEvent.FILE_UPDATE,
                    source=entry.path,
                    sequence=index,
                    total=total,
                    detail=", ".join(editor.changed_fields),
                ),
            )
            report.succeeded.append(entry.path)
        else:
            logger.debug(
                "Tags of %s already up to date",
                entry.path.name,
                extra=event_extra(ReconcileEvent.FILE_UNCHANGED, source=entry.path, sequence=index, total=total),
            )
            report.unchanged.append(entry.path)

    run_per_file(report, result.pairs, handle, progress)
    return report


__all__ = ["apply_track", "run_per_file", "update"]
