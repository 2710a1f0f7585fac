"""Summary: Compare file tags with the manifest, and strip tags from matched files.
Why: Let users preview drift and reset files before a fresh update.
"""

from __future__ import annotations

from pathlib import Path

from albumsync.features.manifest import load_cover
from albumsync.features.tags import clear_tags, open_tags
from albumsync.platform.logging import logger
from albumsync.shared.album import Album, Track

from ..domain.models import FileEntry, OperationReport, ProgressCallback
from .events import ReconcileEvent, event_extra
from .matching import match
from .scanner import scan_directory
from .updater import apply_track, run_per_file


def validate(
    directory: Path,
    album: Album,
    *,
    progress: ProgressCallback | None = None,
    entries: list[FileEntry] | None = None,
) -> OperationReport:
    """Report, per matched file, the tag fields an update would change.

    Nothing is written. Mismatching files end up in ``report.mismatches``
    keyed by path, matching ones in ``report.succeeded``.
    """
    report = OperationReport(operation="validate", directory=directory)
    cover = load_cover(directory, album)
    if entries is None:
        entries = scan_directory(directory)
    result = match(album, entries)
    report.absorb_match(result)

    def handle(track: Track, entry: FileEntry, index: int, total: int) -> None:
        with open_tags(entry.path, dry_run=True) as editor:
            apply_track(editor, album, track, cover)
        if not editor.changed:
            report.succeeded.append(entry.path)
            return
        report.mismatches[entry.path] = list(editor.changed_fields)
        logger.warning(
            "%s differs from the manifest: %s",
            entry.path.name,
            ", ".join(editor.changed_fields),
            extra=event_extra(
                ReconcileEvent.FILE_MISMATCH,
                source=entry.path,
                sequence=index,
                total=total,
                detail=", ".join(editor.changed_fields),
            ),
        )

    run_per_file(report, result.pairs, handle, progress)
    return report


def clear(
    directory: Path,
    album: Album,
    *,
    dry_run: bool = False,
    progress: ProgressCallback | None = None,
    entries: list[FileEntry] | None = None,
) -> OperationReport:
    """Remove the tag container from every matched file."""

    report = OperationReport(operation="clear", directory=directory, dry_run=dry_run)
    if entries is None:
        entries = scan_directory(directory)
    result = match(album, entries)
    report.absorb_match(result)

    def handle(_track: Track, entry: FileEntry, index: int, total: int) -> None:
        if dry_run:
            removed = not entry.snapshot.is_empty or entry.read_error is not None
        else:
            removed = clear_tags(entry.path)
        if not removed:
            report.unchanged.append(entry.path)
            return
        logger.info(
            "Cleared tags of %s",
            entry.path.name,
            extra=event_extra(ReconcileEvent.FILE_CLEAR, source=entry.path, sequence=index, total=total),
        )
        report.succeeded.append(entry.path)

    run_per_file(report, result.pairs, handle, progress)
    return report


__all__ = ["clear", "validate"]
