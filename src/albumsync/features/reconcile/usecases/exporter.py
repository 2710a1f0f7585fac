"""Summary: Copy the matched files of an album to another folder under canonical names.
Why: Publish a tidy copy of an album (per-disc folders, canonical file names) without touching the source.

Multi-disc albums get one ``Disc N`` folder per disc; missing folders are
created on the way. Existing files at the destination are replaced. As with
the other operations a failing copy is collected and the rest still run.
"""

from __future__ import annotations

from pathlib import Path

from albumsync.features.naming import (
    DEFAULT_EXTENSION,
    PLACEHOLDER_TITLE,
    Sanitizer,
    canonical_name,
    disc_folder_name,
)
from albumsync.platform.filesystem import copy_file
from albumsync.platform.logging import logger
from albumsync.shared.album import Album, Track
from albumsync.shared.errors import IoError

from ..domain.models import FileEntry, OperationReport, ProgressCallback, RenameRecord
from .events import ReconcileEvent, event_extra
from .matching import match
from .scanner import scan_directory
from .updater import run_per_file


def export_destination(root: Path, album: Album) -> Path:
    """``root/<artist>/<album title>`` with both parts made file-name safe."""
    artist = Sanitizer.clean(album.artist) or "Unknown Artist"
    title = Sanitizer.clean(album.title) or PLACEHOLDER_TITLE
    return root / artist / title


def export_path(destination: Path, album: Album, track: Track, source: Path) -> Path:
    """Where ``track`` (currently stored at ``source``) lands inside ``destination``."""
    folder = destination
    disc_folder = disc_folder_name(album, track.disc_key)
    if disc_folder is not None:
        folder = folder / disc_folder
    return folder / canonical_name(album, track, extension=source.suffix or DEFAULT_EXTENSION)


def export(
    directory: Path,
    album: Album,
    destination: Path,
    *,
    dry_run: bool = False,
    progress: ProgressCallback | None = None,
    entries: list[FileEntry] | None = None,
) -> OperationReport:
    """Copy every matched file of ``directory`` into ``destination``.

    ``report.copies`` records each (source, copy) pair and
    ``report.succeeded`` the written copies.

    Raises:
        IoError: If the directory cannot be scanned.
    """
    report = OperationReport(operation="export", directory=directory, dry_run=dry_run)
    if entries is None:
        entries = scan_directory(directory)
    result = match(album, entries)
    report.absorb_match(result)

    def handle(track: Track, entry: FileEntry, index: int, total: int) -> None:
        target = export_path(destination, album, track, entry.path)
        if not dry_run:
            try:
                _ = copy_file(entry.path, target)
            except OSError as exc:
                raise IoError(f"Couldn't copy to {target} ({exc})", entry.path) from exc
        logger.info(
            "Copied %s -> %s",
            entry.path.name,
            target,
            extra=event_extra(
                ReconcileEvent.FILE_EXPORT,
                source=entry.path,
                target=target,
                sequence=index,
                total=total,
            ),
        )
        report.copies.append(RenameRecord(source=entry.path, target=target))
        report.succeeded.append(target)

    run_per_file(report, result.pairs, handle, progress)
    return report


__all__ = ["export", "export_destination", "export_path"]
