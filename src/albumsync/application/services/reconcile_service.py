"""Application service for reconciling an album directory with its manifest.

This layer loads the manifest, scans the directory once and hands both to the
reconcile use cases so that UIs only deal with requests and reports.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Final, final

from albumsync.config.settings import COVER_FILE_STEM
from albumsync.features.manifest import (
    ManifestCodec,
    export_cover,
    load_manifest,
    manifest_path,
    save_manifest,
)
from albumsync.features.reconcile import (
    OperationReport,
    ProgressCallback,
    ReconcileEvent,
    build_album,
    clear,
    event_extra,
    export,
    export_destination,
    rename,
    scan_directory,
    shared_cover,
    update,
    validate,
)
from albumsync.platform.logging import logger
from albumsync.shared.album import Album
from albumsync.shared.errors import IoError

OPERATIONS: Final[tuple[str, ...]] = ("generate", "rename", "update", "validate", "clear", "export")


@dataclass(frozen=True)
class ReconcileRequest:
    """Input parameters for one reconcile operation.

    Attributes:
        directory: Album directory holding the audio files and ``extras/``.
        dry_run: If True, compute the report without touching any file.
        force: Allow ``generate`` to overwrite an existing manifest.
        destination: Folder ``export`` copies the album into.
        export_root: Library root; ``export`` then copies into
            ``<root>/<artist>/<album title>`` when no destination is given.
    """

    directory: Path
    dry_run: bool = False
    force: bool = False
    destination: Path | None = None
    export_root: Path | None = None


@final
class ReconcileService:
    """Stateless facade over the reconcile use cases."""

    def __init__(self, *, manifest_loader: Callable[[Path], Album] | None = None) -> None:
        self._load_manifest: Callable[[Path], Album] = manifest_loader or load_manifest

    def run(
        self,
        operation: str,
        request: ReconcileRequest,
        progress: ProgressCallback | None = None,
    ) -> OperationReport:
        """Dispatch ``operation`` by name and log its start and completion."""

        handlers: dict[str, Callable[[ReconcileRequest, ProgressCallback | None], OperationReport]] = {
            "generate": self.generate,
            "rename": self.rename,
            "update": self.update,
            "validate": self.validate,
            "clear": self.clear,
            "export": self.export,
        }
        handler = handlers.get(operation)
        if handler is None:
            raise ValueError(f"Unknown operation: {operation}")

        start = time.perf_counter()
        logger.info(
            "Starting %s in %s%s",
            operation,
            request.directory,
            " (dry run)" if request.dry_run else "",
            extra=event_extra(ReconcileEvent.RUN_START),
        )
        report = handler(request, progress)
        logger.info(
            "Finished %s: %d succeeded, %d failed in %.2fs",
            operation,
            len(report.succeeded),
            len(report.failures),
            time.perf_counter() - start,
            extra=event_extra(ReconcileEvent.RUN_COMPLETE),
        )
        return report

    def generate(self, request: ReconcileRequest, progress: ProgressCallback | None = None) -> OperationReport:
        """Write a manifest built from the tags found in the directory.

        Raises:
            IoError: If the directory is unreadable, or a manifest already
                exists and ``force`` is not set.
        """
        directory = request.directory
        target = manifest_path(directory)
        if target.exists() and not request.force:
            raise IoError("Manifest already exists, use --force to overwrite it", target)

        report = OperationReport(operation="generate", directory=directory, dry_run=request.dry_run)
        entries = scan_directory(directory)
        for index, entry in enumerate(entries, start=1):
            if entry.read_error is not None:
                report.record_failure(entry.path, entry.read_error)
            if progress is not None:
                progress(index, len(entries), entry.path)

        album = build_album(entries)
        cover = shared_cover(entries)
        if cover is not None:
            if request.dry_run:
                album.cover = f"{COVER_FILE_STEM}{cover.extension}"
            else:
                album.cover = export_cover(directory, cover)
                logger.info(
                    "Exported embedded cover to %s",
                    album.cover,
                    extra=event_extra(ReconcileEvent.COVER_EXPORT, source=target.parent / album.cover),
                )

        if not request.dry_run:
            target = save_manifest(directory, album)
            logger.info(
                "Wrote manifest with %d tracks",
                len(album.tracks),
                extra=event_extra(ReconcileEvent.MANIFEST_WRITE, source=target),
            )
        report.manifest_path = target
        report.succeeded.append(target)
        return report

    def rename(self, request: ReconcileRequest, progress: ProgressCallback | None = None) -> OperationReport:
        album = self._load_manifest(request.directory)
        return _log_unmatched(rename(request.directory, album, dry_run=request.dry_run, progress=progress))

    def update(self, request: ReconcileRequest, progress: ProgressCallback | None = None) -> OperationReport:
        album = self._load_manifest(request.directory)
        return _log_unmatched(update(request.directory, album, dry_run=request.dry_run, progress=progress))

    def validate(self, request: ReconcileRequest, progress: ProgressCallback | None = None) -> OperationReport:
        album = self._load_manifest(request.directory)
        return _log_unmatched(validate(request.directory, album, progress=progress))

    def clear(self, request: ReconcileRequest, progress: ProgressCallback | None = None) -> OperationReport:
        album = self._load_manifest(request.directory)
        return _log_unmatched(clear(request.directory, album, dry_run=request.dry_run, progress=progress))

    def export(self, request: ReconcileRequest, progress: ProgressCallback | None = None) -> OperationReport:
        """Copy the matched files into the export destination under canonical names.

        Raises:
            IoError: If neither a destination nor an export root was given.
        """
        album = self._load_manifest(request.directory)
        destination = request.destination
        if destination is None:
            if request.export_root is None:
                raise IoError("Export needs a destination folder or a library root", request.directory)
            destination = export_destination(request.export_root, album)
        return _log_unmatched(
            export(request.directory, album, destination, dry_run=request.dry_run, progress=progress)
        )

    def show(self, request: ReconcileRequest) -> str:
        """Return the manifest of the directory in normalized form."""
        return ManifestCodec.serialize(self._load_manifest(request.directory))


def _log_unmatched(report: OperationReport) -> OperationReport:
    for warning in report.warnings:
        logger.warning("%s", warning, extra=event_extra(ReconcileEvent.TRACK_UNMATCHED, detail=str(warning)))
    for path in report.unmatched_files:
        logger.warning(
            "No manifest track for %s",
            path.name,
            extra=event_extra(ReconcileEvent.FILE_UNMATCHED, source=path),
        )
    return report


__all__ = ["OPERATIONS", "ReconcileRequest", "ReconcileService"]
