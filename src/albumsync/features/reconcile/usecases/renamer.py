"""Summary: Rename matched files to their canonical names.
Why: Apply manifest order and titles to file names without ever overwriting a file.

Renames whose target is still occupied by another pending source wait until
that source has moved. When every remaining rename waits on another one (a
swap or a longer cycle) one source is parked under a temporary name first.
A target held by a file that is not part of the plan is a per-file failure.
Completed renames are never rolled back. A parked file whose final move fails
is moved back to its original name; parked names stay visible to the scanner
so an interrupted run is finished by the next one.
"""

from __future__ import annotations

from pathlib import Path
from typing import final

from albumsync.features.naming import DEFAULT_EXTENSION, canonical_name
from albumsync.platform.logging import logger
from albumsync.shared.album import Album
from albumsync.shared.errors import IoError

from ..domain.models import FileEntry, OperationReport, ProgressCallback, RenameRecord
from .events import ReconcileEvent, event_extra
from .matching import match
from .scanner import PARKED_PREFIX, scan_directory


@final
class _Workspace:
    """File presence and moves, either on disk or simulated for dry runs."""

    def __init__(self, directory: Path, dry_run: bool) -> None:
        self.dry_run = dry_run
        self._occupied: set[Path] = set(directory.iterdir()) if dry_run else set()

    def exists(self, path: Path) -> bool:
        return path in self._occupied if self.dry_run else path.exists()

    def is_same_file(self, source: Path, target: Path) -> bool:
        """True when ``target`` is ``source`` under another case."""
        if self.dry_run:
            return False
        try:
            return target.samefile(source)
        except OSError:
            return False

    def move(self, source: Path, target: Path) -> None:
        if self.dry_run:
            self._occupied.discard(source)
            self._occupied.add(target)
            return
        try:
            _ = source.rename(target)
        except OSError as exc:
            raise IoError(f"Couldn't rename to {target.name} ({exc})", source) from exc

    def temporary_name(self, source: Path) -> Path:
        counter = 0
        while True:
            candidate = source.with_name(f"{PARKED_PREFIX}{counter}{source.suffix}")
            if not self.exists(candidate):
                return candidate
            counter += 1


def _unpark(workspace: _Workspace, parked: Path, original: Path) -> None:
    """Move a parked file back to ``original`` after its final move failed.

    When ``original`` is taken by now the file stays parked; the next scan
    still finds it there.
    """
    if parked == original:
        return
    if workspace.exists(original):
        logger.warning("Leaving %s parked as %s, its old name is taken", original.name, parked.name)
        return
    try:
        workspace.move(parked, original)
    except IoError as exc:
        logger.error("Couldn't restore %s from %s: %s", original.name, parked.name, exc)
        return
    logger.info("Restored %s from %s", original.name, parked.name)


def plan_renames(album: Album, entries: list[FileEntry], report: OperationReport) -> dict[Path, Path]:
    """Map each matched file whose name is not canonical to its target path."""

    result = match(album, entries)
    report.absorb_match(result)

    plan: dict[Path, Path] = {}
    for track, entry in result.pairs:
        extension = entry.path.suffix or DEFAULT_EXTENSION
        target = entry.path.with_name(canonical_name(album, track, extension=extension))
        if target.name == entry.path.name:
            report.unchanged.append(entry.path)
        else:
            plan[entry.path] = target
    return plan


def rename(
    directory: Path,
    album: Album,
    *,
    dry_run: bool = False,
    progress: ProgressCallback | None = None,
    entries: list[FileEntry] | None = None,
) -> OperationReport:
    """Rename the files of ``directory`` to the canonical names of their tracks.

    Raises:
        IoError: If the directory cannot be scanned.
    """
    report = OperationReport(operation="rename", directory=directory, dry_run=dry_run)
    if entries is None:
        entries = scan_directory(directory)
    plan = plan_renames(album, entries, report)

    workspace = _Workspace(directory, dry_run)
    total = len(plan)
    origin: dict[Path, Path] = {source: source for source in plan}
    pending = dict(plan)
    processed = 0

    def finish(source: Path) -> None:
        nonlocal processed
        processed += 1
        if progress is not None:
            progress(processed, total, origin[source])

    while pending:
        progressed = False
        for source, target in list(pending.items()):
            if target in pending and target != source:
                continue
            _ = pending.pop(source)
            progressed = True
            if workspace.exists(target) and not workspace.is_same_file(source, target):
                error = IoError("Target name already taken by another file", target)
                logger.error(
                    "Not renaming %s: %s",
                    origin[source],
                    error,
                    extra=event_extra(ReconcileEvent.FILE_ERROR, source=origin[source], detail=str(error)),
                )
                report.record_failure(origin[source], error)
                _unpark(workspace, source, origin[source])
                finish(source)
                continue
            try:
                workspace.move(source, target)
            except IoError as exc:
                logger.error(
                    "Rename failed for %s: %s",
                    origin[source],
                    exc,
                    extra=event_extra(ReconcileEvent.FILE_ERROR, source=origin[source], detail=str(exc)),
                )
                report.record_failure(origin[source], exc)
                _unpark(workspace, source, origin[source])
                finish(source)
                continue
            logger.info(
                "Renamed %s -> %s",
                origin[source].name,
                target.name,
                extra=event_extra(
                    ReconcileEvent.FILE_RENAME,
                    source=origin[source],
                    target=target,
                    sequence=processed + 1,
                    total=total,
                ),
            )
            report.renames.append(RenameRecord(source=origin[source], target=target))
            report.succeeded.append(target)
            finish(source)

        if progressed or not pending:
            continue

        # Every remaining target is another pending source: break the cycle.
        source = next(iter(pending))
        parked = workspace.temporary_name(source)
        try:
            workspace.move(source, parked)
        except IoError as exc:
            _ = pending.pop(source)
            report.record_failure(origin[source], exc)
            finish(source)
            continue
        logger.info(
            "Parked %s as %s",
            source.name,
            parked.name,
            extra=event_extra(ReconcileEvent.FILE_RENAME_DEFERRED, source=source, target=parked),
        )
        pending[parked] = pending.pop(source)
        origin[parked] = origin.pop(source)

    return report


__all__ = ["plan_renames", "rename"]
