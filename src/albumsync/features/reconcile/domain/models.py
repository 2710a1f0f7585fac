"""Reconcile domain models.

Where: src/albumsync/features/reconcile/domain/models.py
What: Scan entries, matching results and per-operation reports.
Why: Share one result vocabulary between use cases, the service and the CLI.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from albumsync.features.tags import TagSnapshot
from albumsync.shared.album import Track
from albumsync.shared.errors import AlbumSyncError, UnmatchedTrackWarning

ProgressCallback = Callable[[int, int, Path], None]
"""Called as ``(processed, total, path)`` after each file is handled."""


@dataclass(slots=True)
class FileEntry:
    """One audio file found by a directory scan."""

    path: Path
    snapshot: TagSnapshot = field(default_factory=TagSnapshot)
    read_error: AlbumSyncError | None = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def tag_key(self) -> tuple[int, int] | None:
        """(disc, track) taken from the tags, or None without a track number."""
        number = self.snapshot.track_number
        if number is None:
            return None
        disc = self.snapshot.disc_number
        return (disc if disc is not None else 1, number)


@dataclass(slots=True)
class MatchResult:
    """Pairs in manifest order plus whatever could not be paired."""

    pairs: list[tuple[Track, FileEntry]] = field(default_factory=list)
    unmatched_tracks: list[Track] = field(default_factory=list)
    unmatched_files: list[FileEntry] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RenameRecord:
    """A file moved (rename) or copied (export) from ``source`` to ``target``."""

    source: Path
    target: Path


@dataclass(frozen=True, slots=True)
class FileFailure:
    """A per-file error collected instead of aborting the run."""

    path: Path
    error: AlbumSyncError

    @property
    def reason(self) -> str:
        return str(getattr(self.error, "reason", None) or self.error)


@dataclass
class OperationReport:
    """Outcome of one reconcile operation over an album directory."""

    operation: str
    directory: Path
    dry_run: bool = False
    succeeded: list[Path] = field(default_factory=list)
    unchanged: list[Path] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    warnings: list[UnmatchedTrackWarning] = field(default_factory=list)
    unmatched_files: list[Path] = field(default_factory=list)
    renames: list[RenameRecord] = field(default_factory=list)
    copies: list[RenameRecord] = field(default_factory=list)
    mismatches: dict[Path, list[str]] = field(default_factory=dict)
    manifest_path: Path | None = None

    @property
    def ok(self) -> bool:
        """True when no file failed and, for validation, no file differed."""
        return not self.failures and not self.mismatches

    def record_failure(self, path: Path, error: AlbumSyncError) -> None:
        self.failures.append(FileFailure(path=path, error=error))

    def absorb_match(self, result: MatchResult) -> None:
        """Copy unmatched tracks and files of ``result`` into this report."""
        self.warnings.extend(UnmatchedTrackWarning(track) for track in result.unmatched_tracks)
        self.unmatched_files.extend(entry.path for entry in result.unmatched_files)


__all__ = [
    "FileEntry",
    "FileFailure",
    "MatchResult",
    "OperationReport",
    "ProgressCallback",
    "RenameRecord",
]
