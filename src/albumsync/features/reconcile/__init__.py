"""Summary: Export reconcile models and use cases.
Why: Give the application service one import surface for album reconciliation.
"""

from .domain.models import (
    FileEntry,
    FileFailure,
    MatchResult,
    OperationReport,
    ProgressCallback,
    RenameRecord,
)
from .usecases.events import ReconcileEvent, event_extra
from .usecases.exporter import export, export_destination, export_path
from .usecases.extractor import build_album, extract, shared_cover
from .usecases.matching import match
from .usecases.renamer import plan_renames, rename
from .usecases.scanner import list_audio_files, scan_directory
from .usecases.updater import apply_track, update
from .usecases.validator import clear, validate

__all__ = [
    "FileEntry",
    "FileFailure",
    "MatchResult",
    "OperationReport",
    "ProgressCallback",
    "ReconcileEvent",
    "RenameRecord",
    "apply_track",
    "build_album",
    "clear",
    "event_extra",
    "export",
    "export_destination",
    "export_path",
    "extract",
    "list_audio_files",
    "match",
    "plan_renames",
    "rename",
    "scan_directory",
    "shared_cover",
    "update",
    "validate",
]
