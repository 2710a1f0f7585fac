"""Summary: Structured event identifiers for reconcile log records.
Why: Let the Rich console handler style records without parsing messages.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any


class ReconcileEvent(StrEnum):
    """Values of the ``reconcile_event`` log record attribute."""

    RUN_START = "reconcile.run.start"
    RUN_COMPLETE = "reconcile.run.complete"
    FILE_RENAME = "reconcile.file.rename"
    FILE_RENAME_DEFERRED = "reconcile.file.rename.deferred"
    FILE_UPDATE = "reconcile.file.update"
    FILE_UNCHANGED = "reconcile.file.unchanged"
    FILE_MISMATCH = "reconcile.file.mismatch"
    FILE_CLEAR = "reconcile.file.clear"
    FILE_EXPORT = "reconcile.file.export"
    FILE_ERROR = "reconcile.file.error"
    TRACK_UNMATCHED = "reconcile.track.unmatched"
    FILE_UNMATCHED = "reconcile.file.unmatched"
    MANIFEST_WRITE = "reconcile.manifest.write"
    COVER_EXPORT = "reconcile.cover.export"


def event_extra(
    event: ReconcileEvent,
    *,
    source: Path | None = None,
    target: Path | None = None,
    sequence: int | None = None,
    total: int | None = None,
    detail: str | None = None,
) -> dict[str, Any]:
    """Build the ``extra`` mapping for a structured log call."""

    extra: dict[str, Any] = {"reconcile_event": event.value}
    if source is not None:
        extra["source_path"] = str(source)
    if target is not None:
        extra["target_path"] = str(target)
    if sequence is not None:
        extra["sequence"] = sequence
    if total is not None:
        extra["total"] = total
    if detail:
        extra["detail"] = detail
    return extra


__all__ = ["ReconcileEvent", "event_extra"]
