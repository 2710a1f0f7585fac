"""Rich console handler for reconcile events.

Where: platform/logging/handlers.py
What: Render structured ``reconcile.*`` log records with icons and compact paths.
Why: Keep per-file progress readable without leaking formatting into use cases.
"""

from __future__ import annotations

import logging
import sys
from pathlib import PurePath
from typing import Any, ClassVar

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class ReconcileRichHandler(RichHandler):
    """Rich handler that styles reconcile events and shortens file paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str, str]]] = {
        "reconcile.run.start": ("🚀", "cyan", "Starting"),
        "reconcile.run.complete": ("✅", "green", "Finished"),
        "reconcile.file.rename": ("📦", "magenta", "Renaming"),
        "reconcile.file.rename.deferred": ("🔁", "yellow", "Parking"),
        "reconcile.file.update": ("🏷️", "blue", "Tagging"),
        "reconcile.file.unchanged": ("↪️", "white", "Unchanged"),
        "reconcile.file.mismatch": ("⚠️", "yellow", "Mismatch"),
        "reconcile.file.clear": ("🧹", "blue", "Clearing"),
        "reconcile.file.export": ("📀", "cyan", "Copying"),
        "reconcile.file.error": ("⛔", "red", "Failed"),
        "reconcile.track.unmatched": ("❓", "yellow", "No file for"),
        "reconcile.file.unmatched": ("❔", "yellow", "No track for"),
        "reconcile.manifest.write": ("📝", "green", "Wrote manifest"),
        "reconcile.cover.export": ("🖼️", "green", "Exported cover"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 2

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Keep the trailing segments of ``path`` and colour the separators."""

        parts = [part for part in PurePath(path).parts if part not in {"/", "\\"}]
        truncated = len(parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            parts = parts[-self._PATH_SEGMENT_LIMIT:]

        text = Text()
        if truncated:
            _ = text.append("…/", style=Style(color="magenta"))
        for index, part in enumerate(parts):
            if index:
                _ = text.append("/", style=Style(color="magenta"))
            _ = text.append(part, style=Style(color="white"))
        return text

    def _render_event(self, record: logging.LogRecord, message: str) -> Text | None:
        event = getattr(record, "reconcile_event", None)
        if not isinstance(event, str):
            return None

        icon, color, label = self._EVENT_STYLES.get(event, ("ℹ️", "blue", ""))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        sequence = getattr(record, "sequence", None)
        total = getattr(record, "total", None)
        if isinstance(sequence, int) and isinstance(total, int) and total > 0:
            _ = body.append(f"[{sequence}/{total}] ")

        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)
        if label and source_path:
            _ = body.append(f"{label} ")
            _ = body.append_text(self._format_path(str(source_path)))
            if target_path:
                _ = body.append(" → ")
                _ = body.append_text(self._format_path(str(target_path)))
            detail = getattr(record, "detail", None)
            if detail:
                _ = body.append(f" ({detail})")
        else:
            _ = body.append(message)

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render reconcile events specially and defer to Rich otherwise."""

        rendered = self._render_event(record, message)
        if rendered is not None:
            return rendered
        return super().render_message(record, message)


__all__ = ["ReconcileRichHandler"]
