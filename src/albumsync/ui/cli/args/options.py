"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

Command = Literal["generate", "rename", "update", "validate", "clear", "export", "show"]


@final
@dataclass(slots=True)
class ReconcileArgs:
    """Command line arguments shared by every subcommand.

    ``output`` and ``root`` are only set for ``export``.
    """

    command: Command
    folder: Path
    dry_run: bool
    force: bool
    verbose: bool
    quiet: bool
    output: Path | None = None
    root: Path | None = None


__all__ = ["Command", "ReconcileArgs"]
