"""Display management for CLI interface."""

from albumsync.ui.cli.display.progress import ProgressDisplay
from albumsync.ui.cli.display.result import ResultDisplay

__all__ = ["ProgressDisplay", "ResultDisplay"]
