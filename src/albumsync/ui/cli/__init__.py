"""Command line interface for albumsync."""

from albumsync.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
