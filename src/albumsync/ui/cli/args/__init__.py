"""Command line argument handling package."""

from albumsync.ui.cli.args.options import Command, ReconcileArgs
from albumsync.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "Command", "ReconcileArgs"]
