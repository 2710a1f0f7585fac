"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from albumsync.config.config import Config
from albumsync.platform.logging import logger, setup_logger
from albumsync.ui.cli.args.options import ReconcileArgs

_COMMAND_HELP: dict[str, str] = {
    "generate": "Write extras/album.yaml from the tags of the audio files",
    "rename": "Rename audio files to their canonical names",
    "update": "Write manifest metadata and cover art into the audio files",
    "validate": "Report files whose tags differ from the manifest",
    "clear": "Remove the tags of every matched audio file",
    "export": "Copy the audio files to another folder under canonical names",
    "show": "Print the normalized manifest",
}


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="albumsync",
            description="albumsync - keep an album folder in sync with its manifest.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)
        for command, help_text in _COMMAND_HELP.items():
            subparser = subparsers.add_parser(command, help=help_text)
            ArgumentParser._configure_common(subparser, command)

        return parser

    @staticmethod
    def _configure_common(parser: argparse.ArgumentParser, command: str) -> None:
        """Apply the options shared by every subcommand."""

        _ = parser.add_argument(
            "--folder",
            type=str,
            default=".",
            help="Album directory to work on (defaults to the current directory)",
            metavar="DIR",
        )
        if command != "show":
            _ = parser.add_argument(
                "--dry-run",
                action="store_true",
                help="Report what would change without touching any file",
            )
        if command == "generate":
            _ = parser.add_argument(
                "--force",
                action="store_true",
                help="Overwrite an existing manifest",
            )
        if command == "export":
            _ = parser.add_argument(
                "output",
                nargs="?",
                default=None,
                help="Folder to copy the album into",
            )
            _ = parser.add_argument(
                "--root",
                type=str,
                default=None,
                help="Library root; the album is copied to ROOT/<artist>/<album title>",
                metavar="ROOT",
            )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> ReconcileArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            ReconcileArgs: Processed command line arguments.

        Raises:
            SystemExit: If the album folder does not exist, or ``export`` was
                given neither an output folder nor a library root.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)
        output = getattr(parsed_args, "output", None)
        root = getattr(parsed_args, "root", None)
        if parsed_args.command == "export" and output is None and root is None:
            parser.error("export needs an output folder or --root")

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        _ = setup_logger(configuration.log_settings(log_level))

        folder = Path(parsed_args.folder).expanduser()
        if not folder.is_dir():
            logger.error("Album folder does not exist or is not a directory: %s", folder)
            sys.exit(1)

        return ReconcileArgs(
            command=parsed_args.command,
            folder=folder.resolve(),
            dry_run=bool(getattr(parsed_args, "dry_run", False)),
            force=bool(getattr(parsed_args, "force", False)),
            verbose=is_verbose,
            quiet=is_quiet,
            output=Path(output).expanduser().resolve() if output is not None else None,
            root=Path(root).expanduser().resolve() if root is not None else None,
        )
