"""Command line interface for albumsync."""

import sys
from typing import final

from rich.console import Console

from albumsync.application.services import ReconcileRequest, ReconcileService
from albumsync.platform.logging import logger
from albumsync.shared.errors import AlbumSyncError
from albumsync.ui.cli.args import ArgumentParser, ReconcileArgs
from albumsync.ui.cli.display import ProgressDisplay, ResultDisplay


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Exits with 1 when any file failed or the run was aborted, and with 130
        when interrupted.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: ReconcileArgs = ArgumentParser.process_args(args_list)
            service = ReconcileService()
            request = ReconcileRequest(
                directory=args.folder,
                dry_run=args.dry_run,
                force=args.force,
                destination=args.output,
                export_root=args.root,
            )

            if args.command == "show":
                Console(highlight=False).print(service.show(request), markup=False, end="", soft_wrap=True)
                return

            report = ProgressDisplay().run_with_service(service, args.command, request)
            if not args.quiet:
                ResultDisplay(show_unchanged=args.verbose).show_report(report)
            if not report.ok:
                sys.exit(1)

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except AlbumSyncError as e:
            logger.error("%s", e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0


if __name__ == "__main__":
    sys.exit(main())
