"""Progress display functionality for CLI."""

from pathlib import Path
from typing import Any, Callable, Protocol, final, runtime_checkable

from rich.console import Console
from rich.progress import Progress, TaskID

from albumsync.application.services import ReconcileRequest
from albumsync.features.reconcile import OperationReport
from albumsync.platform.logging import ReconcileRichHandler, logger


@runtime_checkable
class ReconcileServiceLike(Protocol):
    """Protocol for application services that run an operation with progress."""

    def run(
        self,
        operation: str,
        request: ReconcileRequest,
        progress: Callable[[int, int, Path], None] | None = None,
    ) -> OperationReport:
        ...


def console_for_logger() -> Console | None:
    """Console of the Rich handler attached to the application logger, if any."""

    for handler in logger.handlers:
        if isinstance(handler, ReconcileRichHandler):
            return handler.console
    return None


@final
class ProgressDisplay:
    """Handles progress display in CLI."""

    def run_with_service(
        self,
        app: ReconcileServiceLike,
        operation: str,
        request: ReconcileRequest,
    ) -> OperationReport:
        """Run ``operation`` via the application service with a progress bar.

        Args:
            app: Application service instance used to run the operation.
            operation: Operation name such as ``"update"``.
            request: Reconcile operation parameters.

        Returns:
            The operation report.
        """
        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        progress_console = console_for_logger()
        if progress_console is not None:
            progress_kwargs["console"] = progress_console

        label = operation.capitalize()
        with Progress(**progress_kwargs) as progress:
            task_id: TaskID | None = None
            last_count = 0

            def _cb(processed: int, total: int, current_file: Path) -> None:
                nonlocal task_id, last_count
                _ = current_file  # consumed via logging elsewhere
                if task_id is None:
                    task_id = progress.add_task(f"[cyan]{label}...", total=total)
                advance = max(processed - last_count, 0)
                _ = progress.update(
                    task_id,
                    advance=advance,
                    description=f"[cyan]{label}... {processed}/{total}",
                )
                last_count = processed

            return app.run(operation, request, _cb)
