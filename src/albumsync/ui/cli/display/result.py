"""Summary: Render operation reports to the terminal.
Why: Give every subcommand the same summary of successes, failures and gaps.
"""

from __future__ import annotations

from pathlib import Path
from typing import final

from rich.console import Console
from rich.markup import escape

from albumsync.features.reconcile import OperationReport

_SUCCESS_LABELS: dict[str, str] = {
    "generate": "Manifest written",
    "rename": "Renamed",
    "update": "Updated",
    "validate": "In sync",
    "clear": "Cleared",
    "export": "Copied",
}


def _relative(path: Path, directory: Path) -> str:
    try:
        return str(path.relative_to(directory))
    except ValueError:
        return str(path)


@final
class ResultDisplay:
    """Print an :class:`OperationReport` summary."""

    def __init__(self, console: Console | None = None, *, show_unchanged: bool = False) -> None:
        self.console: Console = console or Console()
        self.show_unchanged: bool = show_unchanged

    def show_report(self, report: OperationReport) -> None:
        console = self.console
        directory = report.directory
        header = f"{report.operation.capitalize()} summary"
        if report.dry_run:
            header += " (dry run)"
        console.print(f"\n[bold]{header}:[/bold]")

        label = _SUCCESS_LABELS.get(report.operation, "Succeeded")
        console.print(f"[green]{label}: {len(report.succeeded)}[/green]")
        if report.renames:
            for record in report.renames:
                console.print(
                    f"[green]  • {escape(record.source.name)} → {escape(record.target.name)}[/green]"
                )
        elif report.copies:
            for record in report.copies:
                console.print(
                    f"[green]  • {escape(record.source.name)} → {escape(str(record.target))}[/green]"
                )
        else:
            for path in report.succeeded:
                console.print(f"[green]  • {escape(_relative(path, directory))}[/green]")

        if report.unchanged:
            console.print(f"Unchanged: {len(report.unchanged)}")
            if self.show_unchanged:
                for path in report.unchanged:
                    console.print(f"  • {escape(_relative(path, directory))}")

        if report.mismatches:
            console.print(f"[yellow]Out of sync: {len(report.mismatches)}[/yellow]")
            for path, fields in report.mismatches.items():
                console.print(
                    f"[yellow]  • {escape(_relative(path, directory))}: {escape(', '.join(fields))}[/yellow]"
                )

        if report.warnings:
            console.print(f"[yellow]Tracks without a file: {len(report.warnings)}[/yellow]")
            for warning in report.warnings:
                console.print(f"[yellow]  • {escape(str(warning))}[/yellow]")

        if report.unmatched_files:
            console.print(f"[yellow]Files without a track: {len(report.unmatched_files)}[/yellow]")
            for path in report.unmatched_files:
                console.print(f"[yellow]  • {escape(_relative(path, directory))}[/yellow]")

        if report.failures:
            console.print(f"[red]Failed: {len(report.failures)}[/red]")
            for failure in report.failures:
                console.print(
                    f"[red]  • {escape(_relative(failure.path, directory))}: {escape(failure.reason)}[/red]"
                )


__all__ = ["ResultDisplay"]
