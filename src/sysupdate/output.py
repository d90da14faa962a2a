"""Output formatting for the sysupdate CLI.

Progress is reported through logging; this module renders the final
results of a command, either as Rich text or as JSON for automation.
"""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table

from .models import LockState, LockStatus, RunSummary


@dataclass
class OutputContext:
    """Context for output formatting."""

    console: Console
    json_mode: bool = False
    dry_run: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print JSON data to stdout."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {message}[/red]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print success message in appropriate format."""
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        else:
            self.console.print(f"[green]{message}[/green]")

    def run_summary(self, summary: RunSummary) -> None:
        """Render the end-of-run summary."""
        if self.json_mode:
            self.print_json(summary.model_dump(mode="json"))
            return

        table = Table(title="Update summary", show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Result", "[green]success[/green]" if summary.succeeded else "[red]failed[/red]")
        table.add_row("Stages", ", ".join(summary.completed_stages) or "-")
        table.add_row("Firmware updates", str(summary.firmware_updates))
        table.add_row("Log file", str(summary.log_file))
        table.add_row("Firmware log", str(summary.firmware_log))
        if summary.error:
            table.add_row("Error", summary.error)
        self.console.print(table)

    def lock_status(self, status: LockStatus) -> None:
        """Render the run lock state."""
        if self.json_mode:
            self.print_json(status.model_dump(mode="json"))
            return

        if status.state is LockState.FREE:
            self.console.print(f"[green]No update running[/green] (lock: {status.path})")
        elif status.state is LockState.HELD:
            self.console.print(
                f"[yellow]Update running[/yellow] (PID: {status.pid}, lock: {status.path})"
            )
        else:
            pid = status.pid if status.pid is not None else "unreadable"
            self.console.print(
                f"[yellow]Stale lock[/yellow] (PID: {pid}, lock: {status.path}); "
                "it will be cleared by the next run"
            )


# Global output context (set by cli.py main callback)
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context.

    Returns a default OutputContext if not yet initialized by CLI.
    """
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext) -> None:
    """Set the global output context. Called by CLI main callback."""
    global _ctx
    _ctx = ctx
