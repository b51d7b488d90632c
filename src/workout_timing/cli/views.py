"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of estimates, aggregates and timers.
"""

from typing import Any

from rich.console import Console
from rich.table import Table

from ..core.models import PlanEstimate, SessionExerciseAggregates
from ..core.time_format import (
    format_duration,
    format_session_progress,
    format_total_duration,
)

console = Console()


def _fmt_seconds(seconds: int | float | None) -> str:
    return format_total_duration(seconds) if seconds is not None else "-"


def _fmt_value(value: Any) -> str:
    return "-" if value is None else str(value)


def format_estimate_table(estimate: PlanEstimate) -> Table:
    """
    Create a Rich table with the per-block breakdown of a plan estimate.

    Args:
        estimate: Breakdown from summarize_plan_estimate

    Returns:
        Rich Table object
    """
    table = Table(title="Estimated Plan Time")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Block", style="cyan")
    table.add_column("Exercises", justify="right")
    table.add_column("Repeats", justify="right", style="magenta")
    table.add_column("Time", justify="right", style="bold")

    for i, line in enumerate(estimate.lines, 1):
        block = line.label if line.scope_id is None else f"[green]{line.label}[/green]"
        table.add_row(
            str(i),
            block,
            str(line.exercise_count),
            f"×{line.repeat_count}" if line.scope_id is not None else "",
            _fmt_seconds(line.seconds),
        )

    return table


def print_plan_estimate(estimate: PlanEstimate) -> None:
    """
    Print a plan estimate breakdown and its total.

    Args:
        estimate: Breakdown from summarize_plan_estimate
    """
    if not estimate.lines:
        console.print("[yellow]Plan has no exercises.[/yellow]")
        return

    console.print(format_estimate_table(estimate))
    if estimate.total_seconds is None:
        console.print("Estimated duration: [yellow]unknown[/yellow]")
    else:
        console.print(
            f"Estimated duration: [bold]{format_total_duration(estimate.total_seconds)}[/bold]"
        )


def print_aggregates(
    aggregates: SessionExerciseAggregates,
    planned_updates: dict[str, Any] | None = None,
) -> None:
    """
    Print the actual values computed for a session exercise.

    Args:
        aggregates: Computed actual values
        planned_updates: Planned fields that will be changed, if any
    """
    table = Table(show_header=True, header_style="dim")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Duration", justify="right")
    table.add_row(
        _fmt_value(aggregates.actual_sets),
        _fmt_value(aggregates.actual_reps),
        format_duration(aggregates.actual_duration_seconds),
    )
    console.print(table)

    if planned_updates:
        changes = ", ".join(f"{k}={_fmt_value(v)}" for k, v in planned_updates.items())
        console.print(f"[dim]Planned updates: {changes}[/dim]")


def print_timer(
    session_id: str,
    record: dict[str, Any],
    running: bool,
    estimated_total_seconds: int | float | None = None,
) -> None:
    """
    Print the stored timer of a session.

    Args:
        session_id: Session identifier
        record: Stored session record
        running: Whether the timer is currently running
        estimated_total_seconds: Plan estimate to show progress against
    """
    active = record.get("active_duration_seconds") or 0
    state = "[green]running[/green]" if running else "[yellow]stopped[/yellow]"

    console.print(f"Session [bold]{session_id}[/bold]: {state}")
    console.print(f"- Active: {format_total_duration(active)}")
    console.print(f"- Progress: {format_session_progress(active, estimated_total_seconds)}")
    if record.get("last_timer_started_at"):
        console.print(f"- Last started: {record['last_timer_started_at']}")
    if record.get("last_timer_stopped_at"):
        console.print(f"- Last stopped: {record['last_timer_stopped_at']}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
