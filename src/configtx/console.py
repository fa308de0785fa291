"""Rich console output for the configtx CLI."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from configtx.domain.models import ProblemReport, TransactionOutcome
    from configtx.domain.transaction_event import TransactionEvent

# Shared console instances
console = Console()
error_console = Console(stderr=True)

_SEVERITY_STYLES = {
    "INFO": "cyan",
    "WARNING": "yellow",
    "ERROR": "red",
    "FATAL": "bold red",
}


def print_error(message: str, hint: str | None = None) -> None:
    """Print formatted error message to stderr."""
    content = Text(f"ERROR: {message}", style="bold red")
    if hint:
        content.append(f"\n\nHint: {hint}", style="yellow")
    error_console.print(Panel(content, title="Error", border_style="red"))


def print_success(message: str) -> None:
    console.print(Panel(message, title="Success", border_style="green"))


def print_failure(message: str, details: str | None = None) -> None:
    content = Text(message, style="bold red")
    if details:
        content.append(f"\n{details}", style="dim")
    console.print(Panel(content, title="Failed", border_style="red"))


def print_value(value: Any) -> None:
    """Print a document or a single value as JSON."""
    console.print_json(json.dumps(value, default=str))


def print_problems(report: ProblemReport) -> None:
    """Print a report as a table, worst problems first."""
    if not report:
        console.print("[green]No problems found[/green]")
        return

    table = Table(show_header=True, box=None)
    table.add_column("Severity", width=8)
    table.add_column("Location", style="magenta")
    table.add_column("Problem")
    table.add_column("Remediation", style="dim")

    for problem in sorted(report, key=lambda p: p.severity, reverse=True):
        name = problem.severity.name
        table.add_row(
            Text(name, style=_SEVERITY_STYLES.get(name, "")),
            problem.location or "-",
            problem.message,
            problem.remediation,
        )

    console.print(table)


def print_events(events: list[TransactionEvent]) -> None:
    """Print the progress log of one transaction."""
    console.print("\n[bold]Progress:[/bold]")
    for event in events:
        summary = f" - {event.summary.splitlines()[0][:80]}" if event.summary else ""
        console.print(f"  {event.sequence:>2}. {event.event_type.value}{summary}")


def print_outcome(outcome: TransactionOutcome) -> None:
    """Print the disposition of a finished edit."""
    if outcome.rejected and outcome.rejection is not None:
        print_failure("Edit rejected by validation", outcome.rejection.message)
    elif outcome.error is not None:
        print_failure("Edit failed", str(outcome.error))
    elif outcome.succeeded:
        print_success(f"Edit committed ({outcome.transaction_id})")
    else:
        print_failure(f"Edit {outcome.disposition.value}")

    if outcome.report:
        print_problems(outcome.report)
    if outcome.clean_error:
        console.print(f"[yellow]Cleanup warning: {outcome.clean_error}[/yellow]")
