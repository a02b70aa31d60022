"""
Rendering of reconciliation outcomes for the terminal.
"""

from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..core.outcome import Outcome, RunSummary, Severity

SEVERITY_STYLES = {
    Severity.OK: "green",
    Severity.WARNING: "yellow",
    Severity.FATAL: "red",
}


def build_outcomes_table(outcomes: List[Outcome]) -> Table:
    """Build a table with one row per record outcome."""
    table = Table(title="DNS Record Reconciliation")
    table.add_column("Record", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Status")
    table.add_column("Action", style="white")
    table.add_column("Details", style="white")

    for outcome in outcomes:
        style = SEVERITY_STYLES[outcome.severity]
        table.add_row(
            outcome.name,
            outcome.type,
            f"[{style}]{outcome.status.value}[/{style}]",
            outcome.action or "",
            str(outcome.error) if outcome.error is not None else "",
        )

    return table


def render_outcomes(outcomes: List[Outcome], console: Optional[Console] = None) -> RunSummary:
    """Print the outcomes table and summary, returning the summary."""
    console = console or Console()
    summary = RunSummary.from_outcomes(outcomes)

    console.print(build_outcomes_table(outcomes))
    console.print(
        f"\n[bold]Total: {summary.total}[/bold]  "
        f"[green]changed: {summary.changed}[/green]  "
        f"unchanged: {summary.unchanged}  "
        f"[yellow]warnings: {summary.warnings}[/yellow]  "
        f"[red]failures: {summary.failures}[/red]"
    )
    return summary
