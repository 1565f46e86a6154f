"""Rich rendering utilities for the CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from topsched._graph import SortStatus

if TYPE_CHECKING:
    from rich.console import Console

    from topsched._graph import SortResult
    from topsched._schedule import Algorithm, Schedule


def render_node_table(schedule: Schedule, console: Console) -> None:
    """Render every node with its id and degrees as a Rich table.

    Args:
        schedule: The schedule to describe.
        console: Rich Console to output to.

    """
    graph = schedule.to_graph()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Id", justify="right", style="dim")
    table.add_column("Node", style="bold")
    table.add_column("In", justify="right")
    table.add_column("Out", justify="right")

    for node in graph.nodes():
        table.add_row(
            str(node),
            escape(schedule.name_of(node)),
            str(graph.in_degree(node)),
            str(graph.out_degree(node)),
        )

    console.print(table)


def render_failure(result: SortResult, algorithm: Algorithm, console: Console) -> None:
    """Render a cycle or invalid-input outcome as a diagnostic."""
    match result.status:
        case SortStatus.CYCLE_DETECTED:
            headline = "No ordering exists: the graph contains a cycle"
        case _:
            headline = "Cannot sort: invalid graph input"
    console.print(f"[red]✗ {headline}[/red] [dim]({algorithm})[/dim]")
    if result.reason:
        console.print(f"  [dim]{escape(result.reason)}[/dim]")


def render_verdicts(results: dict[Algorithm, SortResult], console: Console) -> None:
    """Render one line per sorter saying whether it found an ordering."""
    for algorithm, result in results.items():
        if result.is_ordered:
            console.print(f"  [green]✓[/green] {algorithm}: ordered")
        else:
            console.print(f"  [red]✗[/red] {algorithm}: {result.status}")
