import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from topsched._io import export_order_to_toml, load_schedule
from topsched._schedule import Algorithm, Schedule, ScheduleError, format_order

from .config import ConfigError, TopschedConfig, get_config
from .render import render_failure, render_node_table, render_verdicts

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Topological ordering of task dependency graphs."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> TopschedConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load(path: Path) -> Schedule:
    err_console.print(f"[cyan]Loading schedule from:[/cyan] {escape(str(path))}")
    try:
        schedule = load_schedule(path)
    except (ScheduleError, OSError) as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    logger.debug(f"Loaded {len(schedule.nodes)} nodes and {len(schedule.edges)} edges")
    return schedule


@app.command()
def sort(
    path: Annotated[
        Path,
        typer.Argument(help="Path to a schedule file (.toml, or the line format otherwise)"),
    ],
    *,
    algorithm: Annotated[
        Algorithm | None,
        typer.Option("-a", "--algorithm", help="Sorter to use [default: removal, or tool.topsched.algorithm]"),
    ] = None,
    start: Annotated[
        str | None,
        typer.Option("--start", help="Node the DFS sorter starts from (default: first node)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the result to this TOML file"),
    ] = None,
) -> None:
    """Print a topological ordering of a schedule."""
    config = _load_config()
    algorithm = algorithm or config.algorithm or Algorithm.REMOVAL
    start = start if start is not None else config.start

    schedule = _load(path)
    result = schedule.sort(algorithm, start=start)

    if output is not None:
        try:
            export_order_to_toml(output, schedule, result, algorithm)
        except OSError as e:
            err_console.print(f"[red]✗ Cannot write result: {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e
        err_console.print(f"[cyan]Result written to:[/cyan] {escape(str(output))}")

    if not result.is_ordered:
        render_failure(result, algorithm, err_console)
        raise typer.Exit(code=1)

    out_console.print(format_order(schedule.names(result)), markup=False, highlight=False, soft_wrap=True)


@app.command()
def check(
    path: Annotated[
        Path,
        typer.Argument(help="Path to a schedule file (.toml, or the line format otherwise)"),
    ],
) -> None:
    """Describe a schedule and check that both sorters can order it."""
    schedule = _load(path)
    err_console.print()

    render_node_table(schedule, err_console)
    err_console.print()

    results = {algorithm: schedule.sort(algorithm) for algorithm in Algorithm}
    render_verdicts(results, err_console)
    err_console.print()

    verdicts = {result.is_ordered for result in results.values()}
    if len(verdicts) > 1:
        # Both sorters see the same graph, so this indicates a bug.
        logger.error("Sorters disagree on whether the schedule is acyclic")
        raise typer.Exit(code=1)

    if not verdicts.pop():
        err_console.print("[red]✗ Schedule has a dependency cycle[/red]")
        raise typer.Exit(code=1)

    err_console.print("[green]✓ Schedule is acyclic[/green]")


def main() -> None:
    app()
