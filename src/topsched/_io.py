import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from ._graph import SortResult
from ._schedule import Algorithm, Schedule, ScheduleError

logger = logging.getLogger(__name__)


# =============================================================================
# Loading
# =============================================================================


def _validated(nodes: list[str], edges: list[tuple[str, str]], source: str) -> Schedule:
    try:
        return Schedule(nodes=nodes, edges=edges)
    except ValidationError as e:
        problems = "; ".join(error["msg"] for error in e.errors())
        msg = f"Invalid schedule in {source}: {problems}"
        raise ScheduleError(msg) from e


def _read_count(lines: list[str], lineno: int, what: str) -> int:
    """Read a non-negative integer count from the 1-based line *lineno*."""
    if lineno > len(lines):
        msg = f"Line {lineno}: expected the {what}, found end of input"
        raise ScheduleError(msg)
    raw = lines[lineno - 1].strip()
    try:
        count = int(raw)
    except ValueError:
        msg = f"Line {lineno}: expected the {what} as an integer, got '{raw}'"
        raise ScheduleError(msg) from None
    if count < 0:
        msg = f"Line {lineno}: the {what} must not be negative, got {count}"
        raise ScheduleError(msg)
    return count


def parse_schedule_text(text: str, source: str = "<text>") -> Schedule:
    """Parse the line-oriented schedule format.

    The layout is:

        3          <- node count N
        fetch      <- N node names, one per line
        build
        test
        2          <- edge count E
        fetch,build  <- E edges as ``from,to``
        build,test

    Trailing blank lines are ignored; anything else after the last edge is
    an error.

    Raises:
        ScheduleError: If a count is malformed, lines are missing, or an
            edge names an undeclared node.

    """
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()

    node_count = _read_count(lines, 1, "node count")
    if len(lines) < 1 + node_count:
        msg = f"Line {len(lines) + 1}: expected {node_count} node names, found end of input"
        raise ScheduleError(msg)
    nodes = lines[1 : 1 + node_count]

    edge_line = 2 + node_count
    edge_count = _read_count(lines, edge_line, "edge count")

    edges: list[tuple[str, str]] = []
    for lineno in range(edge_line + 1, edge_line + 1 + edge_count):
        if lineno > len(lines):
            msg = f"Line {lineno}: expected {edge_count} edges, found end of input"
            raise ScheduleError(msg)
        src, sep, dst = lines[lineno - 1].partition(",")
        if not sep:
            msg = f"Line {lineno}: expected an edge as 'from,to', got '{lines[lineno - 1]}'"
            raise ScheduleError(msg)
        edges.append((src.strip(), dst.strip()))

    extra = len(lines) - (edge_line + edge_count)
    if extra > 0:
        msg = f"Line {edge_line + edge_count + 1}: unexpected content after {edge_count} edges"
        raise ScheduleError(msg)

    logger.debug(f"Parsed {node_count} nodes and {edge_count} edges from {source}")
    return _validated(nodes, edges, source)


def parse_schedule_toml(text: str, source: str = "<toml>") -> Schedule:
    """Parse a TOML schedule.

    Example:
        nodes = ["fetch", "build", "test"]
        edges = [["fetch", "build"], ["build", "test"]]

    Raises:
        ScheduleError: If the TOML is malformed or does not describe a valid schedule.

    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {source}: {e}"
        raise ScheduleError(msg) from e

    nodes = data.get("nodes")
    if not isinstance(nodes, list):
        msg = f"Invalid schedule in {source}: expected 'nodes' to be an array of names"
        raise ScheduleError(msg)
    edges = data.get("edges", [])
    if not isinstance(edges, list):
        msg = f"Invalid schedule in {source}: expected 'edges' to be an array of [from, to] pairs"
        raise ScheduleError(msg)

    return _validated(nodes, edges, source)


def load_schedule(path: Path) -> Schedule:
    """Load a schedule from *path*, choosing the parser by file suffix.

    ``.toml`` files use the TOML layout; everything else uses the line format.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = f"Cannot read {path}: not valid UTF-8 ({e.reason} at byte {e.start})"
        raise ScheduleError(msg) from e
    if path.suffix.lower() == ".toml":
        return parse_schedule_toml(text, source=str(path))
    return parse_schedule_text(text, source=str(path))


# =============================================================================
# Export
# =============================================================================


def export_order_to_toml(path: Path, schedule: Schedule, result: SortResult, algorithm: Algorithm) -> None:
    """Write a sort result to *path* as TOML.

    ``order`` holds node names and is only written for an ordered result;
    ``reason`` is only written on failure.
    """
    data: dict[str, Any] = {
        "algorithm": str(algorithm),
        "status": str(result.status),
    }
    if result.is_ordered:
        data["order"] = schedule.names(result)
    elif result.reason is not None:
        data["reason"] = result.reason

    with path.open("wb") as f:
        tomli_w.dump(data, f)
    logger.debug(f"Wrote {result.status} result to {path}")
