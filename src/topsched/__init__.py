"""Topological ordering of dependency graphs with cycle detection."""

__all__ = [
    "Algorithm",
    "AdjacencyList",
    "CycleDetectedError",
    "DirectedGraph",
    "InvalidGraphError",
    "InvalidInputError",
    "Matrix",
    "NodeId",
    "Schedule",
    "ScheduleError",
    "SortResult",
    "SortStatus",
    "TopologicalSortError",
    "export_order_to_toml",
    "format_order",
    "load_schedule",
    "parse_schedule_text",
    "parse_schedule_toml",
    "topo_sort_dfs",
    "topo_sort_removal",
]

from ._graph import (
    AdjacencyList,
    CycleDetectedError,
    DirectedGraph,
    InvalidGraphError,
    InvalidInputError,
    Matrix,
    NodeId,
    SortResult,
    SortStatus,
    TopologicalSortError,
    topo_sort_dfs,
    topo_sort_removal,
)
from ._io import export_order_to_toml, load_schedule, parse_schedule_text, parse_schedule_toml
from ._schedule import Algorithm, Schedule, ScheduleError, format_order
