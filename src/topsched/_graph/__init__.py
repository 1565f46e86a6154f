"""Graph module providing the topological sorters.

This module contains:
- DirectedGraph: an immutable graph value with matrix and list projections
- topo_sort_dfs: depth-first ordering over an adjacency matrix
- topo_sort_removal: Kahn's ordering over an adjacency list
- SortResult: the outcome shared by both sorters
"""

from ._dfs import topo_sort_dfs
from ._directed_graph import AdjacencyList, DirectedGraph, InvalidGraphError, Matrix, NodeId
from ._removal import topo_sort_removal
from ._result import (
    CycleDetectedError,
    InvalidInputError,
    SortResult,
    SortStatus,
    TopologicalSortError,
)

__all__ = [
    "AdjacencyList",
    "CycleDetectedError",
    "DirectedGraph",
    "InvalidGraphError",
    "InvalidInputError",
    "Matrix",
    "NodeId",
    "SortResult",
    "SortStatus",
    "TopologicalSortError",
    "topo_sort_dfs",
    "topo_sort_removal",
]
