"""Topological sort via depth-first search over an adjacency matrix.

Every node moves through three states during one call:

- UNVISITED: not reached yet
- IN_PROGRESS: on the current DFS path (an ancestor of the node being explored)
- DONE: fully explored, already emitted

An edge into an IN_PROGRESS node is a back edge, so the graph has a cycle.
A node is emitted when it becomes DONE, and the emitted sequence is reversed
at the end, which places every node before all of its successors.

The traversal keeps its own work stack instead of recursing, so long chains
do not run into the interpreter's recursion limit. Each stack frame records
the node and the next matrix column to scan, which reproduces the visiting
order of the recursive formulation exactly.
"""

import logging
from collections.abc import Sequence
from enum import IntEnum

from ._directed_graph import Matrix, NodeId
from ._result import SortResult

logger = logging.getLogger(__name__)


class _Visit(IntEnum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


def _validate(graph: Matrix, start: NodeId) -> str | None:
    """Return a diagnostic if *graph* or *start* cannot be sorted, else None."""
    if not isinstance(graph, Sequence) or isinstance(graph, str):
        return f"Adjacency matrix must be a sequence of rows, got {type(graph).__name__}"

    n = len(graph)
    for i, row in enumerate(graph):
        if not isinstance(row, Sequence) or isinstance(row, str):
            return f"Adjacency matrix row {i} must be a sequence, got {type(row).__name__}"
        if len(row) != n:
            return f"Adjacency matrix is not square: row {i} has {len(row)} columns, expected {n}"

    if n and (isinstance(start, bool) or not isinstance(start, int) or not 0 <= start < n):
        return f"Start node {start!r} is not a node id in [0, {n})"

    return None


def _explore(
    graph: Matrix,
    root: NodeId,
    state: list[_Visit],
    post_order: list[NodeId],
) -> NodeId | None:
    """Explore everything reachable from *root* that is still unvisited.

    Finished nodes are appended to *post_order*.

    Returns:
        None on success, or the node that closes a cycle.

    """
    n = len(graph)
    state[root] = _Visit.IN_PROGRESS
    stack: list[tuple[NodeId, int]] = [(root, 0)]

    while stack:
        node, column = stack[-1]
        row = graph[node]
        for neighbor in range(column, n):
            if not row[neighbor]:
                continue
            if state[neighbor] is _Visit.IN_PROGRESS:
                return neighbor
            if state[neighbor] is _Visit.UNVISITED:
                # Resume this node after the neighbour once it finishes.
                stack[-1] = (node, neighbor + 1)
                state[neighbor] = _Visit.IN_PROGRESS
                stack.append((neighbor, 0))
                break
        else:
            state[node] = _Visit.DONE
            post_order.append(node)
            stack.pop()

    return None


def topo_sort_dfs(graph: Matrix, start: NodeId = 0) -> SortResult:
    """Sort the nodes of an adjacency matrix topologically using DFS.

    Traversal starts at *start*. Afterwards the lowest-index node that is
    still unvisited seeds the next traversal, until every node is done, so
    disconnected components and cycles unreachable from *start* are covered.
    Neighbours are scanned in ascending column order.

    Args:
        graph: Square boolean matrix; ``graph[i][j]`` truthy means edge ``i -> j``.
        start: Node id to start the first traversal from. Ignored for an
            empty matrix.

    Returns:
        An ``ORDERED`` result with every node id exactly once,
        ``CYCLE_DETECTED`` if a back edge (including a self loop) is found,
        or ``INVALID_INPUT`` if the matrix is not square or *start* is not a
        node id.

    Example:
        >>> topo_sort_dfs([[False, True], [False, False]]).order
        (0, 1)

    """
    problem = _validate(graph, start)
    if problem is not None:
        logger.debug(f"Rejecting DFS input: {problem}")
        return SortResult.invalid(problem)

    n = len(graph)
    state = [_Visit.UNVISITED] * n
    post_order: list[NodeId] = []

    root: NodeId | None = start if n else None
    while root is not None:
        closing = _explore(graph, root, state, post_order)
        if closing is not None:
            msg = f"Cycle detected: back edge into node {closing}"
            logger.debug(msg)
            return SortResult.cycle(msg)
        root = next((i for i in range(n) if state[i] is _Visit.UNVISITED), None)

    post_order.reverse()
    return SortResult.ordered(post_order)
