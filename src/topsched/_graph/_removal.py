"""Topological sort by repeatedly removing nodes with no incoming edges (Kahn's algorithm)."""

import logging
from collections.abc import Iterable, Mapping, Sequence

from ._directed_graph import AdjacencyList, NodeId
from ._result import SortResult

logger = logging.getLogger(__name__)


def _as_rows(graph: AdjacencyList) -> list[tuple[NodeId, ...]] | str:
    """Copy *graph* into successor tuples indexed by node id.

    Returns a diagnostic string instead when the shape is unusable.
    """
    if isinstance(graph, Mapping):
        n = len(graph)
        if set(graph) != set(range(n)):
            return f"Adjacency list keys must be exactly the node ids 0..{n - 1}"
        raw = [graph[node] for node in range(n)]
    elif isinstance(graph, Sequence) and not isinstance(graph, str):
        raw = list(graph)
    else:
        return f"Adjacency list must be a sequence or mapping, got {type(graph).__name__}"

    rows: list[tuple[NodeId, ...]] = []
    for node, successors in enumerate(raw):
        if not isinstance(successors, Iterable) or isinstance(successors, str):
            return f"Successors of node {node} must be a collection of node ids"
        rows.append(tuple(successors))
    return rows


def topo_sort_removal(graph: AdjacencyList) -> SortResult:
    """Sort the nodes of an adjacency list topologically using Kahn's algorithm.

    The in-degree of every node is counted in one pass over all successor
    lists. Nodes with in-degree zero form the working set. Each step takes one
    node out of the working set, emits it, and decrements the in-degree of its
    successors; successors that reach zero join the working set. If fewer than
    ``n`` nodes were emitted, the rest lie on or behind a cycle.

    The working set is a LIFO stack: the initial zero in-degree nodes are
    pushed in ascending id order (so the highest one is taken first), and
    successors that reach zero are pushed in adjacency order.

    Args:
        graph: Successor lists, either a sequence indexed by node id or a
            mapping keyed by ``0..n-1``. Duplicate successors count as
            parallel edges.

    Returns:
        An ``ORDERED`` result with every node id exactly once,
        ``CYCLE_DETECTED`` if some nodes never reach in-degree zero, or
        ``INVALID_INPUT`` if a successor id is outside ``[0, n)``.

    Example:
        >>> topo_sort_removal([[1, 2], [], []]).order
        (0, 2, 1)

    """
    rows = _as_rows(graph)
    if isinstance(rows, str):
        logger.debug(f"Rejecting removal input: {rows}")
        return SortResult.invalid(rows)

    n = len(rows)
    in_degree = [0] * n
    for node, successors in enumerate(rows):
        for succ in successors:
            if isinstance(succ, bool) or not isinstance(succ, int) or not 0 <= succ < n:
                msg = f"Node {node} has successor {succ!r} outside [0, {n})"
                logger.debug(f"Rejecting removal input: {msg}")
                return SortResult.invalid(msg)
            in_degree[succ] += 1

    ready = [node for node in range(n) if in_degree[node] == 0]
    order: list[NodeId] = []

    while ready:
        node = ready.pop()
        order.append(node)
        for succ in rows[node]:
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                ready.append(succ)

    if len(order) != n:
        msg = f"Cycle detected: {n - len(order)} node(s) never reached in-degree zero"
        logger.debug(msg)
        return SortResult.cycle(msg)

    return SortResult.ordered(order)
