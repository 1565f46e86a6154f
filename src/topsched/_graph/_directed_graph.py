"""Shared node and edge representation for the sorters."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field

type NodeId = int
"""Dense, zero-based node identifier in ``[0, n)``."""

type Matrix = Sequence[Sequence[bool]]
"""Square boolean relation: ``matrix[i][j]`` is truthy iff edge ``i -> j`` exists."""

type AdjacencyList = Sequence[Sequence[NodeId]] | Mapping[NodeId, Sequence[NodeId]]
"""Direct successors of each node, indexed (or keyed) by node id."""


class InvalidGraphError(ValueError):
    """Raised when a graph is built from edges that reference unknown nodes."""


@dataclass(frozen=True, slots=True)
class DirectedGraph:
    """An immutable directed graph over the node ids ``0..node_count-1``.

    This is the value a caller owns before asking for an ordering. It can be
    projected into either representation the sorters consume:

    - ``to_matrix()`` for the DFS sorter
    - ``to_adjacency_list()`` for the removal sorter

    Parallel edges are kept as given; they do not change which orderings
    are valid.

    Attributes:
        node_count: Number of nodes.
        edges: Directed edges as ``(source, target)`` pairs.

    Example:
        >>> graph = DirectedGraph.from_edges(3, [(0, 1), (1, 2)])
        >>> graph.to_adjacency_list()
        [[1], [2], []]

    """

    node_count: int
    edges: tuple[tuple[NodeId, NodeId], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.node_count < 0:
            msg = f"Node count must not be negative, got {self.node_count}"
            raise InvalidGraphError(msg)
        for src, dst in self.edges:
            if not (0 <= src < self.node_count and 0 <= dst < self.node_count):
                msg = f"Edge {src} -> {dst} references a node outside [0, {self.node_count})"
                raise InvalidGraphError(msg)

    @classmethod
    def from_edges(cls, node_count: int, edges: Iterable[tuple[NodeId, NodeId]]) -> DirectedGraph:
        """Build a graph from a node count and ``(source, target)`` pairs.

        Raises:
            InvalidGraphError: If the count is negative or an edge endpoint
                lies outside ``[0, node_count)``.

        """
        return cls(node_count=node_count, edges=tuple((src, dst) for src, dst in edges))

    def to_matrix(self) -> list[list[bool]]:
        """Return a fresh ``node_count x node_count`` boolean matrix."""
        matrix = [[False] * self.node_count for _ in range(self.node_count)]
        for src, dst in self.edges:
            matrix[src][dst] = True
        return matrix

    def to_adjacency_list(self) -> list[list[NodeId]]:
        """Return fresh successor lists, keeping edge insertion order."""
        adjacency: list[list[NodeId]] = [[] for _ in range(self.node_count)]
        for src, dst in self.edges:
            adjacency[src].append(dst)
        return adjacency

    def successors(self, node: NodeId) -> list[NodeId]:
        """Direct successors of *node*, in edge order."""
        return [dst for src, dst in self.edges if src == node]

    def predecessors(self, node: NodeId) -> list[NodeId]:
        """Direct predecessors of *node*, in edge order."""
        return [src for src, dst in self.edges if dst == node]

    def in_degree(self, node: NodeId) -> int:
        return sum(1 for _, dst in self.edges if dst == node)

    def out_degree(self, node: NodeId) -> int:
        return sum(1 for src, _ in self.edges if src == node)

    def nodes(self) -> Iterator[NodeId]:
        return iter(range(self.node_count))

    def is_topological_order(self, order: Sequence[NodeId]) -> bool:
        """Check that *order* lists every node once and every edge points forward."""
        if len(order) != self.node_count or sorted(order) != list(range(self.node_count)):
            return False
        position = {node: i for i, node in enumerate(order)}
        return all(position[src] < position[dst] for src, dst in self.edges)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, int) and 0 <= node < self.node_count

    def __len__(self) -> int:
        return self.node_count
