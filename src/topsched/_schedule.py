"""Named schedules: the layer between human-readable task names and node ids."""

import logging
from enum import StrEnum, auto
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ._graph import DirectedGraph, NodeId, SortResult, topo_sort_dfs, topo_sort_removal

logger = logging.getLogger(__name__)


class Algorithm(StrEnum):
    """Which sorter orders a schedule."""

    DFS = auto()  # Depth-first search over the adjacency matrix
    REMOVAL = auto()  # Kahn's algorithm over the adjacency list


class ScheduleError(Exception):
    """Error loading or interpreting a schedule description."""


class Schedule(BaseModel):
    """A set of named tasks and the dependencies between them.

    Node names are mapped to dense ids in declaration order: the first name
    is node 0, the second node 1, and so on. An edge ``("a", "b")`` means
    ``a`` must come before ``b``.

    Example:
        >>> schedule = Schedule(nodes=["fetch", "build", "test"], edges=[("fetch", "build"), ("build", "test")])
        >>> schedule.names(schedule.sort(Algorithm.DFS))
        ['fetch', 'build', 'test']

    """

    model_config = ConfigDict(frozen=True)

    nodes: list[str]
    edges: list[tuple[str, str]] = Field(default_factory=list)

    @field_validator("nodes")
    @classmethod
    def _check_node_names(cls, nodes: list[str]) -> list[str]:
        names = [name.strip() for name in nodes]
        seen: set[str] = set()
        for position, name in enumerate(names):
            if not name:
                msg = f"Node name at position {position} is empty"
                raise ValueError(msg)
            if name in seen:
                msg = f"Duplicate node name '{name}'"
                raise ValueError(msg)
            seen.add(name)
        return names

    @model_validator(mode="after")
    def _check_edge_endpoints(self) -> Self:
        known = set(self.nodes)
        for src, dst in self.edges:
            for endpoint in (src, dst):
                if endpoint not in known:
                    msg = f"Edge '{src}' -> '{dst}' references unknown node '{endpoint}'"
                    raise ValueError(msg)
        return self

    @property
    def index(self) -> dict[str, NodeId]:
        """Mapping from node name to its dense id."""
        return {name: i for i, name in enumerate(self.nodes)}

    def name_of(self, node: NodeId) -> str:
        return self.nodes[node]

    def to_graph(self) -> DirectedGraph:
        """Translate names into a ``DirectedGraph`` over dense ids."""
        index = self.index
        return DirectedGraph.from_edges(
            len(self.nodes),
            [(index[src], index[dst]) for src, dst in self.edges],
        )

    def sort(self, algorithm: Algorithm, start: str | None = None) -> SortResult:
        """Order the schedule with the chosen sorter.

        Args:
            algorithm: Which sorter to run.
            start: Name of the node the DFS sorter starts from. Defaults to
                the first declared node. Not used by the removal sorter.

        Returns:
            The sorter's result over node ids. An unknown *start* name is
            reported as ``INVALID_INPUT``.

        """
        graph = self.to_graph()
        logger.debug(f"Sorting {len(graph)} nodes and {len(graph.edges)} edges with {algorithm}")

        match algorithm:
            case Algorithm.DFS:
                start_id = 0
                if start is not None:
                    if start not in self.index:
                        return SortResult.invalid(f"Unknown start node '{start}'")
                    start_id = self.index[start]
                return topo_sort_dfs(graph.to_matrix(), start_id)
            case Algorithm.REMOVAL:
                if start is not None:
                    logger.debug(f"Ignoring start node '{start}' for the removal sorter")
                return topo_sort_removal(graph.to_adjacency_list())
            case _:
                msg = f"Unknown algorithm {algorithm!r}"
                raise ValueError(msg)

    def names(self, result: SortResult) -> list[str]:
        """Translate an ordered result back into node names.

        Raises:
            CycleDetectedError: If the result reports a cycle.
            InvalidInputError: If the result reports malformed input.

        """
        return [self.name_of(node) for node in result.unwrap()]


def format_order(names: list[str]) -> str:
    """Render an ordering the way the scheduler prints it: ``a -> b -> c``."""
    return " -> ".join(names)
