"""Tests for DirectedGraph and SortResult."""

import pytest

from topsched._graph import (
    CycleDetectedError,
    DirectedGraph,
    InvalidGraphError,
    InvalidInputError,
    SortResult,
    SortStatus,
    TopologicalSortError,
)


class TestDirectedGraphConstruction:
    """Tests for DirectedGraph construction and validation."""

    def test_empty_graph(self) -> None:
        graph = DirectedGraph.from_edges(0, [])
        assert len(graph) == 0
        assert graph.to_matrix() == []
        assert graph.to_adjacency_list() == []

    def test_isolated_nodes(self) -> None:
        graph = DirectedGraph(node_count=3)
        assert list(graph.nodes()) == [0, 1, 2]
        assert graph.edges == ()

    def test_edges_are_stored_as_tuple(self) -> None:
        graph = DirectedGraph.from_edges(2, [[0, 1]])  # type: ignore[list-item]
        assert graph.edges == ((0, 1),)

    def test_negative_node_count_raises(self) -> None:
        with pytest.raises(InvalidGraphError, match="must not be negative"):
            DirectedGraph.from_edges(-1, [])

    @pytest.mark.parametrize("edge", [(0, 2), (2, 0), (-1, 0)])
    def test_out_of_range_edge_raises(self, edge: tuple[int, int]) -> None:
        with pytest.raises(InvalidGraphError, match="outside"):
            DirectedGraph.from_edges(2, [edge])

    def test_invalid_graph_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            DirectedGraph.from_edges(1, [(0, 1)])

    def test_contains(self) -> None:
        graph = DirectedGraph(node_count=2)
        assert 0 in graph
        assert 1 in graph
        assert 2 not in graph
        assert "0" not in graph


class TestDirectedGraphProjections:
    """Tests for the matrix and adjacency-list views."""

    def test_to_matrix(self) -> None:
        graph = DirectedGraph.from_edges(3, [(0, 1), (1, 2)])
        assert graph.to_matrix() == [
            [False, True, False],
            [False, False, True],
            [False, False, False],
        ]

    def test_to_matrix_self_loop(self) -> None:
        assert DirectedGraph.from_edges(1, [(0, 0)]).to_matrix() == [[True]]

    def test_to_matrix_returns_fresh_rows(self) -> None:
        graph = DirectedGraph(node_count=2)
        matrix = graph.to_matrix()
        matrix[0][1] = True
        assert graph.to_matrix()[0][1] is False

    def test_to_adjacency_list_keeps_edge_order(self) -> None:
        graph = DirectedGraph.from_edges(3, [(0, 2), (0, 1), (0, 2)])
        assert graph.to_adjacency_list() == [[2, 1, 2], [], []]


class TestDirectedGraphQueries:
    """Tests for neighbour and degree queries."""

    def test_successors_and_predecessors(self) -> None:
        graph = DirectedGraph.from_edges(3, [(0, 1), (0, 2), (1, 2)])
        assert graph.successors(0) == [1, 2]
        assert graph.predecessors(2) == [0, 1]
        assert graph.successors(2) == []
        assert graph.predecessors(0) == []

    def test_degrees(self) -> None:
        graph = DirectedGraph.from_edges(3, [(0, 1), (0, 2), (1, 2)])
        assert graph.out_degree(0) == 2
        assert graph.in_degree(0) == 0
        assert graph.in_degree(2) == 2
        assert graph.out_degree(2) == 0


class TestIsTopologicalOrder:
    """Tests for the ordering check used by callers and tests."""

    def test_valid_order(self) -> None:
        graph = DirectedGraph.from_edges(3, [(0, 1), (0, 2)])
        assert graph.is_topological_order([0, 1, 2])
        assert graph.is_topological_order((0, 2, 1))

    def test_edge_pointing_backwards(self) -> None:
        graph = DirectedGraph.from_edges(3, [(0, 1), (1, 2)])
        assert not graph.is_topological_order([0, 2, 1])

    def test_missing_node(self) -> None:
        graph = DirectedGraph(node_count=3)
        assert not graph.is_topological_order([0, 1])

    def test_repeated_node(self) -> None:
        graph = DirectedGraph(node_count=3)
        assert not graph.is_topological_order([0, 1, 1])

    def test_empty(self) -> None:
        assert DirectedGraph(node_count=0).is_topological_order([])


class TestSortResult:
    """Tests for the sort outcome value."""

    def test_ordered(self) -> None:
        result = SortResult.ordered([2, 0, 1])
        assert result.status is SortStatus.ORDERED
        assert result.order == (2, 0, 1)
        assert result.reason is None
        assert result.is_ordered
        assert not result.has_cycle
        assert not result.is_invalid

    def test_cycle(self) -> None:
        result = SortResult.cycle("loop")
        assert result.has_cycle
        assert result.order is None
        assert result.reason == "loop"

    def test_invalid(self) -> None:
        result = SortResult.invalid("bad")
        assert result.is_invalid
        assert result.order is None

    def test_status_values(self) -> None:
        assert str(SortStatus.ORDERED) == "ordered"
        assert str(SortStatus.CYCLE_DETECTED) == "cycle_detected"
        assert str(SortStatus.INVALID_INPUT) == "invalid_input"

    def test_unwrap_ordered(self) -> None:
        assert SortResult.ordered([1, 0]).unwrap() == (1, 0)

    def test_unwrap_empty_order(self) -> None:
        assert SortResult.ordered([]).unwrap() == ()

    def test_unwrap_cycle_raises(self) -> None:
        with pytest.raises(CycleDetectedError, match="loop"):
            SortResult.cycle("loop").unwrap()

    def test_unwrap_invalid_raises(self) -> None:
        with pytest.raises(InvalidInputError, match="bad"):
            SortResult.invalid("bad").unwrap()

    def test_unwrap_errors_share_a_base(self) -> None:
        assert issubclass(CycleDetectedError, TopologicalSortError)
        assert issubclass(InvalidInputError, TopologicalSortError)
        assert issubclass(TopologicalSortError, ValueError)
