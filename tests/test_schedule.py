"""Tests for named schedules."""

import pytest
from pydantic import ValidationError

from topsched import (
    Algorithm,
    CycleDetectedError,
    InvalidInputError,
    Schedule,
    SortStatus,
    format_order,
)


@pytest.fixture
def pipeline() -> Schedule:
    """fetch -> build -> test, build -> package"""
    return Schedule(
        nodes=["fetch", "build", "test", "package"],
        edges=[("fetch", "build"), ("build", "test"), ("build", "package")],
    )


class TestScheduleValidation:
    def test_names_are_stripped(self) -> None:
        schedule = Schedule(nodes=[" a ", "b\t"], edges=[])
        assert schedule.nodes == ["a", "b"]

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError, match="empty"):
            Schedule(nodes=["a", "  "])

    def test_duplicate_name_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate node name 'a'"):
            Schedule(nodes=["a", "b", "a"])

    def test_unknown_edge_endpoint_rejected(self) -> None:
        with pytest.raises(ValidationError, match="unknown node 'c'"):
            Schedule(nodes=["a", "b"], edges=[("a", "c")])

    def test_edges_default_to_empty(self) -> None:
        assert Schedule(nodes=["a"]).edges == []

    def test_is_frozen(self, pipeline: Schedule) -> None:
        with pytest.raises(ValidationError):
            pipeline.nodes = []  # type: ignore[misc]


class TestScheduleMapping:
    def test_index_follows_declaration_order(self, pipeline: Schedule) -> None:
        assert pipeline.index == {"fetch": 0, "build": 1, "test": 2, "package": 3}

    def test_name_of(self, pipeline: Schedule) -> None:
        assert pipeline.name_of(3) == "package"

    def test_to_graph(self, pipeline: Schedule) -> None:
        graph = pipeline.to_graph()
        assert graph.node_count == 4
        assert graph.edges == ((0, 1), (1, 2), (1, 3))


class TestScheduleSort:
    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_orders_pipeline(self, pipeline: Schedule, algorithm: Algorithm) -> None:
        result = pipeline.sort(algorithm)
        assert result.is_ordered
        assert result.order is not None
        assert pipeline.to_graph().is_topological_order(result.order)
        names = pipeline.names(result)
        assert names[:2] == ["fetch", "build"]
        assert set(names[2:]) == {"test", "package"}

    def test_dfs_start_by_name(self) -> None:
        schedule = Schedule(nodes=["a", "b", "c"])
        assert schedule.names(schedule.sort(Algorithm.DFS, start="c")) == ["b", "a", "c"]

    def test_dfs_default_start_is_first_node(self) -> None:
        schedule = Schedule(nodes=["a", "b", "c"])
        assert schedule.names(schedule.sort(Algorithm.DFS)) == ["c", "b", "a"]

    def test_dfs_unknown_start(self, pipeline: Schedule) -> None:
        result = pipeline.sort(Algorithm.DFS, start="deploy")
        assert result.status is SortStatus.INVALID_INPUT
        assert result.reason == "Unknown start node 'deploy'"

    def test_removal_ignores_start(self, pipeline: Schedule) -> None:
        assert pipeline.sort(Algorithm.REMOVAL, start="deploy").is_ordered

    def test_unknown_algorithm(self, pipeline: Schedule) -> None:
        with pytest.raises(ValueError, match="Unknown algorithm"):
            pipeline.sort("bfs")  # type: ignore[arg-type]

    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_cycle(self, algorithm: Algorithm) -> None:
        schedule = Schedule(nodes=["a", "b"], edges=[("a", "b"), ("b", "a")])
        result = schedule.sort(algorithm)
        assert result.has_cycle
        with pytest.raises(CycleDetectedError):
            schedule.names(result)

    def test_names_of_invalid_result_raises(self, pipeline: Schedule) -> None:
        result = pipeline.sort(Algorithm.DFS, start="deploy")
        with pytest.raises(InvalidInputError, match="deploy"):
            pipeline.names(result)

    def test_empty_schedule(self) -> None:
        schedule = Schedule(nodes=[])
        for algorithm in Algorithm:
            assert schedule.names(schedule.sort(algorithm)) == []


class TestFormatOrder:
    def test_joins_with_arrows(self) -> None:
        assert format_order(["a", "b", "c"]) == "a -> b -> c"

    def test_single(self) -> None:
        assert format_order(["a"]) == "a"

    def test_empty(self) -> None:
        assert format_order([]) == ""


def test_algorithm_values() -> None:
    assert Algorithm("dfs") is Algorithm.DFS
    assert Algorithm("removal") is Algorithm.REMOVAL
