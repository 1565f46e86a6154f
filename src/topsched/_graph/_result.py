"""Outcome of a topological sort."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._directed_graph import NodeId


class SortStatus(StrEnum):
    """How a sort call ended."""

    ORDERED = auto()  # A complete topological ordering was produced
    CYCLE_DETECTED = auto()  # The graph is not a DAG
    INVALID_INPUT = auto()  # The graph or start node was malformed


class TopologicalSortError(ValueError):
    """Base class for errors raised by ``SortResult.unwrap``."""


class CycleDetectedError(TopologicalSortError):
    """The graph contains a cycle, so no ordering exists."""


class InvalidInputError(TopologicalSortError):
    """The graph handed to a sorter was malformed."""


@dataclass(frozen=True, slots=True)
class SortResult:
    """Result of a single sort call.

    A cycle or malformed input is a normal outcome, not an exception, so
    callers must check ``status`` (or the predicates) on every call. A failed
    result never carries a partial ordering.

    Attributes:
        status: How the sort ended.
        order: Every node id exactly once, predecessors first. Only set when
            ``status`` is ``ORDERED``.
        reason: Human-readable diagnostic. Only set on failure.

    """

    status: SortStatus
    order: tuple[NodeId, ...] | None = None
    reason: str | None = None

    @classmethod
    def ordered(cls, order: Iterable[NodeId]) -> SortResult:
        return cls(status=SortStatus.ORDERED, order=tuple(order))

    @classmethod
    def cycle(cls, reason: str) -> SortResult:
        return cls(status=SortStatus.CYCLE_DETECTED, reason=reason)

    @classmethod
    def invalid(cls, reason: str) -> SortResult:
        return cls(status=SortStatus.INVALID_INPUT, reason=reason)

    @property
    def is_ordered(self) -> bool:
        return self.status is SortStatus.ORDERED

    @property
    def has_cycle(self) -> bool:
        return self.status is SortStatus.CYCLE_DETECTED

    @property
    def is_invalid(self) -> bool:
        return self.status is SortStatus.INVALID_INPUT

    def unwrap(self) -> tuple[NodeId, ...]:
        """Return the ordering, or raise if the sort did not produce one.

        Raises:
            CycleDetectedError: If the graph contains a cycle.
            InvalidInputError: If the input was malformed.

        """
        match self.status:
            case SortStatus.ORDERED:
                return self.order or ()
            case SortStatus.CYCLE_DETECTED:
                raise CycleDetectedError(self.reason or "Cycle detected in graph")
            case SortStatus.INVALID_INPUT:
                raise InvalidInputError(self.reason or "Invalid graph input")
