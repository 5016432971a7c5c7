"""EdgeOperations — weighted edge insertion and removal.

For undirected graphs an edge is stored in both directions with the same
weight; both entries are added and removed together and count as one
logical edge in the stats.
"""

from __future__ import annotations

import math
from collections.abc import Hashable
from numbers import Real
from typing import TYPE_CHECKING

from graphctl.domain.errors import DuplicateEdgeError, InvalidWeightError, SelfLoopError
from graphctl.domain.types import GraphType

if TYPE_CHECKING:
    from graphctl.engine.context import GraphContext
    from graphctl.engine.vertices import VertexOperations

DEFAULT_WEIGHT = 1.0


class EdgeOperations[T: Hashable]:
    """Mutators for edges. Callers hold the write lock."""

    def __init__(self, context: GraphContext[T], vertex_ops: VertexOperations[T]) -> None:
        self._context = context
        self._vertex_ops = vertex_ops

    def add_weight_edge(self, source: T, destination: T, weight: float = DEFAULT_WEIGHT) -> None:
        """Insert ``source -> destination`` with *weight*.

        Validation runs before any mutation, so a rejected edge leaves the
        graph unchanged. Missing endpoints are created on success.

        Raises:
            SelfLoopError: If *source* equals *destination*.
            DuplicateEdgeError: If the ordered pair already has an edge.
            InvalidWeightError: If *weight* is not a finite real number.
        """
        weight = self._validate_weight(weight)
        self._validate_no_self_loop(source, destination)
        self._check_duplicate_edge(source, destination)

        ctx = self._context
        self._vertex_ops.add_vertex_if_absent(source)
        self._vertex_ops.add_vertex_if_absent(destination)
        ctx.adjacency[source][destination] = weight
        if ctx.graph_type is GraphType.UNDIRECTED:
            ctx.adjacency[destination][source] = weight
        ctx.increment_edge_count()
        ctx.bump_version()

    def remove_edge_between(self, source: T, destination: T) -> bool:
        """Remove ``source -> destination`` (and its mirror when undirected).

        Returns:
            True if an edge was removed. Stats and version change only then.
        """
        removed = self._remove_one_way_edge(source, destination)
        if removed and self._context.graph_type is GraphType.UNDIRECTED:
            self._remove_one_way_edge(destination, source)
        if removed:
            self._context.decrement_edge_count()
            self._context.bump_version()
        return removed

    def _remove_one_way_edge(self, source: T, destination: T) -> bool:
        neighbors = self._context.adjacency.get(source)
        return neighbors is not None and neighbors.pop(destination, None) is not None

    @staticmethod
    def _validate_no_self_loop(source: T, destination: T) -> None:
        if source == destination:
            raise SelfLoopError(source)

    def _check_duplicate_edge(self, source: T, destination: T) -> None:
        if destination in self._context.neighbors_with_weight(source):
            raise DuplicateEdgeError(source, destination)

    @staticmethod
    def _validate_weight(weight: float) -> float:
        if isinstance(weight, bool) or not isinstance(weight, Real):
            raise InvalidWeightError(weight)
        value = float(weight)
        if not math.isfinite(value):
            raise InvalidWeightError(weight)
        return value
