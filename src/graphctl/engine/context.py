"""GraphContext — sole owner of a graph's mutable state.

Holds the adjacency map, the vertex metadata side-table, aggregate stats,
and the version/timestamp pair. Every mutator and algorithm reads and
writes through this object; it performs no locking of its own.

INVARIANT: a vertex exists iff it has both an adjacency entry and a
metadata entry, and every neighbor key is itself a top-level vertex.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from graphctl.domain.errors import UnsupportedOperationForGraphTypeError
from graphctl.domain.metadata import VertexMetadata
from graphctl.domain.stats import GraphStats
from graphctl.domain.types import GraphType

logger = logging.getLogger(__name__)

type Adjacency[T] = dict[T, dict[T, float]]


class GraphContext[T: Hashable]:
    """Shared mutable graph state plus the primitive accessors over it."""

    def __init__(
        self,
        graph_type: GraphType | str = GraphType.DIRECTED,
        adjacency: Adjacency[T] | None = None,
    ) -> None:
        self._graph_type = GraphType(graph_type)
        self.adjacency: Adjacency[T] = adjacency if adjacency is not None else {}
        self.vertex_metadata: dict[T, VertexMetadata] = {}
        self.stats = GraphStats()
        self.version = 1
        self.updated_at = datetime.now(UTC)

    @property
    def graph_type(self) -> GraphType:
        return self._graph_type

    @property
    def is_directed(self) -> bool:
        return self._graph_type is GraphType.DIRECTED

    def derive(self, adjacency: Adjacency[T]) -> GraphContext[T]:
        """Build a read-only working context of the same type over *adjacency*.

        Used to run traversals over derived views (e.g. the reverse graph).
        The derived context has no metadata and zeroed stats.
        """
        return GraphContext(self._graph_type, adjacency)

    # ------------------------------------------------------------------
    # Lookups (never fail for absent vertices)
    # ------------------------------------------------------------------

    def vertices(self) -> list[T]:
        return list(self.adjacency)

    def has_vertex(self, vertex: T) -> bool:
        return vertex in self.adjacency

    def neighbors(self, vertex: T) -> list[T]:
        """Return the outgoing neighbors of *vertex* in adjacency order."""
        return list(self.adjacency.get(vertex, {}))

    def neighbors_with_weight(self, vertex: T) -> Mapping[T, float]:
        """Return the live neighbor -> weight map, or an empty mapping."""
        return self.adjacency.get(vertex, {})

    def edge_weight(self, source: T, destination: T) -> float | None:
        return self.adjacency.get(source, {}).get(destination)

    def edge_count_of(self, vertex: T) -> int:
        """Number of adjacency entries stored under *vertex* (0 if absent)."""
        return len(self.adjacency.get(vertex, {}))

    def all_neighbor_maps(self) -> Iterable[dict[T, float]]:
        return self.adjacency.values()

    def metadata_for(self, vertex: T) -> VertexMetadata | None:
        return self.vertex_metadata.get(vertex)

    def require_type(self, graph_type: GraphType, operation: str) -> None:
        """Fail unless this context has *graph_type*.

        Raises:
            UnsupportedOperationForGraphTypeError: On a type mismatch.
        """
        if self._graph_type is not graph_type:
            raise UnsupportedOperationForGraphTypeError(operation, self._graph_type)

    # ------------------------------------------------------------------
    # Stat and version primitives
    # ------------------------------------------------------------------

    def increment_vertex_count(self) -> None:
        self.stats.increment_vertex_count()

    def decrement_vertex_count(self) -> None:
        self.stats.decrement_vertex_count()

    def increment_edge_count(self) -> None:
        self.stats.increment_edge_count()

    def decrement_edge_count(self, count: int = 1) -> None:
        self.stats.decrement_edge_count(count)

    def bump_version(self) -> None:
        """Record a successful mutation. Reads never call this."""
        self.updated_at = datetime.now(UTC)
        self.version += 1
        logger.debug("graph updated at %s (version %d)", self.updated_at.isoformat(), self.version)

    # ------------------------------------------------------------------
    # Derived views (fresh O(V+E) snapshots per call)
    # ------------------------------------------------------------------

    def reverse_graph(self) -> dict[T, set[T]]:
        """Map every vertex to the set of its predecessors, ignoring weights."""
        reverse: dict[T, set[T]] = {vertex: set() for vertex in self.adjacency}
        for vertex, neighbors in self.adjacency.items():
            for neighbor in neighbors:
                reverse.setdefault(neighbor, set()).add(vertex)
        return reverse

    def reverse_graph_with_weight(self) -> Adjacency[T]:
        """Map every vertex to ``{predecessor: original edge weight}``."""
        reverse: Adjacency[T] = {vertex: {} for vertex in self.adjacency}
        for vertex, neighbors in self.adjacency.items():
            for neighbor, weight in neighbors.items():
                reverse.setdefault(neighbor, {})[vertex] = weight
        return reverse

    # ------------------------------------------------------------------
    # Plain rendering
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Render the context as plain nested mappings (JSON-friendly keys)."""
        return {
            "type": str(self._graph_type),
            "version": self.version,
            "updated_at": self.updated_at.isoformat(),
            "stats": self.stats.to_dict(),
            "adjacency": {
                str(vertex): {str(n): w for n, w in neighbors.items()}
                for vertex, neighbors in self.adjacency.items()
            },
            "vertex_metadata": {
                str(vertex): meta.to_dict() for vertex, meta in self.vertex_metadata.items()
            },
        }
