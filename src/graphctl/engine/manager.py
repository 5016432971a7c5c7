"""GraphManager — the locked façade over one GraphContext.

Every public method is one lock-scoped unit: mutations and whole-graph
scans (cycles, components, printing) hold the write lock; pure reads hold
the read lock. Internal helpers operate on the context directly and never
re-enter the lock.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from datetime import datetime
from typing import Any

from graphctl.domain.errors import VertexNotFoundError
from graphctl.domain.metadata import VertexMetadata
from graphctl.domain.stats import GraphStats
from graphctl.domain.types import GraphType, TraversalKind
from graphctl.engine.context import GraphContext
from graphctl.engine.edges import DEFAULT_WEIGHT, EdgeOperations
from graphctl.engine.lock import ReadWriteLock
from graphctl.engine.paths import PathEnumerator
from graphctl.engine.strategies import COMPONENT_STRATEGIES, CYCLE_STRATEGIES, resolve_strategy
from graphctl.engine.traversal import get_traversal
from graphctl.engine.vertices import VertexOperations

logger = logging.getLogger(__name__)


class GraphManager[T: Hashable]:
    """Thread-safe graph with type-dispatched analysis.

    Usage::

        graph = GraphManager(GraphType.DIRECTED)
        graph.add_edge_between("A", "B", 2.5)
        graph.add_edge_between("B", "A")
        graph.scc_find()  # {0: {"A", "B"}}
    """

    def __init__(
        self,
        graph_type: GraphType | str = GraphType.DIRECTED,
        *,
        component_traversal: TraversalKind | str = TraversalKind.DFS_ITERATIVE,
    ) -> None:
        self._context: GraphContext[T] = GraphContext(graph_type)
        self._lock = ReadWriteLock()
        self._vertex_ops = VertexOperations(self._context)
        self._edge_ops = EdgeOperations(self._context, self._vertex_ops)
        self._paths = PathEnumerator(self._context)

        graph_type = self._context.graph_type
        cycle_cls = resolve_strategy(CYCLE_STRATEGIES, graph_type, kind="cycle")
        component_cls = resolve_strategy(COMPONENT_STRATEGIES, graph_type, kind="component")
        self._cycles = cycle_cls(self._context)
        self._components = component_cls(self._context, component_traversal)

    def __repr__(self) -> str:
        stats = self._context.stats
        return (
            f"GraphManager(type={self.graph_type!s}, vertices={stats.vertex_count}, "
            f"edges={stats.edge_count})"
        )

    @property
    def graph_type(self) -> GraphType:
        return self._context.graph_type

    @property
    def context(self) -> GraphContext[T]:
        """The underlying context. Reading it bypasses the lock."""
        return self._context

    # ------------------------------------------------------------------
    # Mutations (write lock)
    # ------------------------------------------------------------------

    def add_vertex(self, vertex: T) -> bool:
        """Add *vertex* if absent. Returns True if it was created."""
        with self._lock.write():
            return self._vertex_ops.add_vertex_if_absent(vertex)

    def remove_vertex(self, vertex: T) -> bool:
        """Remove *vertex* and all incident edges. Returns False if absent."""
        with self._lock.write():
            return self._vertex_ops.remove_vertex_and_edges(vertex)

    def add_edge_between(self, source: T, destination: T, weight: float = DEFAULT_WEIGHT) -> None:
        """Add a weighted edge, creating missing endpoints.

        Raises:
            SelfLoopError: If *source* equals *destination*.
            DuplicateEdgeError: If the edge already exists.
            InvalidWeightError: If *weight* is not a finite number.
        """
        with self._lock.write():
            self._edge_ops.add_weight_edge(source, destination, weight)

    def remove_edge_between(self, source: T, destination: T) -> bool:
        """Remove an edge (both directions when undirected)."""
        with self._lock.write():
            return self._edge_ops.remove_edge_between(source, destination)

    def set_vertex_property(self, vertex: T, key: str, value: Any) -> None:
        """Store a property on an existing vertex's metadata.

        Raises:
            VertexNotFoundError: If *vertex* does not exist.
        """
        with self._lock.write():
            meta = self._require_metadata(vertex)
            meta.properties[key] = value
            self._context.bump_version()

    def neighbors(self, vertex: T) -> dict[T, float]:
        """Return a copy of *vertex*'s weighted neighbors and record the access.

        Raises:
            VertexNotFoundError: If *vertex* does not exist.
        """
        with self._lock.write():
            meta = self._require_metadata(vertex)
            meta.record_access()
            return dict(self._context.neighbors_with_weight(vertex))

    # ------------------------------------------------------------------
    # Whole-graph scans (write lock)
    # ------------------------------------------------------------------

    def contains_cycle(self) -> bool:
        with self._lock.write():
            return self._cycles.contains_cycle()

    def find_cycles(self) -> list[list[T]]:
        with self._lock.write():
            return self._cycles.find_cycles()

    def scc_find(self) -> dict[int, set[T]]:
        """Strongly connected components (directed) or connected components (undirected)."""
        with self._lock.write():
            return self._components.find()

    def print_graph(self) -> None:
        """Log every ``vertex -> neighbors`` line at INFO."""
        with self._lock.write():
            for line in self._dump_lines():
                logger.info(line)

    def dump(self) -> str:
        """Return the adjacency list as ``vertex -> {neighbor: weight}`` lines."""
        with self._lock.write():
            return "\n".join(self._dump_lines())

    # ------------------------------------------------------------------
    # Reads (read lock)
    # ------------------------------------------------------------------

    def reverse_graph(self) -> dict[T, set[T]]:
        with self._lock.read():
            return self._context.reverse_graph()

    def reverse_graph_with_cost(self) -> dict[T, dict[T, float]]:
        with self._lock.read():
            return self._context.reverse_graph_with_weight()

    def traverse(
        self,
        start: T,
        kind: TraversalKind | str = TraversalKind.BFS_ITERATIVE,
        visit: Callable[[T], object] | None = None,
    ) -> list[T]:
        """Walk from *start* with the *kind* strategy and return the visit order.

        *visit*, if given, is also called for each vertex. Exceptions it
        raises propagate after the lock is released.

        Raises:
            VertexNotFoundError: If *start* does not exist.
        """
        traversal = get_traversal(kind)
        order: list[T] = []

        def _record(vertex: T) -> None:
            order.append(vertex)
            if visit is not None:
                visit(vertex)

        with self._lock.read():
            if not self._context.has_vertex(start):
                raise VertexNotFoundError(start)
            traversal.traverse(self._context, start, _record)
        return order

    def find_paths(
        self,
        source: T,
        destination: T,
        *,
        max_depth: int | None = None,
    ) -> list[list[T]]:
        """All simple paths from *source* to *destination*.

        Raises:
            VertexNotFoundError: If *source* does not exist.
        """
        with self._lock.read():
            if not self._context.has_vertex(source):
                raise VertexNotFoundError(source)
            return self._paths.find_paths(source, destination, max_depth=max_depth)

    def vertices(self) -> list[T]:
        with self._lock.read():
            return self._context.vertices()

    def has_vertex(self, vertex: T) -> bool:
        with self._lock.read():
            return self._context.has_vertex(vertex)

    def has_edge(self, source: T, destination: T) -> bool:
        with self._lock.read():
            return self._context.edge_weight(source, destination) is not None

    def edge_weight(self, source: T, destination: T) -> float | None:
        with self._lock.read():
            return self._context.edge_weight(source, destination)

    def vertex_metadata(self, vertex: T) -> VertexMetadata | None:
        """Return a snapshot of *vertex*'s metadata, or None if absent."""
        with self._lock.read():
            meta = self._context.metadata_for(vertex)
            return meta.copy() if meta is not None else None

    def stats(self) -> GraphStats:
        with self._lock.read():
            return self._context.stats.copy()

    @property
    def version(self) -> int:
        with self._lock.read():
            return self._context.version

    def revision(self) -> tuple[int, GraphStats]:
        """Return the version and a stats copy read under one lock scope."""
        with self._lock.read():
            return self._context.version, self._context.stats.copy()

    @property
    def updated_at(self) -> datetime:
        with self._lock.read():
            return self._context.updated_at

    def adjacency(self) -> dict[T, dict[T, float]]:
        """Return a deep copy of the adjacency list."""
        with self._lock.read():
            return {v: dict(neighbors) for v, neighbors in self._context.adjacency.items()}

    def snapshot(self) -> dict[str, Any]:
        """Plain nested-dict rendering of the whole context."""
        with self._lock.read():
            return self._context.to_dict()

    # ------------------------------------------------------------------
    # Helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _require_metadata(self, vertex: T) -> VertexMetadata:
        meta = self._context.metadata_for(vertex)
        if meta is None:
            raise VertexNotFoundError(vertex)
        return meta

    def _dump_lines(self) -> list[str]:
        return [
            f"{vertex} -> {neighbors}" for vertex, neighbors in self._context.adjacency.items()
        ]
