"""VertexOperations — vertex insertion and cascading removal."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import TYPE_CHECKING

from graphctl.domain.metadata import VertexMetadata
from graphctl.domain.types import GraphType

if TYPE_CHECKING:
    from graphctl.engine.context import GraphContext

logger = logging.getLogger(__name__)


class VertexOperations[T: Hashable]:
    """Mutators for vertices. Callers hold the write lock."""

    def __init__(self, context: GraphContext[T]) -> None:
        self._context = context

    def add_vertex_if_absent(self, vertex: T) -> bool:
        """Create *vertex* with an empty neighbor map and fresh metadata.

        Idempotent: an existing vertex is left untouched and the version
        is not bumped.

        Returns:
            True if the vertex was created.
        """
        ctx = self._context
        if vertex in ctx.adjacency:
            return False
        ctx.adjacency[vertex] = {}
        ctx.vertex_metadata[vertex] = VertexMetadata()
        ctx.increment_vertex_count()
        ctx.bump_version()
        return True

    def remove_vertex_and_edges(self, vertex: T) -> bool:
        """Remove *vertex* and every edge touching it.

        Incoming entries are deleted from every other neighbor map and
        counted together with the vertex's own outgoing entries. For
        undirected graphs each logical edge was stored twice, so the total
        is halved.

        Returns:
            False (and no change) if the vertex does not exist.
        """
        ctx = self._context
        if vertex not in ctx.adjacency:
            return False

        removed_entries = 0
        for neighbors in ctx.all_neighbor_maps():
            if neighbors.pop(vertex, None) is not None:
                removed_entries += 1
        removed_entries += ctx.edge_count_of(vertex)

        edges_removed = removed_entries
        if ctx.graph_type is GraphType.UNDIRECTED:
            edges_removed //= 2

        del ctx.adjacency[vertex]
        ctx.vertex_metadata.pop(vertex, None)
        ctx.decrement_vertex_count()
        ctx.decrement_edge_count(edges_removed)
        ctx.bump_version()
        logger.debug("removed vertex %r with %d edge(s)", vertex, edges_removed)
        return True
