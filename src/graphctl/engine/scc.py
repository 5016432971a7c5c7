"""Component discovery strategies, one per graph type.

Directed graphs use Kosaraju's two-pass algorithm; undirected graphs
reduce to connected components. Component ids are sequential integers in
discovery order.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import TYPE_CHECKING

from graphctl.domain.types import GraphType, TraversalKind
from graphctl.engine.traversal import get_traversal

if TYPE_CHECKING:
    from graphctl.engine.context import GraphContext
    from graphctl.engine.traversal import GraphTraversal

logger = logging.getLogger(__name__)


class SccFinderStrategy[T: Hashable](ABC):
    """Partition the vertex set into components."""

    graph_type: GraphType

    def __init__(
        self,
        context: GraphContext[T],
        traversal: TraversalKind | str = TraversalKind.DFS_ITERATIVE,
    ) -> None:
        self._context = context
        self._traversal: GraphTraversal = get_traversal(traversal)

    @abstractmethod
    def find(self) -> dict[int, set[T]]:
        """Return ``{component_id: members}``."""


class DirectedSccFinder[T: Hashable](SccFinderStrategy[T]):
    """Kosaraju's algorithm.

    1. Post-order DFS over every undiscovered vertex builds a finishing stack.
    2. The weighted reverse graph is built once.
    3. Vertices are popped in reverse finishing order; each unassigned one
       roots a traversal over the reverse graph that collects every
       reachable unassigned vertex into one component.
    """

    graph_type = GraphType.DIRECTED

    def find(self) -> dict[int, set[T]]:
        ctx = self._context
        ctx.require_type(self.graph_type, "strongly_connected_components")

        finished: list[T] = []
        visited: set[T] = set()
        post_order = get_traversal(TraversalKind.DFS_POSTORDER)
        for vertex in ctx.vertices():
            if vertex not in visited:
                post_order.traverse(ctx, vertex, finished.append, visited)

        reverse_ctx = ctx.derive(ctx.reverse_graph_with_weight())
        assigned: set[T] = set()
        components: dict[int, set[T]] = {}
        while finished:
            root = finished.pop()
            if root in assigned:
                continue
            members: set[T] = set()
            # Sharing ``assigned`` as the visited set keeps the walk inside
            # vertices no earlier component has claimed.
            self._traversal.traverse(reverse_ctx, root, members.add, assigned)
            components[len(components)] = members

        logger.debug("found %d strongly connected component(s)", len(components))
        return components


class UndirectedComponentFinder[T: Hashable](SccFinderStrategy[T]):
    """Connected components: one traversal per unvisited vertex."""

    graph_type = GraphType.UNDIRECTED

    def find(self) -> dict[int, set[T]]:
        ctx = self._context
        ctx.require_type(self.graph_type, "connected_components")

        visited: set[T] = set()
        components: dict[int, set[T]] = {}
        for vertex in ctx.vertices():
            if vertex in visited:
                continue
            members: set[T] = set()
            self._traversal.traverse(ctx, vertex, members.add, visited)
            components[len(components)] = members

        logger.debug("found %d connected component(s)", len(components))
        return components
