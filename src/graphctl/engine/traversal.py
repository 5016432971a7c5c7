"""Pluggable BFS/DFS walkers over a GraphContext.

Every strategy implements the same contract::

    traverse(context, start, visit, visited=None)

*visit* is called once per reached vertex. *visited* may be supplied
(and pre-populated) by the caller so several traversals can share
visitation state; a start vertex that is already visited is skipped.
Strategies are stateless and safe to share.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING

from graphctl.domain.types import TraversalKind

if TYPE_CHECKING:
    from graphctl.engine.context import GraphContext

type Visit[T] = Callable[[T], object]


class GraphTraversal(ABC):
    """Base class for traversal strategies."""

    kind: TraversalKind

    @abstractmethod
    def traverse[T: Hashable](
        self,
        context: GraphContext[T],
        start: T | None,
        visit: Visit[T],
        visited: set[T] | None = None,
    ) -> None:
        """Walk from *start*, calling *visit* for each newly reached vertex."""

    def collect[T: Hashable](
        self,
        context: GraphContext[T],
        start: T | None,
        visited: set[T] | None = None,
    ) -> list[T]:
        """Return the visitation order as a list."""
        order: list[T] = []
        self.traverse(context, start, order.append, visited)
        return order


class BFSIterative(GraphTraversal):
    """Queue-based breadth-first walk in adjacency order."""

    kind = TraversalKind.BFS_ITERATIVE

    def traverse[T: Hashable](
        self,
        context: GraphContext[T],
        start: T | None,
        visit: Visit[T],
        visited: set[T] | None = None,
    ) -> None:
        visited = set() if visited is None else visited
        if start is None or start in visited:
            return
        visited.add(start)
        queue: deque[T] = deque([start])
        while queue:
            vertex = queue.popleft()
            visit(vertex)
            for neighbor in context.neighbors(vertex):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)


class BFSRecursive(GraphTraversal):
    """Breadth-first walk that recurses once per BFS level.

    Visits vertices in the same order as :class:`BFSIterative`; recursion
    depth equals the number of levels, not the number of vertices.
    """

    kind = TraversalKind.BFS_RECURSIVE

    def traverse[T: Hashable](
        self,
        context: GraphContext[T],
        start: T | None,
        visit: Visit[T],
        visited: set[T] | None = None,
    ) -> None:
        visited = set() if visited is None else visited
        if start is None or start in visited:
            return
        visited.add(start)
        self._visit_level(context, [start], visit, visited)

    def _visit_level[T: Hashable](
        self,
        context: GraphContext[T],
        frontier: list[T],
        visit: Visit[T],
        visited: set[T],
    ) -> None:
        if not frontier:
            return
        next_frontier: list[T] = []
        for vertex in frontier:
            visit(vertex)
            for neighbor in context.neighbors(vertex):
                if neighbor not in visited:
                    visited.add(neighbor)
                    next_frontier.append(neighbor)
        self._visit_level(context, next_frontier, visit, visited)


class DFSIterative(GraphTraversal):
    """Explicit-stack depth-first walk (pre-order).

    Neighbors are pushed in reverse so they are popped left to right,
    matching :class:`DFSRecursive` exactly. No recursion limit applies.
    """

    kind = TraversalKind.DFS_ITERATIVE

    def traverse[T: Hashable](
        self,
        context: GraphContext[T],
        start: T | None,
        visit: Visit[T],
        visited: set[T] | None = None,
    ) -> None:
        visited = set() if visited is None else visited
        if start is None:
            return
        stack: list[T] = [start]
        while stack:
            vertex = stack.pop()
            if vertex in visited:
                continue
            visited.add(vertex)
            visit(vertex)
            for neighbor in reversed(context.neighbors(vertex)):
                if neighbor not in visited:
                    stack.append(neighbor)


class DFSRecursive(GraphTraversal):
    """Recursive depth-first walk (pre-order).

    Call-stack depth equals the longest path explored; very deep chains
    can exceed the interpreter's recursion limit.
    """

    kind = TraversalKind.DFS_RECURSIVE

    def traverse[T: Hashable](
        self,
        context: GraphContext[T],
        start: T | None,
        visit: Visit[T],
        visited: set[T] | None = None,
    ) -> None:
        visited = set() if visited is None else visited
        self._dfs(context, start, visit, visited)

    def _dfs[T: Hashable](
        self,
        context: GraphContext[T],
        current: T | None,
        visit: Visit[T],
        visited: set[T],
    ) -> None:
        if current is None or current in visited:
            return
        visited.add(current)
        visit(current)
        for neighbor in context.neighbors(current):
            self._dfs(context, neighbor, visit, visited)


class DFSPostOrder(GraphTraversal):
    """Depth-first walk that visits a vertex only after all its descendants.

    Produces the finishing order used by Kosaraju's first pass. Runs on an
    explicit stack of neighbor iterators.
    """

    kind = TraversalKind.DFS_POSTORDER

    def traverse[T: Hashable](
        self,
        context: GraphContext[T],
        start: T | None,
        visit: Visit[T],
        visited: set[T] | None = None,
    ) -> None:
        visited = set() if visited is None else visited
        if start is None or start in visited:
            return
        visited.add(start)
        stack = [(start, iter(context.neighbors(start)))]
        while stack:
            vertex, pending = stack[-1]
            for neighbor in pending:
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append((neighbor, iter(context.neighbors(neighbor))))
                    break
            else:
                stack.pop()
                visit(vertex)


_TRAVERSALS: dict[TraversalKind, GraphTraversal] = {
    traversal.kind: traversal
    for traversal in (
        BFSIterative(),
        BFSRecursive(),
        DFSIterative(),
        DFSRecursive(),
        DFSPostOrder(),
    )
}


def get_traversal(kind: TraversalKind | str) -> GraphTraversal:
    """Return the shared strategy instance for *kind*.

    Raises:
        ValueError: If *kind* is not a known traversal name.
    """
    return _TRAVERSALS[TraversalKind(kind)]
