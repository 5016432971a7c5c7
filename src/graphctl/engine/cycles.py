"""Cycle detection strategies, one per graph type.

Both strategies run depth-first search on an explicit stack of neighbor
iterators, so deep graphs do not hit the interpreter's recursion limit.
The stack doubles as the current DFS path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterator
from typing import TYPE_CHECKING

from graphctl.domain.types import GraphType

if TYPE_CHECKING:
    from graphctl.engine.context import GraphContext


class CycleStrategy[T: Hashable](ABC):
    """Cycle existence and enumeration for one graph type."""

    graph_type: GraphType

    def __init__(self, context: GraphContext[T]) -> None:
        self._context = context

    @abstractmethod
    def contains_cycle(self) -> bool:
        """Return True if any cycle exists."""

    @abstractmethod
    def find_cycles(self) -> list[list[T]]:
        """Return the cycles discovered by one full DFS, in discovery order."""

    def _check_type(self, operation: str) -> None:
        self._context.require_type(self.graph_type, operation)


class DirectedCycleStrategy[T: Hashable](CycleStrategy[T]):
    """White/gray/black DFS: an edge to a vertex on the current path is a back edge.

    Vertices leave the on-path set when their DFS frame finishes, but stay
    in the global visited set so every vertex is expanded once.
    """

    graph_type = GraphType.DIRECTED

    def contains_cycle(self) -> bool:
        self._check_type("contains_cycle")
        ctx = self._context
        visited: set[T] = set()
        on_path: set[T] = set()
        for root in ctx.vertices():
            if root in visited:
                continue
            visited.add(root)
            on_path.add(root)
            stack: list[tuple[T, Iterator[T]]] = [(root, iter(ctx.neighbors(root)))]
            while stack:
                vertex, pending = stack[-1]
                for neighbor in pending:
                    if neighbor in on_path:
                        return True
                    if neighbor not in visited:
                        visited.add(neighbor)
                        on_path.add(neighbor)
                        stack.append((neighbor, iter(ctx.neighbors(neighbor))))
                        break
                else:
                    stack.pop()
                    on_path.discard(vertex)
        return False

    def find_cycles(self) -> list[list[T]]:
        """Report one cycle per back edge.

        On a back edge ``current -> w`` the cycle is the suffix of the
        current DFS path from ``w`` through ``current``, in path order.
        """
        self._check_type("find_cycles")
        ctx = self._context
        cycles: list[list[T]] = []
        visited: set[T] = set()
        for root in ctx.vertices():
            if root in visited:
                continue
            path: list[T] = [root]
            position: dict[T, int] = {root: 0}
            visited.add(root)
            stack: list[Iterator[T]] = [iter(ctx.neighbors(root))]
            while stack:
                for neighbor in stack[-1]:
                    if neighbor in position:
                        cycles.append(path[position[neighbor] :])
                    elif neighbor not in visited:
                        visited.add(neighbor)
                        position[neighbor] = len(path)
                        path.append(neighbor)
                        stack.append(iter(ctx.neighbors(neighbor)))
                        break
                else:
                    stack.pop()
                    del position[path.pop()]
        return cycles


class UndirectedCycleStrategy[T: Hashable](CycleStrategy[T]):
    """Parent-tracking DFS: a visited neighbor other than the parent closes a cycle.

    Each undirected edge is stored in both directions, so the edge back to
    the immediate parent is skipped.
    """

    graph_type = GraphType.UNDIRECTED

    def contains_cycle(self) -> bool:
        self._check_type("contains_cycle")
        ctx = self._context
        visited: set[T] = set()
        for root in ctx.vertices():
            if root in visited:
                continue
            visited.add(root)
            stack: list[tuple[T | None, Iterator[T]]] = [(None, iter(ctx.neighbors(root)))]
            path: list[T] = [root]
            while stack:
                parent, pending = stack[-1]
                current = path[-1]
                for neighbor in pending:
                    if neighbor == parent:
                        continue
                    if neighbor in visited:
                        return True
                    visited.add(neighbor)
                    path.append(neighbor)
                    stack.append((current, iter(ctx.neighbors(neighbor))))
                    break
                else:
                    stack.pop()
                    path.pop()
        return False

    def find_cycles(self) -> list[list[T]]:
        """Report each distinct cycle once.

        When a non-parent neighbor is already on the current path, the
        cycle is the path suffix from that neighbor to the current vertex.
        Cycles with the same vertex set as one already collected are
        suppressed.
        """
        self._check_type("find_cycles")
        ctx = self._context
        cycles: list[list[T]] = []
        seen: set[frozenset[T]] = set()
        visited: set[T] = set()
        for root in ctx.vertices():
            if root in visited:
                continue
            visited.add(root)
            path: list[T] = [root]
            position: dict[T, int] = {root: 0}
            stack: list[tuple[T | None, Iterator[T]]] = [(None, iter(ctx.neighbors(root)))]
            while stack:
                parent, pending = stack[-1]
                current = path[-1]
                for neighbor in pending:
                    if neighbor == parent:
                        continue
                    if neighbor in position:
                        cycle = path[position[neighbor] :]
                        key = frozenset(cycle)
                        if key not in seen:
                            seen.add(key)
                            cycles.append(cycle)
                    elif neighbor not in visited:
                        visited.add(neighbor)
                        position[neighbor] = len(path)
                        path.append(neighbor)
                        stack.append((current, iter(ctx.neighbors(neighbor))))
                        break
                else:
                    stack.pop()
                    del position[path.pop()]
        return cycles
