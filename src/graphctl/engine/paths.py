"""PathEnumerator — all simple paths between two vertices."""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphctl.engine.context import GraphContext


class PathEnumerator[T: Hashable]:
    """Backtracking DFS that yields every simple path in adjacency order."""

    def __init__(self, context: GraphContext[T]) -> None:
        self._context = context

    def find_paths(
        self,
        source: T,
        destination: T,
        *,
        max_depth: int | None = None,
    ) -> list[list[T]]:
        """Return all simple paths from *source* to *destination*.

        Args:
            source: Start vertex. An absent source yields no paths.
            destination: End vertex. An absent destination yields no paths.
            max_depth: Maximum number of edges per path (None = unbounded).
        """
        ctx = self._context
        if not ctx.has_vertex(source) or not ctx.has_vertex(destination):
            return []
        if source == destination:
            return [[source]]
        if max_depth is not None and max_depth < 1:
            return []

        results: list[list[T]] = []
        path: list[T] = [source]
        on_path: set[T] = {source}
        stack = [iter(ctx.neighbors(source))]
        while stack:
            for neighbor in stack[-1]:
                if neighbor in on_path:
                    continue
                if neighbor == destination:
                    results.append([*path, neighbor])
                    continue
                if max_depth is not None and len(path) >= max_depth:
                    continue
                path.append(neighbor)
                on_path.add(neighbor)
                stack.append(iter(ctx.neighbors(neighbor)))
                break
            else:
                stack.pop()
                on_path.discard(path.pop())
        return results
