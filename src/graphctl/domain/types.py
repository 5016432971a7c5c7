"""Graph classification and traversal enums."""

from __future__ import annotations

from enum import StrEnum


class GraphType(StrEnum):
    """Edge semantics of a graph, fixed for the graph's lifetime."""

    DIRECTED = "directed"
    UNDIRECTED = "undirected"


class TraversalKind(StrEnum):
    """Available traversal strategies (see :mod:`graphctl.engine.traversal`)."""

    BFS_ITERATIVE = "bfs_iterative"
    BFS_RECURSIVE = "bfs_recursive"
    DFS_ITERATIVE = "dfs_iterative"
    DFS_RECURSIVE = "dfs_recursive"
    DFS_POSTORDER = "dfs_postorder"
