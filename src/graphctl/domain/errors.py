"""Error taxonomy for graph operations.

Every error is a synchronous failure of the invoking call and leaves the
graph unchanged. The service layer maps each kind to a stable error code.
"""

from __future__ import annotations

from typing import Any


class GraphError(Exception):
    """Base class for all graph engine errors."""

    code = "GRAPH_ERROR"


class SelfLoopError(GraphError, ValueError):
    """An edge from a vertex to itself was requested."""

    code = "SELF_LOOP"

    def __init__(self, vertex: Any) -> None:
        self.vertex = vertex
        super().__init__(f"Self-loop is not allowed: {vertex!r}")


class DuplicateEdgeError(GraphError, ValueError):
    """An edge already exists for the ordered (source, destination) pair."""

    code = "EDGE_EXISTS"

    def __init__(self, source: Any, destination: Any) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"Edge already exists: {source!r} -> {destination!r}")


class UnsupportedOperationForGraphTypeError(GraphError):
    """The operation has no defined semantics for the graph's type."""

    code = "UNSUPPORTED_FOR_GRAPH_TYPE"

    def __init__(self, operation: str, graph_type: Any) -> None:
        self.operation = operation
        self.graph_type = graph_type
        super().__init__(f"Operation '{operation}' is not supported for {graph_type} graphs")


class NoStrategyRegisteredError(GraphError, LookupError):
    """No strategy is bound for a graph type. Indicates a wiring defect."""

    code = "NO_STRATEGY"

    def __init__(self, kind: str, graph_type: Any) -> None:
        self.kind = kind
        self.graph_type = graph_type
        super().__init__(f"No {kind} strategy registered for {graph_type} graphs")


class VertexNotFoundError(GraphError, KeyError):
    """An operation required a vertex that is not in the graph."""

    code = "NOT_FOUND"

    def __init__(self, vertex: Any) -> None:
        self.vertex = vertex
        super().__init__(vertex)

    def __str__(self) -> str:
        return f"Vertex not found: {self.vertex!r}"


class InvalidWeightError(GraphError, ValueError):
    """An edge weight is not a finite real number."""

    code = "INVALID_WEIGHT"

    def __init__(self, weight: Any) -> None:
        self.weight = weight
        super().__init__(f"Edge weight must be a finite number, got {weight!r}")


class GraphFileError(GraphError, ValueError):
    """A graph file could not be read or parsed."""

    code = "INVALID_GRAPH_FILE"
