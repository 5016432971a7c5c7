"""GraphService — graph mutations and analysis behind the ServiceResult contract.

Wraps one :class:`GraphManager`. Engine errors (``GraphError``) become
``ok=False`` results carrying the error's stable code; anything else
propagates. Vertex collections are rendered as lists sorted by their
string form so output is deterministic.
"""

from __future__ import annotations

from typing import Any

from graphctl.domain.errors import GraphError
from graphctl.domain.types import GraphType, TraversalKind
from graphctl.engine.interop import write_graph
from graphctl.engine.manager import GraphManager
from graphctl.services.result import ServiceError, ServiceResult
from graphctl.services.telemetry import trace_span, traced


def _sorted(vertices: Any) -> list[Any]:
    return sorted(vertices, key=str)


class GraphService:
    """Handles graph mutations and queries for one graph."""

    def __init__(self, manager: GraphManager[Any]) -> None:
        self._graph = manager

    @property
    def graph(self) -> GraphManager[Any]:
        return self._graph

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _failure(op: str, exc: GraphError) -> ServiceResult:
        detail = {k: str(v) for k, v in vars(exc).items() if not k.startswith("_")}
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=str(exc), detail=detail),
        )

    def _mutation(self, op: str, data: dict[str, Any]) -> ServiceResult:
        version, stats = self._graph.revision()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **data,
                "version": version,
                "vertex_count": stats.vertex_count,
                "edge_count": stats.edge_count,
            },
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def add_vertex(self, vertex: Any) -> ServiceResult:
        created = self._graph.add_vertex(vertex)
        return self._mutation("add_vertex", {"vertex": vertex, "created": created})

    @traced
    def remove_vertex(self, vertex: Any) -> ServiceResult:
        removed = self._graph.remove_vertex(vertex)
        return self._mutation("remove_vertex", {"vertex": vertex, "removed": removed})

    @traced
    def add_edge(self, source: Any, destination: Any, weight: float = 1.0) -> ServiceResult:
        """Add a weighted edge; self-loops and duplicates come back as errors."""
        try:
            self._graph.add_edge_between(source, destination, weight)
        except GraphError as exc:
            return self._failure("add_edge", exc)
        return self._mutation(
            "add_edge",
            {"source": source, "destination": destination, "weight": float(weight)},
        )

    @traced
    def remove_edge(self, source: Any, destination: Any) -> ServiceResult:
        removed = self._graph.remove_edge_between(source, destination)
        return self._mutation(
            "remove_edge",
            {"source": source, "destination": destination, "removed": removed},
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @traced
    def stats(self) -> ServiceResult:
        stats = self._graph.stats()
        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "type": str(self._graph.graph_type),
                "version": self._graph.version,
                **stats.to_dict(),
            },
        )

    @traced
    def dump(self) -> ServiceResult:
        """Diagnostic adjacency dump."""
        lines = self._graph.dump().splitlines()
        return ServiceResult(
            ok=True,
            op="dump",
            data={"count": len(lines), "lines": lines},
        )

    @traced
    def cycles(self, *, enumerate_all: bool = False) -> ServiceResult:
        """Report cycle existence, optionally with the cycles themselves."""
        with trace_span("contains_cycle"):
            has_cycle = self._graph.contains_cycle()
        data: dict[str, Any] = {"type": str(self._graph.graph_type), "has_cycle": has_cycle}
        if enumerate_all:
            with trace_span("find_cycles") as span:
                found = self._graph.find_cycles()
                if span:
                    span.annotate("cycles", len(found))
            data["count"] = len(found)
            data["cycles"] = found
        return ServiceResult(ok=True, op="cycles", data=data)

    @traced
    def components(self) -> ServiceResult:
        """Strongly connected (directed) or connected (undirected) components."""
        try:
            with trace_span("scc_find") as span:
                found = self._graph.scc_find()
                if span:
                    span.annotate("components", len(found))
        except GraphError as exc:
            return self._failure("scc", exc)

        kind = "strong" if self._graph.graph_type is GraphType.DIRECTED else "connected"
        items = [
            {"component_id": cid, "size": len(members), "members": _sorted(members)}
            for cid, members in found.items()
        ]
        return ServiceResult(
            ok=True,
            op="scc",
            data={"kind": kind, "count": len(items), "components": items},
        )

    @traced
    def reverse(self, *, weights: bool = False) -> ServiceResult:
        """Predecessor view of the graph."""
        reverse: dict[str, Any]
        if weights:
            reverse = {
                str(v): {str(p): w for p, w in sorted(preds.items(), key=lambda kv: str(kv[0]))}
                for v, preds in self._graph.reverse_graph_with_cost().items()
            }
        else:
            reverse = {str(v): _sorted(preds) for v, preds in self._graph.reverse_graph().items()}
        return ServiceResult(
            ok=True,
            op="reverse",
            data={"weights": weights, "count": len(reverse), "reverse": reverse},
        )

    @traced
    def traverse(
        self,
        start: Any,
        *,
        strategy: TraversalKind | str = TraversalKind.BFS_ITERATIVE,
    ) -> ServiceResult:
        strategy = TraversalKind(strategy)
        try:
            order = self._graph.traverse(start, strategy)
        except GraphError as exc:
            return self._failure("traverse", exc)
        return ServiceResult(
            ok=True,
            op="traverse",
            data={
                "start": start,
                "strategy": str(strategy),
                "count": len(order),
                "order": order,
            },
        )

    @traced
    def paths(
        self,
        source: Any,
        target: Any,
        *,
        max_depth: int | None = None,
        limit: int | None = None,
    ) -> ServiceResult:
        """Enumerate simple paths, truncated to *limit* with a warning."""
        try:
            with trace_span("find_paths") as span:
                found = self._graph.find_paths(source, target, max_depth=max_depth)
                if span:
                    span.annotate("paths", len(found))
        except GraphError as exc:
            return self._failure("paths", exc)

        warnings: list[str] = []
        total = len(found)
        if limit is not None and total > limit:
            found = found[:limit]
            warnings.append(f"Showing {limit} of {total} paths")
        return ServiceResult(
            ok=True,
            op="paths",
            data={
                "source": source,
                "target": target,
                "total": total,
                "count": len(found),
                "paths": found,
            },
            warnings=warnings,
        )

    @traced
    def export(self, *, fmt: str = "json") -> ServiceResult:
        try:
            content = write_graph(self._graph, fmt)
        except ValueError as exc:
            return ServiceResult(
                ok=False,
                op="export",
                error=ServiceError(
                    code="INVALID_FORMAT",
                    message=str(exc),
                    detail={"format": fmt, "valid": ["json", "edgelist"]},
                ),
            )
        stats = self._graph.stats()
        return ServiceResult(
            ok=True,
            op="export",
            data={
                "format": fmt,
                "content": content,
                "vertex_count": stats.vertex_count,
                "edge_count": stats.edge_count,
            },
        )
