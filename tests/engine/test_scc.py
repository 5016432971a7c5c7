"""Tests for strongly connected and connected component discovery."""

from __future__ import annotations

import networkx as nx
import pytest

from graphctl.domain.errors import UnsupportedOperationForGraphTypeError
from graphctl.domain.types import GraphType, TraversalKind
from graphctl.engine.context import GraphContext
from graphctl.engine.interop import to_networkx
from graphctl.engine.manager import GraphManager
from graphctl.engine.scc import DirectedSccFinder, UndirectedComponentFinder
from tests.conftest import build_graph

D = GraphType.DIRECTED
U = GraphType.UNDIRECTED

EDGES = [
    ("a", "b"),
    ("b", "c"),
    ("c", "a"),
    ("c", "d"),
    ("d", "e"),
    ("e", "d"),
    ("e", "f"),
    ("g", "f"),
    ("f", "g"),
    ("h", "a"),
]


def _as_sets(components: dict[int, set[str]]) -> set[frozenset[str]]:
    return {frozenset(members) for members in components.values()}


class TestKosaraju:
    def test_two_components(self) -> None:
        g = build_graph(D, [("A", "B"), ("B", "A"), ("B", "C"), ("C", "D"), ("D", "C")])
        assert g.scc_find() == {0: {"A", "B"}, 1: {"C", "D"}}

    def test_dag_gives_singletons(self) -> None:
        g = build_graph(D, [("A", "B"), ("B", "C")])
        components = g.scc_find()
        assert sorted(components) == [0, 1, 2]
        assert _as_sets(components) == {frozenset("A"), frozenset("B"), frozenset("C")}

    def test_isolated_vertex_is_own_component(self) -> None:
        g = build_graph(D, [("A", "B"), ("B", "A")], vertices=["Z"])
        assert _as_sets(g.scc_find()) == {frozenset({"A", "B"}), frozenset({"Z"})}

    def test_empty_graph(self, directed: GraphManager[str]) -> None:
        assert directed.scc_find() == {}

    def test_components_partition_vertices(self) -> None:
        g = build_graph(
            D,
            [("1", "2"), ("2", "3"), ("3", "1"), ("3", "4"), ("4", "5"), ("5", "6"), ("6", "4")],
            vertices=["7"],
        )
        components = g.scc_find()
        members = [v for comp in components.values() for v in comp]
        assert sorted(members) == sorted(g.vertices())
        assert len(members) == len(set(members))

    @pytest.mark.parametrize("kind", list(TraversalKind))
    def test_every_traversal_matches_networkx(self, kind: TraversalKind) -> None:
        g: GraphManager[str] = GraphManager(D, component_traversal=kind)
        for src, dst in EDGES:
            g.add_edge_between(src, dst)
        expected = {frozenset(c) for c in nx.strongly_connected_components(to_networkx(g))}
        assert _as_sets(g.scc_find()) == expected

    def test_does_not_mutate_graph(self) -> None:
        g = build_graph(D, [("A", "B"), ("B", "A")])
        before = g.adjacency()
        version = g.version
        g.scc_find()
        assert g.adjacency() == before
        assert g.version == version


class TestConnectedComponents:
    def test_components(self) -> None:
        g = build_graph(U, [("A", "B"), ("B", "C"), ("X", "Y")], vertices=["Z"])
        assert g.scc_find() == {0: {"Z"}, 1: {"A", "B", "C"}, 2: {"X", "Y"}}

    def test_matches_networkx(self) -> None:
        g = build_graph(U, [("1", "2"), ("3", "4"), ("4", "5"), ("6", "2")])
        expected = {frozenset(c) for c in nx.connected_components(to_networkx(g))}
        assert _as_sets(g.scc_find()) == expected


class TestTypeChecks:
    def test_kosaraju_rejects_undirected(self) -> None:
        with pytest.raises(UnsupportedOperationForGraphTypeError) as exc_info:
            DirectedSccFinder(GraphContext(U)).find()
        assert exc_info.value.operation == "strongly_connected_components"

    def test_connected_components_rejects_directed(self) -> None:
        with pytest.raises(UnsupportedOperationForGraphTypeError) as exc_info:
            UndirectedComponentFinder(GraphContext(D)).find()
        assert exc_info.value.operation == "connected_components"
