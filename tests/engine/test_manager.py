"""Tests for GraphManager: the locked public surface."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from graphctl.domain.errors import VertexNotFoundError
from graphctl.domain.types import GraphType, TraversalKind
from graphctl.engine.manager import GraphManager
from tests.conftest import build_graph

D = GraphType.DIRECTED
U = GraphType.UNDIRECTED


class TestConstruction:
    def test_defaults_to_directed(self) -> None:
        assert GraphManager().graph_type is GraphType.DIRECTED

    def test_string_graph_type(self) -> None:
        assert GraphManager("undirected").graph_type is GraphType.UNDIRECTED

    def test_invalid_graph_type(self) -> None:
        with pytest.raises(ValueError):
            GraphManager("bidirected")

    def test_repr(self) -> None:
        g = build_graph(D, [("A", "B")])
        assert repr(g) == "GraphManager(type=directed, vertices=2, edges=1)"


class TestTraverse:
    def test_returns_order_and_calls_visit(self) -> None:
        g = build_graph(D, [("A", "B"), ("A", "C"), ("B", "D")])
        seen: list[str] = []
        order = g.traverse("A", TraversalKind.DFS_ITERATIVE, seen.append)
        assert order == ["A", "B", "D", "C"]
        assert seen == order

    def test_default_is_bfs(self) -> None:
        g = build_graph(D, [("A", "B"), ("A", "C"), ("B", "D")])
        assert g.traverse("A") == ["A", "B", "C", "D"]

    def test_absent_start_raises(self, directed: GraphManager[str]) -> None:
        with pytest.raises(VertexNotFoundError):
            directed.traverse("Z")

    def test_unknown_kind_raises(self) -> None:
        g = build_graph(D, [("A", "B")])
        with pytest.raises(ValueError):
            g.traverse("A", "sideways")

    def test_lock_released_when_visit_raises(self) -> None:
        g = build_graph(D, [("A", "B")])

        def explode(vertex: str) -> None:
            raise RuntimeError(vertex)

        with pytest.raises(RuntimeError):
            g.traverse("A", visit=explode)
        # A write would deadlock if the read lock leaked.
        g.add_edge_between("B", "C")
        assert g.has_edge("B", "C")


class TestMetadataAccess:
    def test_neighbors_records_access(self) -> None:
        g = build_graph(D, [("A", "B", 2.0)])
        assert g.neighbors("A") == {"B": 2.0}
        g.neighbors("A")
        meta = g.vertex_metadata("A")
        assert meta is not None
        assert meta.access_count == 2

    def test_neighbors_returns_copy(self) -> None:
        g = build_graph(D, [("A", "B")])
        g.neighbors("A")["Z"] = 1.0
        assert not g.has_vertex("Z")
        assert g.neighbors("A") == {"B": 1.0}

    def test_neighbors_absent_raises(self, directed: GraphManager[str]) -> None:
        with pytest.raises(VertexNotFoundError):
            directed.neighbors("Z")

    def test_set_vertex_property(self) -> None:
        g = build_graph(D, [("A", "B")])
        version = g.version
        g.set_vertex_property("A", "color", "red")
        meta = g.vertex_metadata("A")
        assert meta is not None
        assert meta.properties == {"color": "red"}
        assert g.version == version + 1

    def test_set_vertex_property_absent_raises(self, directed: GraphManager[str]) -> None:
        with pytest.raises(VertexNotFoundError):
            directed.set_vertex_property("Z", "k", "v")

    def test_metadata_snapshot_is_detached(self) -> None:
        g = build_graph(D, [("A", "B")])
        meta = g.vertex_metadata("A")
        assert meta is not None
        meta.properties["k"] = "v"
        fresh = g.vertex_metadata("A")
        assert fresh is not None
        assert fresh.properties == {}

    def test_reads_do_not_bump_version(self) -> None:
        g = build_graph(D, [("A", "B"), ("B", "A")])
        version = g.version
        g.vertices()
        g.stats()
        g.traverse("A")
        g.reverse_graph()
        g.contains_cycle()
        g.find_cycles()
        g.scc_find()
        g.neighbors("A")
        g.dump()
        assert g.version == version


class TestViews:
    def test_reverse_graph(self) -> None:
        g = build_graph(D, [("A", "B"), ("A", "C")])
        assert g.reverse_graph() == {"A": set(), "B": {"A"}, "C": {"A"}}

    def test_reverse_graph_with_cost(self) -> None:
        g = build_graph(D, [("A", "B", 2.0), ("C", "B", 5.0)])
        assert g.reverse_graph_with_cost() == {"A": {}, "B": {"A": 2.0, "C": 5.0}, "C": {}}

    def test_dump(self) -> None:
        g = build_graph(D, [("A", "B", 2.0)])
        assert g.dump() == "A -> {'B': 2.0}\nB -> {}"

    def test_print_graph_logs_each_vertex(self, caplog: pytest.LogCaptureFixture) -> None:
        g = build_graph(D, [("A", "B")])
        with caplog.at_level(logging.INFO, logger="graphctl.engine.manager"):
            g.print_graph()
        messages = [r.getMessage() for r in caplog.records if r.name == "graphctl.engine.manager"]
        assert messages == ["A -> {'B': 1.0}", "B -> {}"]

    def test_adjacency_is_deep_copy(self) -> None:
        g = build_graph(D, [("A", "B")])
        g.adjacency()["A"]["C"] = 1.0
        assert not g.has_edge("A", "C")

    def test_snapshot(self) -> None:
        g = build_graph(U, [("A", "B")])
        snap = g.snapshot()
        assert snap["type"] == "undirected"
        assert snap["adjacency"] == {"A": {"B": 1.0}, "B": {"A": 1.0}}
        assert set(snap["vertex_metadata"]) == {"A", "B"}

    def test_revision(self) -> None:
        g = build_graph(D, [("A", "B")])
        version, stats = g.revision()
        assert version == g.version
        assert (stats.vertex_count, stats.edge_count) == (2, 1)
        g.add_vertex("C")
        assert stats.vertex_count == 2

    def test_stats_is_a_copy(self) -> None:
        g = build_graph(D, [("A", "B")])
        stats = g.stats()
        stats.increment_edge_count()
        assert g.stats().edge_count == 1


class TestInvariants:
    def test_every_neighbor_is_a_vertex(self) -> None:
        g = build_graph(U, [("A", "B"), ("B", "C"), ("C", "D"), ("D", "A")])
        g.remove_vertex("C")
        g.remove_edge_between("A", "B")
        adjacency = g.adjacency()
        for neighbors in adjacency.values():
            assert set(neighbors) <= set(adjacency)
        assert set(g.snapshot()["vertex_metadata"]) == set(adjacency)

    def test_edge_count_matches_adjacency(self) -> None:
        g = build_graph(U, [("A", "B"), ("B", "C"), ("C", "D"), ("D", "A"), ("A", "C")])
        g.remove_vertex("D")
        entries = sum(len(n) for n in g.adjacency().values())
        assert g.stats().edge_count == entries // 2


class TestConcurrency:
    def test_parallel_writers_and_readers(self) -> None:
        g: GraphManager[int] = GraphManager(D)
        writers, per_writer = 8, 200
        stop = threading.Event()
        read_errors: list[Exception] = []

        def write(worker: int) -> None:
            base = worker * per_writer * 2
            for i in range(per_writer):
                g.add_edge_between(base + i, base + i + 1)

        def read() -> None:
            while not stop.is_set():
                try:
                    stats = g.stats()
                    assert stats.edge_count >= 0
                    vertices = g.vertices()
                    if vertices:
                        g.traverse(vertices[0])
                    g.reverse_graph()
                except Exception as exc:
                    read_errors.append(exc)
                    return

        readers = [threading.Thread(target=read) for _ in range(4)]
        for t in readers:
            t.start()
        with ThreadPoolExecutor(max_workers=writers) as pool:
            list(pool.map(write, range(writers)))
        stop.set()
        for t in readers:
            t.join(timeout=10)

        assert read_errors == []
        stats = g.stats()
        assert stats.edge_count == writers * per_writer
        assert stats.vertex_count == writers * (per_writer + 1)
        assert g.version == 1 + stats.vertex_count + stats.edge_count

    def test_concurrent_duplicate_inserts_admit_one(self) -> None:
        g: GraphManager[str] = GraphManager(U)
        outcomes: list[bool] = []
        lock = threading.Lock()

        def insert() -> None:
            try:
                g.add_edge_between("A", "B")
                ok = True
            except ValueError:
                ok = False
            with lock:
                outcomes.append(ok)

        threads = [threading.Thread(target=insert) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        assert outcomes.count(True) == 1
        assert g.stats().edge_count == 1
