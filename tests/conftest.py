"""Shared pytest fixtures and test helpers for graphctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from graphctl.domain.types import GraphType
from graphctl.engine.manager import GraphManager
from graphctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Drop handlers installed by configure_logging after each test.

    Every CLI invocation reconfigures logging onto the runner's stderr,
    which is closed once the invocation returns.
    """
    root = logging.getLogger()
    original_level = root.level
    pkg = logging.getLogger("graphctl")
    pkg_level = pkg.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """``--verbose`` enables telemetry for the whole thread; undo it after each test."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def directed() -> GraphManager[str]:
    """Empty directed graph."""
    return GraphManager(GraphType.DIRECTED)


@pytest.fixture
def undirected() -> GraphManager[str]:
    """Empty undirected graph."""
    return GraphManager(GraphType.UNDIRECTED)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory so no stray graphctl.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.delenv("GRAPHCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def build_graph(
    graph_type: GraphType,
    edges: Iterable[tuple[str, str] | tuple[str, str, float]],
    vertices: Iterable[str] = (),
) -> GraphManager[str]:
    """Build a manager from ``(source, target[, weight])`` tuples."""
    manager: GraphManager[str] = GraphManager(graph_type)
    for vertex in vertices:
        manager.add_vertex(vertex)
    for edge in edges:
        manager.add_edge_between(*edge)
    return manager


def write_edgelist(path: Path, lines: Iterable[str]) -> Path:
    """Write an edge-list graph file and return its path."""
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
