"""networkx interop — conversion and graph-file loading.

Graph files come in two formats, both parsed by networkx:

- ``.json``: networkx adjacency JSON (``json_graph.adjacency_data``).
- anything else: whitespace edge list, one ``source target [weight]``
  per line, ``#`` starts a comment. Missing weights default to 1.0.

Vertex ids are loaded as strings from either format.

Edge-list files cannot express isolated vertices; use JSON for those.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import networkx as nx
from networkx.readwrite import json_graph

from graphctl.domain.errors import GraphFileError
from graphctl.domain.types import GraphType, TraversalKind
from graphctl.engine.manager import GraphManager

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "edgelist")


def to_networkx(manager: GraphManager[Any]) -> nx.Graph[Any]:
    """Build a networkx graph mirroring *manager*.

    Returns a ``DiGraph`` for directed graphs and a ``Graph`` otherwise.
    Edge weights become the ``weight`` attribute; vertex properties become
    node attributes.
    """
    g: nx.Graph[Any] = nx.DiGraph() if manager.graph_type is GraphType.DIRECTED else nx.Graph()
    adjacency = manager.adjacency()
    for vertex in adjacency:
        meta = manager.vertex_metadata(vertex)
        g.add_node(vertex, **(meta.properties if meta is not None else {}))
    for vertex, neighbors in adjacency.items():
        for neighbor, weight in neighbors.items():
            g.add_edge(vertex, neighbor, weight=weight)
    return g


def from_networkx(
    graph: nx.Graph[Any],
    graph_type: GraphType | str | None = None,
    *,
    component_traversal: TraversalKind | str = TraversalKind.DFS_ITERATIVE,
) -> GraphManager[Any]:
    """Build a GraphManager from a networkx graph.

    The type is inferred from ``graph.is_directed()`` unless *graph_type*
    is given, in which case the graph is converted first.

    Raises:
        SelfLoopError: If *graph* contains a self-loop.
    """
    if graph_type is None:
        resolved = GraphType.DIRECTED if graph.is_directed() else GraphType.UNDIRECTED
    else:
        resolved = GraphType(graph_type)

    if resolved is GraphType.UNDIRECTED and graph.is_directed():
        graph = graph.to_undirected()
    elif resolved is GraphType.DIRECTED and not graph.is_directed():
        graph = graph.to_directed()

    manager: GraphManager[Any] = GraphManager(resolved, component_traversal=component_traversal)
    # Nodes first so isolated vertices survive.
    for node, attrs in graph.nodes(data=True):
        manager.add_vertex(node)
        for key, value in attrs.items():
            manager.set_vertex_property(node, str(key), value)
    for source, target, attrs in graph.edges(data=True):
        manager.add_edge_between(source, target, attrs.get("weight", 1.0))
    logger.debug("loaded %r from networkx", manager)
    return manager


def read_graph(
    path: Path | str,
    graph_type: GraphType | str = GraphType.DIRECTED,
    *,
    component_traversal: TraversalKind | str = TraversalKind.DFS_ITERATIVE,
) -> GraphManager[Any]:
    """Load a graph file into a new GraphManager.

    Vertex ids are loaded as strings in both formats. For JSON files the
    file's own ``directed`` flag is converted to *graph_type*, with a
    warning when the two disagree.

    Raises:
        GraphFileError: If the file is missing, unreadable or malformed.
    """
    path = Path(path)
    graph_type = GraphType(graph_type)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read graph file {path}: {exc}"
        raise GraphFileError(msg) from exc

    try:
        if path.suffix == ".json":
            data = json.loads(raw)
            if not isinstance(data, dict):
                msg = f"Invalid graph file {path}: top level must be a JSON object"
                raise GraphFileError(msg)
            graph = nx.relabel_nodes(json_graph.adjacency_graph(data), str)
            file_type = GraphType.DIRECTED if graph.is_directed() else GraphType.UNDIRECTED
            if file_type is not graph_type:
                logger.warning(
                    "graph file %s is %s; loading it as %s",
                    path,
                    file_type,
                    graph_type,
                )
        else:
            create_using = nx.DiGraph if graph_type is GraphType.DIRECTED else nx.Graph
            graph = nx.parse_edgelist(
                raw.splitlines(),
                create_using=create_using,
                nodetype=str,
                data=(("weight", float),),
            )
    except GraphFileError:
        raise
    except (ValueError, TypeError, IndexError, KeyError, nx.NetworkXError) as exc:
        msg = f"Invalid graph file {path}: {exc}"
        raise GraphFileError(msg) from exc

    return from_networkx(graph, graph_type, component_traversal=component_traversal)


def write_graph(manager: GraphManager[Any], fmt: str = "json") -> str:
    """Serialize *manager* as ``json`` (adjacency JSON) or ``edgelist`` text.

    Raises:
        ValueError: If *fmt* is unknown.
    """
    g = to_networkx(manager)
    if fmt == "json":
        return json.dumps(json_graph.adjacency_data(g), indent=2, default=str)
    if fmt == "edgelist":
        return "\n".join(nx.generate_edgelist(g, delimiter=" ", data=["weight"]))
    msg = f"Unknown export format: {fmt!r}. Expected one of {list(EXPORT_FORMATS)}"
    raise ValueError(msg)
