"""Command group: graph loading, traversal and analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from graphctl.commands._base import GraphctlGroup
from graphctl.domain.types import TraversalKind
from graphctl.engine.interop import EXPORT_FORMATS

if TYPE_CHECKING:
    from graphctl.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  graphctl graph stats deps.txt
  graphctl graph cycles deps.txt --list
  graphctl -t undirected graph scc roads.txt
  graphctl graph traverse deps.txt A --strategy dfs_iterative
  graphctl graph paths deps.txt A D --max-depth 4
  graphctl graph export deps.txt --format json"""

_FILE = click.argument("file", type=click.Path(dir_okay=False))


@click.group(cls=GraphctlGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Load a graph file and analyze it."""


@graph.command(
    examples="""\
  graphctl graph stats deps.txt
  graphctl --json graph stats deps.json"""
)
@_FILE
@click.pass_obj
def stats(app: AppContext, file: str) -> None:
    """Show vertex count, edge count and density."""
    app.emit(app.load(file).stats())


@graph.command(
    examples="""\
  graphctl graph dump deps.txt"""
)
@_FILE
@click.pass_obj
def dump(app: AppContext, file: str) -> None:
    """Print the adjacency map, one vertex per line."""
    app.emit(app.load(file).dump())


@graph.command(
    examples="""\
  graphctl graph cycles deps.txt
  graphctl graph cycles deps.txt --list
  graphctl -t undirected graph cycles roads.txt"""
)
@_FILE
@click.option("--list", "list_cycles", is_flag=True, help="Enumerate the cycles found.")
@click.pass_obj
def cycles(app: AppContext, file: str, list_cycles: bool) -> None:
    """Detect cycles using the strategy for the graph type."""
    app.emit(app.load(file).cycles(enumerate_all=list_cycles))


@graph.command(
    examples="""\
  graphctl graph scc deps.txt
  graphctl -t undirected graph scc roads.txt"""
)
@_FILE
@click.pass_obj
def scc(app: AppContext, file: str) -> None:
    """Strongly connected (directed) or connected (undirected) components."""
    app.emit(app.load(file).components())


@graph.command(
    examples="""\
  graphctl graph reverse deps.txt
  graphctl graph reverse deps.txt --weights"""
)
@_FILE
@click.option("--weights", is_flag=True, help="Include the weight of each reversed edge.")
@click.pass_obj
def reverse(app: AppContext, file: str, weights: bool) -> None:
    """Show the predecessors of every vertex."""
    app.emit(app.load(file).reverse(weights=weights))


@graph.command(
    examples="""\
  graphctl graph traverse deps.txt A
  graphctl graph traverse deps.txt A --strategy dfs_postorder
  graphctl -q graph traverse deps.txt A"""
)
@_FILE
@click.argument("start")
@click.option(
    "--strategy",
    type=click.Choice([k.value for k in TraversalKind]),
    default=None,
    help="Traversal strategy (default from [engine] default_traversal).",
)
@click.pass_obj
def traverse(app: AppContext, file: str, start: str, strategy: str | None) -> None:
    """Visit every vertex reachable from START."""
    kind = strategy or app.settings.engine.default_traversal
    app.emit(app.load(file).traverse(start, strategy=kind))


@graph.command(
    examples="""\
  graphctl graph paths deps.txt A D
  graphctl graph paths deps.txt A D --max-depth 3"""
)
@_FILE
@click.argument("source")
@click.argument("target")
@click.option("--max-depth", default=None, type=click.IntRange(min=1), help="Maximum edges per path.")
@click.pass_obj
def paths(app: AppContext, file: str, source: str, target: str, max_depth: int | None) -> None:
    """Enumerate all simple paths from SOURCE to TARGET."""
    app.emit(
        app.load(file).paths(
            source,
            target,
            max_depth=max_depth,
            limit=app.settings.output.max_paths,
        )
    )


@graph.command(
    examples="""\
  graphctl graph export deps.txt
  graphctl graph export deps.json --format edgelist > deps.txt"""
)
@_FILE
@click.option(
    "--format",
    "fmt",
    type=click.Choice(list(EXPORT_FORMATS)),
    default="json",
    help="Output format.",
)
@click.pass_obj
def export(app: AppContext, file: str, fmt: str) -> None:
    """Write the graph as networkx adjacency JSON or an edge list."""
    app.emit(app.load(file).export(fmt=fmt))
