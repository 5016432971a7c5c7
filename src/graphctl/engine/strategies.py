"""Graph-type-keyed strategy registries.

The manager resolves one cycle strategy and one component finder per
graph at construction time; callers never choose a strategy themselves.
"""

from __future__ import annotations

from collections.abc import Mapping

from graphctl.domain.errors import NoStrategyRegisteredError
from graphctl.domain.types import GraphType
from graphctl.engine.cycles import CycleStrategy, DirectedCycleStrategy, UndirectedCycleStrategy
from graphctl.engine.scc import DirectedSccFinder, SccFinderStrategy, UndirectedComponentFinder

CYCLE_STRATEGIES: Mapping[GraphType, type[CycleStrategy]] = {
    GraphType.DIRECTED: DirectedCycleStrategy,
    GraphType.UNDIRECTED: UndirectedCycleStrategy,
}

COMPONENT_STRATEGIES: Mapping[GraphType, type[SccFinderStrategy]] = {
    GraphType.DIRECTED: DirectedSccFinder,
    GraphType.UNDIRECTED: UndirectedComponentFinder,
}


def resolve_strategy[S](
    registry: Mapping[GraphType, type[S]],
    graph_type: GraphType,
    *,
    kind: str,
) -> type[S]:
    """Look up the strategy class bound to *graph_type*.

    Raises:
        NoStrategyRegisteredError: If the registry has no entry.
    """
    try:
        return registry[graph_type]
    except KeyError:
        raise NoStrategyRegisteredError(kind, graph_type) from None
