"""GraphStats — aggregate vertex/edge counters with derived density.

Counters are only changed through the increment/decrement API; every
change recomputes density. Counts never go negative.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class GraphStats:
    """Mutable counters owned by a single :class:`GraphContext`."""

    vertex_count: int = 0
    edge_count: int = 0
    density: float = 0.0

    def increment_vertex_count(self) -> None:
        self.vertex_count += 1
        self.update_density()

    def decrement_vertex_count(self) -> None:
        self.vertex_count = max(0, self.vertex_count - 1)
        self.update_density()

    def increment_edge_count(self) -> None:
        self.edge_count += 1
        self.update_density()

    def decrement_edge_count(self, count: int = 1) -> None:
        """Subtract *count* edges. Negative counts are ignored."""
        if count < 0:
            return
        self.edge_count = max(0, self.edge_count - count)
        self.update_density()

    def update_density(self) -> None:
        """Recompute density as ``E / (V * (V - 1))``, or 0 when V <= 1.

        The directed max-edge denominator is used for both graph types.
        """
        if self.vertex_count <= 1:
            self.density = 0.0
            return
        max_edges = self.vertex_count * (self.vertex_count - 1)
        self.density = self.edge_count / max_edges

    def copy(self) -> GraphStats:
        return GraphStats(
            vertex_count=self.vertex_count,
            edge_count=self.edge_count,
            density=self.density,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
