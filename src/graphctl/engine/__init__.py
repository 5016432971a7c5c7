"""Engine layer — shared graph state, mutators, and read-only algorithms.

The engine may import from domain only. All concurrency control lives in
:class:`~graphctl.engine.manager.GraphManager`; everything else operates
directly on a :class:`~graphctl.engine.context.GraphContext`.
"""

from graphctl.engine.context import GraphContext
from graphctl.engine.manager import GraphManager

__all__ = [
    "GraphContext",
    "GraphManager",
]
