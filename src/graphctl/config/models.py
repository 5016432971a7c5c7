"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, graphctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from graphctl.domain.types import GraphType, TraversalKind


class EngineConfig(BaseModel):
    """[engine] section."""

    model_config = {"frozen": True}

    graph_type: GraphType = GraphType.DIRECTED
    component_traversal: TraversalKind = TraversalKind.DFS_ITERATIVE
    default_traversal: TraversalKind = TraversalKind.BFS_ITERATIVE


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    max_paths: int = Field(default=100, ge=1)


class GraphctlConfig(BaseModel):
    """Root config model matching graphctl.toml structure."""

    model_config = {"frozen": True}

    engine: EngineConfig = Field(default_factory=EngineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
