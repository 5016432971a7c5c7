"""Tests for GraphctlSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from graphctl.config.settings import GraphctlSettings
from graphctl.domain.types import GraphType, TraversalKind


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GRAPHCTL_CONFIG", raising=False)
    monkeypatch.delenv("GRAPHCTL_ENGINE__GRAPH_TYPE", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = GraphctlSettings.from_cli(cwd=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.engine.graph_type is GraphType.DIRECTED
        assert settings.engine.component_traversal is TraversalKind.DFS_ITERATIVE
        assert settings.engine.default_traversal is TraversalKind.BFS_ITERATIVE
        assert settings.output.max_paths == 100

    def test_frozen(self, tmp_path: Path) -> None:
        settings = GraphctlSettings.from_cli(cwd=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "graphctl.toml"
        toml.write_text('[engine]\ngraph_type = "undirected"\n[output]\nmax_paths = 5\n')
        settings = GraphctlSettings.from_cli(cwd=tmp_path)
        assert settings.engine.graph_type is GraphType.UNDIRECTED
        assert settings.output.max_paths == 5
        assert settings.engine.default_traversal is TraversalKind.BFS_ITERATIVE
        assert settings.config_path == toml

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[engine]\ndefault_traversal = "dfs_recursive"\n')
        settings = GraphctlSettings.from_cli(config_path=str(custom), cwd=tmp_path)
        assert settings.engine.default_traversal is TraversalKind.DFS_RECURSIVE
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "graphctl.toml").write_text("[engine\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            GraphctlSettings.from_cli(cwd=tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / "graphctl.toml").write_text('[engine]\ngraph_type = "mixed"\n')
        with pytest.raises(ValueError):
            GraphctlSettings.from_cli(cwd=tmp_path)


class TestPriority:
    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = GraphctlSettings.from_cli(cwd=tmp_path, json_output=True, quiet=True)
        assert settings.json_output is True
        assert settings.quiet is True

    def test_graph_type_flag_merges_with_toml(self, tmp_path: Path) -> None:
        (tmp_path / "graphctl.toml").write_text(
            '[engine]\ngraph_type = "directed"\ncomponent_traversal = "bfs_recursive"\n'
        )
        settings = GraphctlSettings.from_cli(cwd=tmp_path, graph_type="undirected")
        assert settings.engine.graph_type is GraphType.UNDIRECTED
        assert settings.engine.component_traversal is TraversalKind.BFS_RECURSIVE

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "graphctl.toml").write_text('[engine]\ngraph_type = "directed"\n')
        monkeypatch.setenv("GRAPHCTL_ENGINE__GRAPH_TYPE", "undirected")
        settings = GraphctlSettings.from_cli(cwd=tmp_path)
        assert settings.engine.graph_type is GraphType.UNDIRECTED
