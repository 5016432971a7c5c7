"""Locate and parse ``graphctl.toml``.

Lookup order: an explicit path (``--config``), then ``$GRAPHCTL_CONFIG``,
then the nearest ``graphctl.toml`` in the working directory or any parent.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from graphctl.config.models import GraphctlConfig

CONFIG_FILENAME = "graphctl.toml"
CONFIG_ENV_VAR = "GRAPHCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies at *start* (default: cwd).

    A set ``GRAPHCTL_CONFIG`` wins outright: if it names a missing file the
    result is None, and the walk-up is skipped.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> GraphctlConfig:
    """Validate the ``[engine]`` and ``[output]`` tables of a config file.

    Falls back to the built-in defaults when no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return GraphctlConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return GraphctlConfig.model_validate(data)
