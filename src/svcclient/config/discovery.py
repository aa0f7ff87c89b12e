"""Config file discovery and loading.

Walks up from the working directory looking for either a dedicated
``svcclient.toml`` or a ``pyproject.toml`` carrying a ``[tool.svcclient]``
table. The dedicated file wins when both live in the same directory.
``SVCCLIENT_CONFIG`` and ``--config`` bypass the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from svcclient.config.models import SvcConfig

CONFIG_FILENAME = "svcclient.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "SVCCLIENT_CONFIG"


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return "svcclient" in data.get("tool", {})


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest config file above *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        dedicated = candidate_dir / CONFIG_FILENAME
        if dedicated.is_file():
            return dedicated
        pyproject = candidate_dir / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def read_config_data(path: Path) -> dict[str, Any]:
    """Parse *path* and return the svcclient settings table.

    Raises ``tomllib.TOMLDecodeError`` for malformed files.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        return dict(data.get("tool", {}).get("svcclient", {}))
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> SvcConfig:
    """Validate the discovered (or given) config; defaults when none exists."""
    path = path or find_config(cwd)
    if path is None:
        return SvcConfig()
    return SvcConfig.model_validate(read_config_data(path))
