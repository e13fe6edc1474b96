"""Project path resolution.

Resolves the Laravel project the commands operate on. Uses environment
variables when available, falls back to conventional defaults.

Environment variables:
    ELOQUENT_COMPOSITION_BASE — project base path (default: current directory)
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "composition.yaml"


def base_path() -> Path:
    """Return the project base directory."""
    return Path(os.environ.get("ELOQUENT_COMPOSITION_BASE", str(Path.cwd())))


def config_path(base: Path | str | None = None) -> Path:
    """Return the path to composition.yaml for a project."""
    return Path(base) / CONFIG_FILENAME if base else base_path() / CONFIG_FILENAME
