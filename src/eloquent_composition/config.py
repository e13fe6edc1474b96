"""Project layout — where classes live and which namespace they belong to.

The layout is loaded once from ``composition.yaml`` (all keys optional)
and passed explicitly to the qualifier, resolver, stub loader and
generator::

    root_namespace: App
    app_dir: app
    stubs_dir: stubs
    extension: .php
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from eloquent_composition.paths import base_path as default_base_path
from eloquent_composition.paths import config_path as default_config_path

# Class kind → conventional sub-namespace under the root namespace
SUB_NAMESPACES: dict[str, str] = {
    "model": "Models",
    "collection": "Collections",
    "query-builder": "QueryBuilders",
}

DEFAULT_ROOT_NAMESPACE = "App\\"
CONFIG_KEYS = ("root_namespace", "app_dir", "stubs_dir", "extension")


@dataclass(frozen=True)
class ProjectLayout:
    """Filesystem and namespace layout of one Laravel project."""

    base_path: Path
    root_namespace: str = DEFAULT_ROOT_NAMESPACE
    app_dir: str = "app"
    stubs_dir: str = "stubs"
    extension: str = ".php"

    def __post_init__(self) -> None:
        root = self.root_namespace.strip("\\")
        if not root:
            raise ValueError("root_namespace must not be empty")
        object.__setattr__(self, "root_namespace", root + "\\")
        object.__setattr__(self, "base_path", Path(self.base_path))
        if not self.extension.startswith("."):
            object.__setattr__(self, "extension", "." + self.extension)

    @property
    def app_path(self) -> Path:
        return self.base_path / self.app_dir

    @property
    def stubs_path(self) -> Path:
        return self.base_path / self.stubs_dir

    def namespace_exists(self, segment: str) -> bool:
        """True when ``app/<segment>`` is a directory."""
        return (self.app_path / segment.replace("\\", "/")).is_dir()


def load_layout(
    base_path: Path | str | None = None,
    config_path: Path | str | None = None,
) -> ProjectLayout:
    """Build a ProjectLayout from composition.yaml, if present.

    Args:
        base_path: Project root. Defaults to ELOQUENT_COMPOSITION_BASE or cwd.
        config_path: Config file. Defaults to <base_path>/composition.yaml.

    Raises:
        ValueError: If the config file is not a YAML mapping.
        yaml.YAMLError: If the YAML is malformed.
    """
    base = Path(base_path) if base_path else default_base_path()
    path = Path(config_path) if config_path else default_config_path(base)

    data: dict[str, Any] = {}
    if path.is_file():
        with open(path) as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{path} is not a YAML mapping")
        data = loaded

    known = {k: str(data[k]) for k in CONFIG_KEYS if data.get(k) is not None}
    return ProjectLayout(base_path=base, **known)
