"""Map qualified class names to their source file paths."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from eloquent_composition.config import ProjectLayout
from eloquent_composition.naming.qualifier import NAMESPACE_SEPARATOR


class PathResolver:
    """``App\\Models\\User`` → ``<base>/app/Models/User.php``.

    Pure: nothing is read from disk, existence is the caller's concern.
    """

    def __init__(self, layout: ProjectLayout):
        self.layout = layout

    def relative_path_for(self, qualified_name: str) -> str:
        """Path below the app directory, as a POSIX string."""
        name = qualified_name
        if name.startswith(self.layout.root_namespace):
            name = name[len(self.layout.root_namespace):]
        segments = [s for s in name.split(NAMESPACE_SEPARATOR) if s]
        return str(PurePosixPath(*segments)) + self.layout.extension

    def path_for(self, qualified_name: str) -> Path:
        return self.layout.app_path / self.relative_path_for(qualified_name)
