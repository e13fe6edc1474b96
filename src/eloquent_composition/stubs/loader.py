"""Load stubs and fill in their placeholders."""

from __future__ import annotations

import logging
from pathlib import Path

from eloquent_composition.config import ProjectLayout
from eloquent_composition.errors import MissingSourceFile
from eloquent_composition.naming.qualifier import NAMESPACE_SEPARATOR
from eloquent_composition.stubs.templates import BUILTIN_STUBS

logger = logging.getLogger(__name__)

NAMESPACE_PLACEHOLDERS = ("DummyNamespace", "{{ namespace }}", "{{namespace}}")
ROOT_NAMESPACE_PLACEHOLDERS = ("DummyRootNamespace", "{{ rootNamespace }}", "{{rootNamespace}}")
CLASS_PLACEHOLDERS = ("DummyClass", "{{ class }}", "{{class}}")


def namespace_of(qualified_name: str) -> str:
    """``App\\Models\\User`` → ``App\\Models``."""
    head, _, _ = qualified_name.rpartition(NAMESPACE_SEPARATOR)
    return head


def replace_namespace(stub: str, qualified_name: str, root_namespace: str) -> str:
    for placeholder in NAMESPACE_PLACEHOLDERS:
        stub = stub.replace(placeholder, namespace_of(qualified_name))
    for placeholder in ROOT_NAMESPACE_PLACEHOLDERS:
        stub = stub.replace(placeholder, root_namespace)
    return stub


def replace_class(stub: str, name: str) -> str:
    """Substitute the class placeholders with the unqualified class name."""
    class_name = name.rpartition(NAMESPACE_SEPARATOR)[2]
    for placeholder in CLASS_PLACEHOLDERS:
        stub = stub.replace(placeholder, class_name)
    return stub


class StubLoader:
    """Project stubs first, built-in templates as the fallback."""

    def __init__(self, layout: ProjectLayout):
        self.layout = layout

    def path_for(self, name: str) -> Path:
        return self.layout.stubs_path / f"{name}.stub"

    def get(self, name: str) -> str:
        """Raw stub text.

        Raises:
            MissingSourceFile: If neither a project nor a built-in stub exists.
        """
        path = self.path_for(name)
        if path.is_file():
            logger.debug("Using project stub %s", path)
            return path.read_text(encoding="utf-8")
        if name in BUILTIN_STUBS:
            return BUILTIN_STUBS[name]
        raise MissingSourceFile(path, "Stub")

    def render(self, name: str, qualified_name: str) -> str:
        """Stub with namespace and class placeholders filled in."""
        stub = replace_namespace(self.get(name), qualified_name, self.layout.root_namespace)
        return replace_class(stub, qualified_name)
