"""Fully qualified class names under the project's root namespace."""

from __future__ import annotations

import re
from typing import Callable

from eloquent_composition.config import SUB_NAMESPACES, ProjectLayout

NAMESPACE_SEPARATOR = "\\"

NamespaceSelector = Callable[[str], str]


def class_basename(name: str) -> str:
    """Last segment of a class name (``App\\Models\\User`` → ``User``)."""
    return name.replace("/", NAMESPACE_SEPARATOR).rstrip(NAMESPACE_SEPARATOR).split(NAMESPACE_SEPARATOR)[-1]


def studly(value: str) -> str:
    """``user_profile`` / ``user-profile`` → ``UserProfile``."""
    words = re.split(r"[-_\s]+", value.strip())
    return "".join(w[:1].upper() + w[1:] for w in words if w)


class NameQualifier:
    """Resolves short or partial class names into qualified ones.

    ``User`` becomes ``App\\Models\\User`` when ``app/Models`` exists and
    ``App\\User`` otherwise. Names already under the root namespace are
    returned as they are.
    """

    def __init__(self, root_namespace: str, namespace_exists: Callable[[str], bool]):
        self.root_namespace = root_namespace.strip(NAMESPACE_SEPARATOR) + NAMESPACE_SEPARATOR
        self.namespace_exists = namespace_exists

    @classmethod
    def for_layout(cls, layout: ProjectLayout) -> NameQualifier:
        return cls(layout.root_namespace, layout.namespace_exists)

    def specified_namespace(self, root: str, segment: str) -> str:
        """Append segment to root when the matching directory exists."""
        if self.namespace_exists(segment):
            return f"{root}{NAMESPACE_SEPARATOR}{segment}"
        return root

    def selector(self, kind: str) -> NamespaceSelector:
        """Sub-namespace selector for a class kind (model, collection, ...)."""
        segment = SUB_NAMESPACES[kind]
        return lambda root: self.specified_namespace(root, segment)

    def qualify(self, name: str, selector: NamespaceSelector | None = None) -> str:
        """Qualify name, prefixing the selected namespace until rooted.

        The selector receives the root namespace without its trailing
        separator and must return a namespace under the root; anything else
        could never terminate and raises ValueError. So does a blank name.
        """
        given = name
        name = name.strip().strip("\\/").replace("/", NAMESPACE_SEPARATOR)
        if not class_basename(name).strip():
            raise ValueError(f"Invalid class name: {given!r}")
        select = selector or (lambda root: root)

        # Terminates after one pass: the prefix check below keeps the
        # selector from producing a name that needs qualifying again.
        while not name.startswith(self.root_namespace):
            prefix = select(self.root_namespace.rstrip(NAMESPACE_SEPARATOR))
            if not (prefix + NAMESPACE_SEPARATOR).startswith(self.root_namespace):
                raise ValueError(
                    f"Namespace {prefix!r} is not under root namespace {self.root_namespace!r}"
                )
            name = f"{prefix}{NAMESPACE_SEPARATOR}{name}"

        return name

    def qualify_model(self, name: str) -> str:
        return self.qualify(name, self.selector("model"))

    def qualify_collection(self, name: str) -> str:
        return self.qualify(name, self.selector("collection"))

    def qualify_query_builder(self, name: str) -> str:
        return self.qualify(name, self.selector("query-builder"))

    def default_namespace(self, kind: str) -> str:
        """Namespace new classes of a kind are generated into."""
        return self.selector(kind)(self.root_namespace.rstrip(NAMESPACE_SEPARATOR))
