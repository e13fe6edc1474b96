"""Import (``use``) statement injection."""

from __future__ import annotations

import re
from typing import Iterable

from eloquent_composition.errors import MalformedSource
from eloquent_composition.text.anchor import insert_after_first

NAMESPACE_ANCHOR = "namespace"
USE_PATTERN = re.compile(r"use (.*);")


def extract_imports(text: str) -> set[str]:
    """Names already imported by ``use <Name>;`` lines."""
    return set(USE_PATTERN.findall(text))


def format_import(name: str) -> str:
    return f"use {name};"


def missing_imports(text: str, names: Iterable[str]) -> list[str]:
    """Names not yet imported, in input order, each listed once."""
    existing = extract_imports(text)
    missing: list[str] = []
    for name in names:
        if name not in existing and name not in missing:
            missing.append(name)
    return missing


def add_imports(text: str, names: Iterable[str]) -> str:
    """Add ``use`` lines for every name not imported yet.

    The lines go after the namespace declaration, separated from it by a
    blank line. Returns the text unchanged when nothing is missing.

    Raises:
        MalformedSource: If the text has no namespace declaration.
    """
    if NAMESPACE_ANCHOR not in text:
        raise MalformedSource("Source has no namespace declaration")

    missing = missing_imports(text, names)
    if not missing:
        return text

    return insert_after_first(text, NAMESPACE_ANCHOR, [format_import(n) for n in missing])
