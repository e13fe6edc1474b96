"""Class-level annotation blocks.

An annotation block is the ``/** ... */`` comment directly above the class
declaration, one entry per line::

    /**
     * @method null|User first()
     * @method UserCollection get()
     */

Merging keeps the union of existing and new entries in first-seen order,
so running the same merge twice yields byte-identical text.
"""

from __future__ import annotations

import re
from typing import Iterable

from eloquent_composition.errors import AnchorNotFound, MalformedSource
from eloquent_composition.text.anchor import insert_before_first, split_lines

CLASS_ANCHOR = "class"
OPEN = "/**"
CLOSE = "*/"

# The declaration line itself, so a ``class`` substring on an earlier line
# (``use App\Models\Subclass;``) is not taken for it.
CLASS_DECLARATION = re.compile(r"^\s*(?:(?:abstract|final|readonly)\s+)*class\b")

# A doc comment whose body holds no "*/", followed by optional modifiers
# and the class keyword.
ANNOTATION_PATTERN = re.compile(
    r"/\*\*(?:(?!\*/)[\s\S])*\*/"
    r"(?=\s*(?:(?:abstract|final|readonly)\s+)*class\b)"
)


def unique(entries: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for entry in entries:
        if entry not in seen:
            seen.add(entry)
            result.append(entry)
    return result


def create_annotation(props: Iterable[str]) -> str:
    """Render entries as a doc comment block."""
    lines = [OPEN]
    for prop in props:
        lines.append(f" * {prop}" if prop else " *")
    lines.append(f" {CLOSE}")
    return "\n".join(lines)


def insert_before_class(text: str, blocks: Iterable[str]) -> str:
    """Insert blocks above the class declaration line.

    Falls back to the first line containing ``class`` when no line starts
    with a declaration.
    """
    blocks = list(blocks)
    try:
        return insert_before_first(text, CLASS_DECLARATION, blocks)
    except AnchorNotFound:
        return insert_before_first(text, CLASS_ANCHOR, blocks)


def find_annotation(text: str) -> tuple[int, int] | None:
    """Span of the doc block right above the class declaration, if any."""
    match = ANNOTATION_PATTERN.search(text)
    if match is None:
        return None
    return match.span()


def parse_annotation(block: str) -> list[str]:
    """Entries of a rendered block, comment prefixes stripped."""
    inner = block
    if inner.startswith(OPEN):
        inner = inner[len(OPEN):]
    if inner.endswith(CLOSE):
        inner = inner[: -len(CLOSE)]

    entries = []
    for line in split_lines(inner):
        entry = line.strip()
        if not entry:
            continue
        if entry.startswith("*"):
            entry = entry[1:]
            if entry.startswith(" "):
                entry = entry[1:]
        entries.append(entry.rstrip())
    return entries


def append_annotation(text: str, props: Iterable[str]) -> str:
    """Merge props into the existing class block and return the new block.

    Raises:
        MalformedSource: If the class has no doc block.
    """
    span = find_annotation(text)
    if span is None:
        raise MalformedSource("Class has no annotation block to extend")
    start, end = span
    return create_annotation(unique([*parse_annotation(text[start:end]), *props]))


def append_or_create_annotation(text: str, props: Iterable[str]) -> str:
    """Extend the class doc block with props, creating it if missing.

    An existing block is replaced as a whole by the merged one; a new block
    is inserted above the class declaration.
    """
    props = list(props)
    span = find_annotation(text)

    if span is None:
        return insert_before_class(text, [create_annotation(unique(props))])

    start, end = span
    return text[:start] + append_annotation(text, props) + text[end:]
