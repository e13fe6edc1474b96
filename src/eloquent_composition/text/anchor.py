"""Anchored line insertion.

Finds the first line containing a marker substring and splices generated
text directly above or below it. The search is plain substring containment,
not structural: callers pick anchors such as ``namespace`` or ``class`` that
are unambiguous in a single-class file.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, Iterator

from eloquent_composition.errors import AnchorNotFound

LINE_BREAK = re.compile(r"\r\n|\r|\n")


class Placement(str, Enum):
    BEFORE = "before"
    AFTER = "after"


def split_lines(text: str) -> list[str]:
    """Split text on ``\\r\\n``, ``\\r`` or ``\\n``, one boundary each."""
    return LINE_BREAK.split(text)


def _line_spans(text: str) -> Iterator[tuple[int, int]]:
    start = 0
    for match in LINE_BREAK.finditer(text):
        yield start, match.start()
        start = match.end()
    yield start, len(text)


def find_anchor(text: str, needle: str | re.Pattern[str]) -> tuple[int, int]:
    """Return the (start, end) offsets of the first line containing needle.

    A compiled pattern matches a line when ``search`` finds it there.

    Raises:
        AnchorNotFound: If no line matches.
    """
    for start, end in _line_spans(text):
        line = text[start:end]
        if isinstance(needle, re.Pattern):
            if needle.search(line):
                return start, end
        elif needle in line:
            return start, end
    raise AnchorNotFound(getattr(needle, "pattern", needle))


def insert_first(
    text: str,
    needle: str | re.Pattern[str],
    blocks: Iterable[str],
    placement: Placement = Placement.BEFORE,
) -> str:
    """Insert blocks around the first line containing needle.

    ``BEFORE`` puts the newline-joined blocks directly above the anchor line.
    ``AFTER`` puts them below it, separated from the anchor by a blank line.
    Everything outside the anchor line is kept byte for byte.
    """
    start, end = find_anchor(text, needle)
    line = text[start:end]
    inserted = "\n".join(blocks)

    if Placement(placement) is Placement.BEFORE:
        replacement = f"{inserted}\n{line}"
    else:
        replacement = f"{line}\n\n{inserted}"

    return text[:start] + replacement + text[end:]


def insert_before_first(text: str, needle: str | re.Pattern[str], blocks: Iterable[str]) -> str:
    return insert_first(text, needle, blocks, Placement.BEFORE)


def insert_after_first(text: str, needle: str | re.Pattern[str], blocks: Iterable[str]) -> str:
    return insert_first(text, needle, blocks, Placement.AFTER)
