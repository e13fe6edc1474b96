"""Composition error taxonomy.

Every failure the engine or generator raises is a CompositionError, so
callers (the CLI in particular) can catch one type and report it. All of
them are raised before any file is written back.
"""

from __future__ import annotations

from pathlib import Path


class CompositionError(Exception):
    """Base class for composition failures."""


class AnchorNotFound(CompositionError):
    """No line of the text contains the anchor substring."""

    def __init__(self, needle: str) -> None:
        super().__init__(f"Anchor not found: {needle!r}")
        self.needle = needle


class MalformedSource(CompositionError):
    """The text lacks a structural marker an edit depends on."""


class DuplicateCompositionDetected(CompositionError):
    """The text already carries the marker of a previous composition pass."""

    def __init__(self, marker: str, subject: str | None = None) -> None:
        if subject:
            message = f"{subject} already has composition ({marker!r} found)"
        else:
            message = f"Already composed: {marker!r} found"
        super().__init__(message)
        self.marker = marker
        self.subject = subject


class MissingSourceFile(CompositionError):
    """A model, collection or stub file does not exist."""

    def __init__(self, path: Path | str, what: str = "File") -> None:
        super().__init__(f"{what} not found: {path}")
        self.path = Path(path)


class ClassAlreadyExists(CompositionError):
    """The generator target already exists and overwriting is off."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Class already exists: {path}")
        self.path = Path(path)
