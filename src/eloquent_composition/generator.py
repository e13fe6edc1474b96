"""Generator — the make:model / make:collection / make:query-builder flows.

Each flow:
1. Resolve qualified names and target paths
2. Run every precondition check (existence, prior composition)
3. Build all new file contents in memory
4. Write each file once, atomically

A failed check raises before anything is written. Atomicity is per file:
an I/O error on a later write leaves earlier files in place, so new class
files are written before the model update that refers to them.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from eloquent_composition.config import ProjectLayout
from eloquent_composition.engine import (
    COLLECTION_MARKER,
    QUERY_BUILDER_MARKER,
    CompositionEngine,
    ensure_not_composed,
)
from eloquent_composition.errors import ClassAlreadyExists, MissingSourceFile
from eloquent_composition.naming.qualifier import NameQualifier, class_basename, studly
from eloquent_composition.naming.resolver import PathResolver

logger = logging.getLogger(__name__)


@dataclass
class FileWrite:
    path: Path
    action: str  # created | updated
    content: str = field(repr=False, default="")


@dataclass
class GenerationResult:
    """Files produced by one generator run."""

    writes: list[FileWrite] = field(default_factory=list)
    dry_run: bool = False

    @property
    def created(self) -> list[Path]:
        return [w.path for w in self.writes if w.action == "created"]

    @property
    def updated(self) -> list[Path]:
        return [w.path for w in self.writes if w.action == "updated"]


def read_source(path: Path, what: str = "File") -> str:
    if not path.is_file():
        raise MissingSourceFile(path, what)
    # newline="" keeps \r\n and \r intact for the anchor search
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Write text via a temp file in the same directory and os.replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding=encoding, delete=False, dir=path.parent, newline=""
        ) as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
            tmp_path = Path(tmp.name)
        mode = path.stat().st_mode & 0o777 if path.exists() else 0o644
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path and tmp_path.exists():
            tmp_path.unlink()


class Generator:
    """Creates composed Eloquent classes inside one project."""

    def __init__(self, layout: ProjectLayout, dry_run: bool = False, force: bool = False):
        self.layout = layout
        self.dry_run = dry_run
        self.force = force
        self.qualifier = NameQualifier.for_layout(layout)
        self.resolver = PathResolver(layout)
        self.engine = CompositionEngine.for_layout(layout)

    # ── Checks ────────────────────────────────────────────────────

    def _check_new_class(self, path: Path) -> str:
        exists = path.exists()
        if exists and not self.force:
            raise ClassAlreadyExists(path)
        return "updated" if exists else "created"

    def _model_source(self, model: str, marker: str) -> tuple[Path, str]:
        """Model path and text, verified to exist and not be composed yet."""
        q_model = self.qualifier.qualify_model(model)
        path = self.resolver.path_for(q_model)
        text = read_source(path, f"Model {q_model}")
        ensure_not_composed(text, marker, f"Model {q_model}")
        return path, text

    # ── Output ────────────────────────────────────────────────────

    def _commit(self, writes: list[FileWrite]) -> GenerationResult:
        for w in writes:
            if self.dry_run:
                logger.info("[dry run] would write %s", w.path)
                continue
            atomic_write_text(w.path, w.content)
            logger.info("%s %s", w.action.capitalize(), w.path)
        return GenerationResult(writes=writes, dry_run=self.dry_run)

    # ── Plans ─────────────────────────────────────────────────────

    def _plan_collection(
        self,
        name: str,
        model: str | None = None,
        model_source: tuple[Path, str] | None = None,
    ) -> list[FileWrite]:
        q_name = self.qualifier.qualify_collection(name)
        path = self.resolver.path_for(q_name)

        model_write = None
        if model:
            if model_source is None:
                model_source = self._model_source(model, COLLECTION_MARKER)
            model_path, model_text = model_source
            model_write = FileWrite(
                model_path, "updated", self.engine.compose_collection(model_text, q_name, model)
            )

        writes = [
            FileWrite(path, self._check_new_class(path), self.engine.build_collection(q_name, model))
        ]
        if model_write:
            writes.append(model_write)
        return writes

    def _plan_query_builder(
        self,
        name: str,
        model: str | None = None,
        collection: str | None = None,
        model_source: tuple[Path, str] | None = None,
        planned: set[Path] | None = None,
    ) -> list[FileWrite]:
        q_name = self.qualifier.qualify_query_builder(name)
        path = self.resolver.path_for(q_name)

        if collection:
            q_collection = self.qualifier.qualify_collection(collection)
            collection_path = self.resolver.path_for(q_collection)
            if not collection_path.is_file() and collection_path not in (planned or set()):
                raise MissingSourceFile(collection_path, f"Collection {q_collection}")

        model_write = None
        if model:
            if model_source is None:
                model_source = self._model_source(model, QUERY_BUILDER_MARKER)
            model_path, model_text = model_source
            model_write = FileWrite(
                model_path, "updated", self.engine.compose_query_builder(model_text, q_name, model)
            )

        writes = [
            FileWrite(
                path,
                self._check_new_class(path),
                self.engine.build_query_builder(q_name, model, collection),
            )
        ]
        if model_write:
            writes.append(model_write)
        return writes

    # ── Flows ─────────────────────────────────────────────────────

    def make_collection(self, name: str, model: str | None = None) -> GenerationResult:
        """Create a collection class, composing it into model if given."""
        return self._commit(self._plan_collection(name, model))

    def make_query_builder(
        self,
        name: str,
        model: str | None = None,
        collection: str | None = None,
    ) -> GenerationResult:
        """Create a query builder class, composing it into model if given."""
        return self._commit(self._plan_query_builder(name, model, collection))

    def make_model(self, name: str, without_composition: bool = False) -> GenerationResult:
        """Create a model and, unless disabled, its collection and query builder.

        The whole set is planned in memory first; the model is written once,
        last, already carrying both compositions.
        """
        q_name = self.qualifier.qualify_model(name)
        path = self.resolver.path_for(q_name)
        model_write = FileWrite(path, self._check_new_class(path), self.engine.build_model(q_name))
        if without_composition:
            return self._commit([model_write])

        base = studly(class_basename(name))
        collection = f"{base}Collection"
        query_builder = f"{base}QueryBuilder"

        collection_writes = self._plan_collection(collection, q_name, (path, model_write.content))
        model_write.content = collection_writes.pop().content

        builder_writes = self._plan_query_builder(
            query_builder,
            q_name,
            collection,
            (path, model_write.content),
            planned={w.path for w in collection_writes},
        )
        model_write.content = builder_writes.pop().content

        return self._commit([*collection_writes, *builder_writes, model_write])
