"""Composition engine — the edit recipes applied to class sources.

Two generic recipes:

1. ``inject_composition`` — add imports and append a method block inside
   the class body, refusing when a marker shows it was done before.
2. ``inject_annotation`` — create or extend the class doc block.

The Eloquent-specific methods (``compose_collection``, ``build_model``, ...)
combine them with stubs and qualified names. Everything here works on
strings; reading and writing files is the generator's job.
"""

from __future__ import annotations

import logging
from typing import Iterable

from eloquent_composition.config import ProjectLayout
from eloquent_composition.errors import DuplicateCompositionDetected, MalformedSource
from eloquent_composition.naming.qualifier import NameQualifier, class_basename
from eloquent_composition.stubs.loader import StubLoader, replace_class
from eloquent_composition.text.annotation import (
    append_or_create_annotation,
    create_annotation,
    insert_before_class,
)
from eloquent_composition.text.imports import add_imports

logger = logging.getLogger(__name__)

# Markers left in a model by a previous composition pass
COLLECTION_MARKER = "function newCollection"
QUERY_BUILDER_MARKER = "function newEloquentBuilder"


def is_composed(text: str, marker: str) -> bool:
    return marker in text


def ensure_not_composed(text: str, marker: str, subject: str | None = None) -> None:
    """Raise DuplicateCompositionDetected when marker is already present."""
    if is_composed(text, marker):
        raise DuplicateCompositionDetected(marker, subject)


def append_to_class_body(text: str, block: str) -> str:
    """Put block in front of the last closing brace of the text.

    Raises:
        MalformedSource: If the text has no closing brace.
    """
    head, brace, tail = text.rpartition("}")
    if not brace:
        raise MalformedSource("Source has no closing brace")
    return head + block + tail + "}\n"


def collection_annotation_props(model: str) -> list[str]:
    return [f"@method null|{class_basename(model)} first()"]


def query_builder_annotation_props(model: str, collection: str | None = None) -> list[str]:
    props = [f"@method null|{class_basename(model)} first()"]
    if collection:
        props.append(f"@method {class_basename(collection)} get()")
    return props


def model_annotation_props(query_builder: str) -> list[str]:
    return [f"@method static {class_basename(query_builder)} query()"]


class CompositionEngine:
    """Applies composition recipes to in-memory class sources."""

    def __init__(
        self,
        qualifier: NameQualifier,
        stubs: StubLoader,
    ):
        self.qualifier = qualifier
        self.stubs = stubs

    @classmethod
    def for_layout(cls, layout: ProjectLayout) -> CompositionEngine:
        return cls(NameQualifier.for_layout(layout), StubLoader(layout))

    # ── Generic recipes ───────────────────────────────────────────

    def inject_composition(
        self,
        text: str,
        imports: Iterable[str],
        block: str,
        marker: str | None = None,
        subject: str | None = None,
    ) -> str:
        """Add imports and append block to the class body.

        The marker check runs before any edit, so a duplicate leaves the
        text untouched.
        """
        if marker:
            ensure_not_composed(text, marker, subject)
        text = add_imports(text, imports)
        return append_to_class_body(text, block)

    def inject_annotation(self, text: str, props: Iterable[str]) -> str:
        return append_or_create_annotation(text, props)

    def composition_block(self, stub_name: str, class_name: str) -> str:
        """Composition stub rendered for class_name, led by a blank line."""
        body = replace_class(self.stubs.get(stub_name), class_name)
        return "\n" + body.strip("\r\n")

    # ── Model compositions ────────────────────────────────────────

    def compose_collection(self, model_text: str, collection: str, model: str | None = None) -> str:
        """Wire a custom collection into a model via ``newCollection``."""
        q_collection = self.qualifier.qualify_collection(collection)
        logger.debug("Composing collection %s", q_collection)
        return self.inject_composition(
            model_text,
            [q_collection],
            self.composition_block("collection.composition", q_collection),
            marker=COLLECTION_MARKER,
            subject=f"Model {model}" if model else None,
        )

    def compose_query_builder(self, model_text: str, query_builder: str, model: str | None = None) -> str:
        """Wire a custom query builder into a model via ``newEloquentBuilder``.

        Also annotates the model with ``@method static <Builder> query()``.
        """
        q_builder = self.qualifier.qualify_query_builder(query_builder)
        logger.debug("Composing query builder %s", q_builder)
        text = self.inject_composition(
            model_text,
            [q_builder],
            self.composition_block("query-builder.composition", q_builder),
            marker=QUERY_BUILDER_MARKER,
            subject=f"Model {model}" if model else None,
        )
        return self.inject_annotation(text, model_annotation_props(q_builder))

    # ── Class builders ────────────────────────────────────────────

    def build_model(self, name: str) -> str:
        return self.stubs.render("model", self.qualifier.qualify_model(name))

    def build_collection(self, name: str, model: str | None = None) -> str:
        text = self.stubs.render("collection", self.qualifier.qualify_collection(name))
        if not model:
            return text

        q_model = self.qualifier.qualify_model(model)
        text = add_imports(text, [q_model])
        return insert_before_class(
            text, [create_annotation(collection_annotation_props(q_model))]
        )

    def build_query_builder(
        self,
        name: str,
        model: str | None = None,
        collection: str | None = None,
    ) -> str:
        text = self.stubs.render("query-builder", self.qualifier.qualify_query_builder(name))
        if not model:
            return text

        imports = [self.qualifier.qualify_model(model)]
        if collection:
            imports.append(self.qualifier.qualify_collection(collection))
        text = add_imports(text, imports)
        return insert_before_class(
            text,
            [create_annotation(query_builder_annotation_props(model, collection))],
        )
