"""Line-based text edits — anchored insertion, imports, annotation blocks."""

from eloquent_composition.text.anchor import (
    Placement,
    insert_after_first,
    insert_before_first,
    insert_first,
)
from eloquent_composition.text.annotation import (
    append_or_create_annotation,
    create_annotation,
    insert_before_class,
)
from eloquent_composition.text.imports import add_imports, extract_imports

__all__ = [
    "Placement",
    "insert_first",
    "insert_before_first",
    "insert_after_first",
    "add_imports",
    "extract_imports",
    "create_annotation",
    "append_or_create_annotation",
    "insert_before_class",
]
