"""Stub templates for generated classes and composition blocks."""

from eloquent_composition.stubs.loader import StubLoader, replace_class, replace_namespace

__all__ = ["StubLoader", "replace_class", "replace_namespace"]
