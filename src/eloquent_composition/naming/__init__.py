"""Class name qualification and file path resolution."""

from eloquent_composition.naming.qualifier import NameQualifier, class_basename, studly
from eloquent_composition.naming.resolver import PathResolver

__all__ = ["NameQualifier", "PathResolver", "class_basename", "studly"]
