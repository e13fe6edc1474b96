"""eloquent-composition — compose Eloquent models with custom collections and query builders.

The engine edits PHP class sources as plain text: it adds ``use``
statements after the namespace declaration, merges ``@method`` entries
into the class doc block and appends composition methods to the class
body, all without a PHP parser.
"""

from eloquent_composition.config import ProjectLayout, load_layout
from eloquent_composition.engine import CompositionEngine
from eloquent_composition.errors import (
    AnchorNotFound,
    CompositionError,
    DuplicateCompositionDetected,
    MalformedSource,
)

__version__ = "0.1.0"

__all__ = [
    "ProjectLayout",
    "load_layout",
    "CompositionEngine",
    "CompositionError",
    "AnchorNotFound",
    "MalformedSource",
    "DuplicateCompositionDetected",
]
