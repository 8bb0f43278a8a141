"""
nestedstruct: expands struct declarations with inline nested struct bodies
into independent flat struct declarations.
"""

__version__ = "1.0.0"
__author__ = "nestedstruct Team"

from nestedstruct.core.pipeline import ExpansionResult, NestedStructPipeline, expand
from nestedstruct.exceptions import (
    AttributeOrderError,
    ConfigurationError,
    DuplicateFieldNameError,
    MisplacedMarkerError,
    NameCollisionError,
    NestedStructError,
    StructSyntaxError,
)

__all__ = [
    "NestedStructPipeline",
    "ExpansionResult",
    "expand",
    "NestedStructError",
    "StructSyntaxError",
    "ConfigurationError",
    "AttributeOrderError",
    "MisplacedMarkerError",
    "NameCollisionError",
    "DuplicateFieldNameError",
]
