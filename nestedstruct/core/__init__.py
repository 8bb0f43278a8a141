"""Core nestedstruct modules."""

from nestedstruct.core.model import (
    Attribute,
    ExternalType,
    FieldDeclaration,
    FieldSpec,
    NestedMarker,
    NestedType,
    StructDeclaration,
    StructSpec,
)
from nestedstruct.core.attribute_resolver import AttributeResolver, resolve_attributes
from nestedstruct.core.namer import StructNamer, assign_names, to_upper_camel
from nestedstruct.core.flattener import Flattener, flatten
from nestedstruct.core.code_generator import CodeGenerator, GeneratedCode
from nestedstruct.core.pipeline import ExpansionResult, NestedStructPipeline, expand

__all__ = [
    "Attribute",
    "NestedMarker",
    "ExternalType",
    "NestedType",
    "FieldSpec",
    "StructSpec",
    "FieldDeclaration",
    "StructDeclaration",
    "AttributeResolver",
    "resolve_attributes",
    "StructNamer",
    "assign_names",
    "to_upper_camel",
    "Flattener",
    "flatten",
    "CodeGenerator",
    "GeneratedCode",
    "NestedStructPipeline",
    "ExpansionResult",
    "expand",
]
