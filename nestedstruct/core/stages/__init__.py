"""Pipeline stages, run in order: parse, resolve attributes, name, flatten, render."""

from nestedstruct.core.stages.attribute_stage import AttributeResolutionStage
from nestedstruct.core.stages.base_stage import PipelineContext, PipelineStage
from nestedstruct.core.stages.flattening_stage import CodeGenerationStage, FlatteningStage
from nestedstruct.core.stages.naming_stage import NamingStage
from nestedstruct.core.stages.parsing_stage import ParsingStage

__all__ = [
    "PipelineContext",
    "PipelineStage",
    "ParsingStage",
    "AttributeResolutionStage",
    "NamingStage",
    "FlatteningStage",
    "CodeGenerationStage",
]
