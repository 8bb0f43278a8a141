from nestedstruct.core.attribute_resolver import AttributeResolver
from nestedstruct.core.stages.base_stage import PipelineContext, PipelineStage


class AttributeResolutionStage(PipelineStage):
    """Stage for moving @nested(...) attributes onto nested structs."""

    def __init__(self):
        super().__init__("AttributeResolution")

    def run(self, context: PipelineContext) -> None:
        resolver = AttributeResolver(
            marker_position=context.config.expansion.nested_marker_position
        )
        resolver.resolve(context.get("root"))
