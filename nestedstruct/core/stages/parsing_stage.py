from nestedstruct.core.stages.base_stage import PipelineContext, PipelineStage
from nestedstruct.parsers.struct_parser import StructParser


class ParsingStage(PipelineStage):
    """Stage for parsing the source into a StructSpec tree."""

    def __init__(self):
        super().__init__("Parsing")

    def run(self, context: PipelineContext) -> None:
        expansion = context.config.expansion
        parser = StructParser(anonymous_nesting=expansion.anonymous_nesting_enabled)

        root = parser.parse(context.source)
        struct_count = sum(1 for _ in root.walk())

        context.set("root", root)
        context.results["struct_name"] = root.name
        context.results["struct_count"] = struct_count
        self.logger.debug(f"Parsed {root.name}: {struct_count} struct(s)")
