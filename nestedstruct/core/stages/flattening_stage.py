from nestedstruct.core.code_generator import CodeGenerator
from nestedstruct.core.flattener import Flattener
from nestedstruct.core.stages.base_stage import PipelineContext, PipelineStage


class FlatteningStage(PipelineStage):
    """Stage for flattening the named tree into declarations."""

    def __init__(self, flattener: Flattener | None = None):
        super().__init__("Flattening")
        self.flattener = flattener or Flattener()

    def run(self, context: PipelineContext) -> None:
        declarations = self.flattener.flatten(context.get("root"))
        context.set("declarations", declarations)
        context.results["declarations"] = declarations


class CodeGenerationStage(PipelineStage):
    """Stage for rendering declarations to source text."""

    def __init__(self):
        super().__init__("CodeGeneration")

    def run(self, context: PipelineContext) -> None:
        output = context.config.output
        generator = CodeGenerator(indent=output.indent, trailing_comma=output.trailing_comma)

        generated = generator.generate(context.get("declarations"))
        context.results["code"] = generated.code
