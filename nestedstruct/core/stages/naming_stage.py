from nestedstruct.core.namer import StructNamer
from nestedstruct.core.stages.base_stage import PipelineContext, PipelineStage


class NamingStage(PipelineStage):
    """Stage for naming anonymous nested structs."""

    def __init__(self, namer: StructNamer | None = None):
        super().__init__("Naming")
        self.namer = namer or StructNamer()

    def run(self, context: PipelineContext) -> None:
        root = context.get("root")
        anonymous = sum(1 for spec in root.walk() if spec.is_anonymous)

        self.namer.assign_names(root)

        if anonymous:
            self.logger.debug(f"Assigned names to {anonymous} anonymous struct(s)")
