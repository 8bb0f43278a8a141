"""Main nestedstruct pipeline orchestration."""

import time
from dataclasses import dataclass, field

from nestedstruct.config.models import NestedStructConfig, build_config, load_config
from nestedstruct.core.model import StructDeclaration
from nestedstruct.core.stages import (
    AttributeResolutionStage,
    CodeGenerationStage,
    FlatteningStage,
    NamingStage,
    ParsingStage,
    PipelineContext,
    PipelineStage,
)
from nestedstruct.utils.logging_utils import get_logger


@dataclass
class ExpansionResult:
    """Result of expanding one nested-struct declaration."""

    struct_name: str
    declarations: list[StructDeclaration] = field(default_factory=list)
    code: str = ""
    execution_time: float = 0.0

    @property
    def struct_names(self) -> list[str]:
        return [decl.name for decl in self.declarations]

    def get(self, name: str) -> StructDeclaration | None:
        """Return the declaration called ``name``, if any."""
        for decl in self.declarations:
            if decl.name == name:
                return decl
        return None

    def to_dict(self) -> dict:
        return {
            "struct": self.struct_name,
            "declarations": [decl.to_dict() for decl in self.declarations],
            "code": self.code,
        }


class NestedStructPipeline:
    """
    Expands nested-struct declarations into flat struct declarations.

    The pipeline holds only configuration; every call to ``expand`` builds
    its own context, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        config_file: str | None = None,
        config_overrides: dict | None = None,
        config: NestedStructConfig | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config_file: Optional path to a YAML configuration file
            config_overrides: Dictionary of configuration overrides
            config: Ready-made configuration, used instead of ``config_file``
        """
        self.logger = get_logger(f"nestedstruct.{self.__class__.__name__}")

        if config is None and config_file:
            config = load_config(config_file)
        self.config = build_config(config, config_overrides)

        self.stages: list[PipelineStage] = [
            ParsingStage(),
            AttributeResolutionStage(),
            NamingStage(),
            FlatteningStage(),
            CodeGenerationStage(),
        ]
        self.logger.debug(
            "Pipeline ready (anonymous-nesting=%s, nested-marker-position=%s)",
            self.config.expansion.anonymous_nesting,
            self.config.expansion.nested_marker_position,
        )

    def expand(self, source: str) -> ExpansionResult:
        """
        Expand ``source`` into flat declarations.

        Raises:
            NestedStructError: On the first error found by any stage
        """
        start_time = time.time()
        context = PipelineContext(config=self.config, source=source)

        for stage in self.stages:
            self.logger.debug(f"Running stage {stage.name}")
            stage.run(context)

        result = ExpansionResult(
            struct_name=context.results["struct_name"],
            declarations=context.results["declarations"],
            code=context.results["code"],
            execution_time=time.time() - start_time,
        )
        self.logger.info(
            f"Expanded {result.struct_name} into {len(result.declarations)} declaration(s)"
        )
        return result


def expand(source: str, config: NestedStructConfig | None = None, **overrides) -> ExpansionResult:
    """
    Expand one nested-struct declaration.

    Keyword overrides are applied to the ``expansion`` section, e.g.
    ``expand(src, anonymous_nesting="disabled")``.
    """
    config_overrides = {"expansion": overrides} if overrides else None
    return NestedStructPipeline(config=config, config_overrides=config_overrides).expand(source)
