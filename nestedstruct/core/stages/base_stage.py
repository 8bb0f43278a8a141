"""Base classes for pipeline stages."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from nestedstruct.config.models import NestedStructConfig
from nestedstruct.utils.logging_utils import get_logger


@dataclass
class PipelineContext:
    """Shared context for one expansion; never shared between invocations."""

    config: NestedStructConfig
    source: str
    data: dict[str, Any] = field(default_factory=dict)
    results: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Get data from context."""
        return self.data.get(key, default)

    def set(self, key: str, value: Any):
        """Set data in context."""
        self.data[key] = value


class PipelineStage(ABC):
    """Abstract base class for pipeline stages."""

    def __init__(self, name: str):
        self.name = name
        self.logger = get_logger(f"nestedstruct.{self.__class__.__name__}")

    @abstractmethod
    def run(self, context: PipelineContext) -> None:
        """
        Run the stage.

        Args:
            context: Shared pipeline context

        Raises:
            NestedStructError: On the first problem found; no partial output
        """
        pass
