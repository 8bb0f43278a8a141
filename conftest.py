"""Shared pytest fixtures for nestedstruct."""

import pytest

from nestedstruct.core.pipeline import NestedStructPipeline


@pytest.fixture
def pipeline() -> NestedStructPipeline:
    """Pipeline with the default configuration."""
    return NestedStructPipeline()


@pytest.fixture
def strict_pipeline() -> NestedStructPipeline:
    """Pipeline with anonymous nesting disabled."""
    return NestedStructPipeline(config_overrides={"expansion": {"anonymous-nesting": "disabled"}})
