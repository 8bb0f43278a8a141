"""
Pydantic models for nestedstruct configuration.

Provides type-safe, validated configuration with clear error messages.
Keys may be written with dashes (``anonymous-nesting``) or underscores
(``anonymous_nesting``).
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class ExpansionConfig(BaseModel):
    """Configuration for parsing and attribute resolution."""

    anonymous_nesting: str = Field(
        default="enabled",
        alias="anonymous-nesting",
        description="Whether a brace body with no preceding identifier is legal.",
    )
    nested_marker_position: str = Field(
        default="after",
        alias="nested-marker-position",
        description="Which end of a field's attribute run holds @nested(...) markers.",
    )

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "populate_by_name": True,
    }

    @field_validator("anonymous_nesting", mode="before")
    @classmethod
    def validate_anonymous_nesting(cls, v: Any) -> str:
        """Validate anonymous nesting switch; booleans are normalised."""
        if isinstance(v, bool):
            return "enabled" if v else "disabled"
        allowed = {"enabled", "disabled"}
        if not isinstance(v, str) or v.lower() not in allowed:
            raise ValueError(f"anonymous-nesting must be one of {allowed}, got: {v}")
        return v.lower()

    @field_validator("nested_marker_position")
    @classmethod
    def validate_marker_position(cls, v: str) -> str:
        """Validate marker position."""
        allowed = {"before", "after"}
        if v.lower() not in allowed:
            raise ValueError(f"nested-marker-position must be one of {allowed}, got: {v}")
        return v.lower()

    @property
    def anonymous_nesting_enabled(self) -> bool:
        return self.anonymous_nesting == "enabled"


class OutputConfig(BaseModel):
    """Configuration for rendering generated declarations."""

    indent: int = Field(default=4, ge=1, le=16, description="Spaces per indentation level.")
    trailing_comma: bool = Field(
        default=True, description="Emit a comma after the last field of each struct."
    )

    model_config = {"extra": "forbid", "validate_assignment": True}


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Logging level.")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format.",
    )
    file: str | None = Field(default=None, description="Optional log file path.")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"level must be one of {allowed}, got: {v}")
        return v_upper


class NestedStructConfig(BaseModel):
    """Main nestedstruct configuration."""

    expansion: ExpansionConfig = Field(default_factory=ExpansionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "extra": "forbid",  # Raise error on unknown fields
        "validate_assignment": True,  # Validate on attribute assignment
    }


def normalize_keys(data: Any) -> Any:
    """Recursively rewrite dashed mapping keys to their underscore form."""
    if isinstance(data, dict):
        return {
            (key.replace("-", "_") if isinstance(key, str) else key): normalize_keys(value)
            for key, value in data.items()
        }
    return data


def merge_overrides(config: dict, overrides: dict) -> dict:
    """Recursively apply configuration overrides onto ``config`` in place."""
    for key, value in overrides.items():
        if isinstance(value, dict) and key in config and isinstance(config[key], dict):
            merge_overrides(config[key], value)
        else:
            config[key] = value
    return config


def build_config(
    base: NestedStructConfig | None = None, overrides: dict | None = None
) -> NestedStructConfig:
    """
    Produce a validated config from ``base`` with ``overrides`` merged on top.

    Raises:
        pydantic.ValidationError: If the merged configuration is invalid
    """
    base = base or NestedStructConfig()
    if not overrides:
        return base
    data = base.model_dump()
    merge_overrides(data, normalize_keys(overrides))
    return NestedStructConfig.model_validate(data)


def load_config(config_file: str = "config/config.yaml") -> NestedStructConfig:
    """
    Load and validate nestedstruct configuration from YAML file.

    Args:
        config_file: Path to YAML configuration file

    Returns:
        Validated NestedStructConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If configuration is invalid
    """
    config_path = Path(config_file)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML configuration: {e}") from e

    if config_dict is None:
        config_dict = {}

    try:
        return NestedStructConfig.model_validate(normalize_keys(config_dict))
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def save_config(config: NestedStructConfig, config_file: str = "config/config.yaml") -> None:
    """
    Save nestedstruct configuration to YAML file.

    Args:
        config: NestedStructConfig instance to save
        config_file: Path to YAML configuration file
    """
    config_path = Path(config_file)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Dashed keys are the documented spelling
    config_dict = config.model_dump(exclude_none=True, by_alias=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
