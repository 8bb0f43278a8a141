"""Configuration module for nestedstruct."""

from .models import NestedStructConfig, build_config, load_config, save_config

__all__ = ["NestedStructConfig", "build_config", "load_config", "save_config"]
