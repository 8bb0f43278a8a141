"""Utility helpers for nestedstruct."""

from nestedstruct.utils.logging_utils import configure_logging, get_logger, setup_logger

__all__ = ["configure_logging", "get_logger", "setup_logger"]
