"""Logging utilities for nestedstruct.

All package loggers live under the ``nestedstruct`` namespace, so
configuring that one logger controls the parser, resolver, namer,
flattener and pipeline output together.
"""

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "nestedstruct"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter):
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(
    name: str = ROOT_LOGGER,
    level: str = "INFO",
    log_file: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Set up a logger that writes to stderr and optionally to a file.

    Generated code goes to stdout, so console output always targets stderr.
    Calling this again replaces the handlers installed by the previous call.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path; parent directories are created
        format_string: Optional custom format string

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, level.upper())
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(_handler(logging.StreamHandler(sys.stderr), numeric_level, formatter))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), numeric_level, formatter)
        )

    return logger


def configure_logging(logging_config, name: str = ROOT_LOGGER) -> logging.Logger:
    """Apply the ``logging`` section of a NestedStructConfig."""
    return setup_logger(
        name,
        level=logging_config.level,
        log_file=logging_config.file,
        format_string=logging_config.format,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name."""
    return logging.getLogger(name)
