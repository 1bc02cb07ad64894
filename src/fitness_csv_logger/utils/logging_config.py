"""
Logging configuration and utilities.

Configures the package logger that the store, log and CLI modules write to.
"""

import logging
import sys
from pathlib import Path

from fitness_csv_logger.utils.exceptions import ConfigurationError
from fitness_csv_logger.utils.parameters import LoggingConfig

PACKAGE_LOGGER = "fitness_csv_logger"


def resolve_level(level: str) -> int:
    """
    Translate a level name such as "info" into its logging constant.

    Raises:
        ConfigurationError: If the name is not a standard logging level.
    """
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ConfigurationError(f"Unknown logging level: {level}")
    return value


def setup_logging(config: LoggingConfig, logger_name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Set up logging for the application.

    Handlers are attached to the package logger only, so per-line load
    warnings and save failures from every module end up in the same place.

    Args:
        config: Logging configuration.
        logger_name: Logger to configure. Defaults to the package logger.

    Returns:
        Configured logger instance.
    """
    level = resolve_level(config.level)
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = []

    if config.console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if config.file:
        log_file = Path(config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance by name."""
    return logging.getLogger(name)
