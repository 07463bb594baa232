"""Process-wide logging configuration."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

from youtube_title_updater.infrastructure.config.models import LoggingConfig

PACKAGE_LOGGER = "youtube_title_updater"


def configure_logging(config: LoggingConfig, verbose: bool = False) -> logging.Logger:
    """
    Attach console and (optionally) rotating file handlers to the package logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        config: Logging settings from the configuration file
        verbose: Force DEBUG level regardless of the configured level

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(rich_tracebacks=True, show_path=False)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)

    if config.file_path:
        log_file = Path(config.file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(config.format))
        logger.addHandler(file_handler)

    logger.debug("Logging configured at level %s", logging.getLevelName(level))
    return logger
