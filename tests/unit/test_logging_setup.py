"""Tests for logging configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from rich.logging import RichHandler

from youtube_title_updater.infrastructure.config.models import LoggingConfig
from youtube_title_updater.infrastructure.logging_setup import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_console_only() -> None:
    """Test the default configuration logs to the console only."""
    logger = configure_logging(LoggingConfig(level="WARNING"))

    assert logger.level == logging.WARNING
    assert [type(h) for h in logger.handlers] == [RichHandler]


def test_verbose_forces_debug() -> None:
    """Test verbose mode overrides the configured level."""
    logger = configure_logging(LoggingConfig(level="ERROR"), verbose=True)

    assert logger.level == logging.DEBUG


def test_rotating_file_handler(tmp_path: Path) -> None:
    """Test a file path adds a rotating file handler."""
    log_file = tmp_path / "logs" / "app.log"
    config = LoggingConfig(file_path=str(log_file), max_file_size=2048, backup_count=2)

    logger = configure_logging(config)
    logging.getLogger(f"{PACKAGE_LOGGER}.tests").info("hello from tests")

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 2048
    assert file_handlers[0].backupCount == 2
    file_handlers[0].flush()
    assert "hello from tests" in log_file.read_text(encoding="utf-8")


def test_reconfigure_replaces_handlers() -> None:
    """Test configuring twice does not duplicate handlers."""
    configure_logging(LoggingConfig())
    logger = configure_logging(LoggingConfig())

    assert len(logger.handlers) == 1
