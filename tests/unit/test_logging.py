"""Unit tests for logging configuration."""

import structlog

from email_productivity_agent.config import Settings
from email_productivity_agent.utils import configure_logging


def test_configure_logging_filters_below_level(capsys) -> None:
    configure_logging(Settings(_env_file=None, log_level="warning"))
    logger = structlog.get_logger()

    logger.info("hidden_event")
    logger.warning("visible_event")

    out = capsys.readouterr().out
    assert "hidden_event" not in out
    assert "visible_event" in out
    structlog.reset_defaults()


def test_unknown_level_falls_back_to_info(capsys) -> None:
    configure_logging(Settings(_env_file=None, log_level="chatty"))
    logger = structlog.get_logger()

    logger.debug("debug_event")
    logger.info("info_event")

    out = capsys.readouterr().out
    assert "debug_event" not in out
    assert "info_event" in out
    structlog.reset_defaults()
