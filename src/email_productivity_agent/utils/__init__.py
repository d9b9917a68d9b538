"""Utility functions for Email Productivity Agent."""

import logging

import structlog

from email_productivity_agent.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog filtering from the application settings.

    Args:
        settings: Application settings providing ``log_level``.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
