"""
Structured logging setup for the freight ledger.
"""

import logging
import sys
from typing import Optional

import structlog

from freight_ledger.core.config import ConfigManager, LoggingSettings, get_config


def configure_logging(
    settings: Optional[LoggingSettings] = None,
    config_manager: Optional[ConfigManager] = None,
) -> None:
    """
    Configure structlog for ledger processes.

    Events go to stderr so stdout stays free for command output.

    Args:
        settings: Explicit logging settings (take precedence)
        config_manager: Config source when settings are not given
    """
    if settings is None:
        settings = (config_manager or get_config()).get_logging_settings()

    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if settings.renderer == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )
