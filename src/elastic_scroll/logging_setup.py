"""
Logging configuration.

Provides structured logging with JSON or console output. The library only
emits events; applications opt in to formatting by calling
configure_logging() once at startup.
"""

import logging
from typing import Optional

import structlog

from elastic_scroll.config import ElasticSettings


def configure_logging(settings: Optional[ElasticSettings] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        settings: Source of log_level and log_format. Loaded from the
                  environment when not provided.
    """
    settings = settings or ElasticSettings()

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.log_level.upper()),
    )


def get_logger(name: str):
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return structlog.get_logger(name)
