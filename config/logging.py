"""
Structured logging setup.

Configures structlog once for both the API and the picker client.
"""

import logging

import structlog

from config.settings import settings


def configure_logging() -> None:
    """
    Configure structlog and the stdlib root logger.

    JSON output in production, colored console output otherwise.
    Safe to call more than once.
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.log_level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if settings.is_production
                else structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
