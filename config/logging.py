"""Structured logging configuration with structlog."""

import logging
import sys

import structlog


def setup_logging(*, log_level: str = 'INFO', log_format: str = 'json') -> None:
    """Configure structlog for JSON or console output."""
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == 'json'
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Set root log level
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(message)s',
        stream=sys.stdout,
    )
