"""Structured logging configuration using structlog.

JSON lines in production, colored console output in development. Every
event carries a timestamp and level; request-scoped values (request_id,
path) are merged in from contextvars by the request context middleware.

Usage:
    from showcal.utils.logger import setup_logging

    setup_logging(log_level="INFO", log_format="json")

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("show_search", query="American Dad")
"""
from __future__ import annotations

import logging

import structlog


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog for the whole process.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
        log_format: 'json' for production, 'console' for development.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # werkzeug and httpx log through stdlib logging
    logging.basicConfig(format="%(message)s", level=level)
