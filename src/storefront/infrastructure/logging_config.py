"""Structured logging setup.

Every module logs through ``structlog.get_logger()``; this module decides
how those events are rendered. Loggers are not cached, so calling
``configure_logging`` again (once per CLI invocation) takes effect at once.
"""

from __future__ import annotations

import logging
import sys

import structlog

from storefront.infrastructure.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog from *settings* (level and json/text output)."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
