"""
Application Logging

Structured logging through structlog on top of the standard library
logging module. This is operational logging only: events go to stderr,
nothing is persisted and there is no audit trail.

Call `configure_logging()` once at startup. Modules obtain their logger
with `get_logger(__name__)` and may log before configuration; structlog
falls back to its defaults until then.
"""

import logging
import sys
from typing import Optional

import structlog

from personal_bank.config import get_settings


_configured = False


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Minimum level name. Defaults to the configured log level.
        json_output: Render JSON lines instead of console output.
                     Defaults to the configured value.
    """
    global _configured

    settings = get_settings().app
    level = (level or settings.log_level).upper()
    if json_output is None:
        json_output = settings.log_json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

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
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def is_configured() -> bool:
    return _configured


def get_logger(name: Optional[str] = None):
    """Get a structlog logger bound to `name`."""
    return structlog.get_logger(name)
