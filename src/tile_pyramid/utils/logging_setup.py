"""
Structured Logging Setup

Configures structlog on top of the standard library logging module so that
every logger obtained with ``structlog.get_logger`` renders consistently.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import Config

_configured = False


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    stream=None
) -> None:
    """
    Configure structlog and the root stdlib logger.

    Calling this more than once is a no-op.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Render JSON lines instead of the console format
        stream: Output stream, defaults to stdout
    """
    global _configured
    if _configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

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
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _configured = True


def configure_from_config(config: Optional[Config] = None) -> None:
    """Configure logging from a Config, reading the environment if none is given."""
    config = config or Config.from_env()
    configure_logging(level=config.log_level, json_output=config.log_json)
