"""
Structured logging configuration with structlog.

Call `configure_logging` once at application startup, then use structlog
normally:

    import structlog
    LOGGER = structlog.get_logger(__name__)
    LOGGER.info("event_name", key="value")
"""

from __future__ import annotations

import logging
from typing import List

import structlog
from structlog.typing import Processor

DEFAULT_LOG_LEVEL = "INFO"

_configured = False


def _level_number(level: str) -> int:
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: str = DEFAULT_LOG_LEVEL, fmt: str = "console") -> None:
    """Configure structlog for the process.

    Streamlit re-executes the script on every interaction, so repeated calls
    are no-ops once configured.

    Args:
        level: Standard level name (DEBUG, INFO, ...). Unknown names fall back to INFO.
        fmt: 'json' for machine-readable lines, anything else for console output.
    """
    global _configured
    if _configured:
        return

    shared_processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True
