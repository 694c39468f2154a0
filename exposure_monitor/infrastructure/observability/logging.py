"""structlog setup for the exposure monitor.

Production renders one JSON object per line; development renders coloured
console output. Either way each entry carries an ISO timestamp, the level and
the correlation ID of the exposure check it belongs to:

    {"event": "key_batch_download_failed", "level": "warning",
     "timestamp": "2026-01-01T12:00:00Z", "correlation_id": "...",
     "period": 20454, "exception": "Traceback ..."}

Modules log through ``logger = get_logger(__name__)`` from structlog.
"""

from __future__ import annotations

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from exposure_monitor.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name to its logging constant.

    The explicit argument wins over ``LOG_LEVEL``; unknown names give INFO.
    """
    name = (level or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def _renderer(environment: str) -> Processor:
    if environment == "development":
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def configure_structlog(environment: str = "production", level: str | None = None) -> None:
    """Configure structlog once at start-up.

    Args:
        environment: "development" for console output; anything else is JSON.
        level: Minimum level name; defaults to LOG_LEVEL, then INFO.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _renderer(environment),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
