"""Observability infrastructure for structured logging and correlation.

This module provides cross-cutting observability concerns:
- Structured JSON logging with structlog
- Correlation ID management so each exposure check can be traced

Usage:
    from exposure_monitor.infrastructure.observability import (
        configure_structlog,
        exposure_check_scope,
    )

    # At startup
    configure_structlog(environment="production")

    # Around each exposure check
    with exposure_check_scope():
        ...
"""

from exposure_monitor.infrastructure.observability.correlation import (
    correlation_id_processor,
    exposure_check_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from exposure_monitor.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "exposure_check_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
