"""Logging mixin shared by the stateful exposure services.

Services that own or expose an ExposureStatus inherit from LoggingMixin so
every operation log line carries the status it acted on:

    {"service": "ExposureStatusMachine", "operation": "finalize",
     "status_type": "exposed", "last_checked_period": 20454,
     "correlation_id": "...", "event": "..."}

Stateless helpers (fetcher, evaluator, dispatcher) use a module-level
``logger = get_logger(__name__)`` instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from exposure_monitor.infrastructure.observability.correlation import get_correlation_id

if TYPE_CHECKING:
    from exposure_monitor.domain.models import ExposureStatus


class LoggingMixin:
    """Binds service name, exposure status and correlation ID to log lines.

    Subclasses call ``_init_logger()`` once their status source is set up and
    implement ``_status_for_logging()``.
    """

    _log: structlog.stdlib.BoundLogger

    def _init_logger(self) -> None:
        self._log = structlog.get_logger().bind(service=type(self).__name__)

    def _status_for_logging(self) -> ExposureStatus | None:
        return None

    def _log_operation(self, operation: str, **context: object) -> structlog.stdlib.BoundLogger:
        """Return a logger bound to operation and the current status."""
        status = self._status_for_logging()
        if status is not None:
            context.setdefault("status_type", status.status_type.value)
            if status.last_checked is not None:
                context.setdefault("last_checked_period", status.last_checked.period)
        correlation_id = get_correlation_id()
        if correlation_id:
            context.setdefault("correlation_id", correlation_id)
        return self._log.bind(operation=operation, **context)
