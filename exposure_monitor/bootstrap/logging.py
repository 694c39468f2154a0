"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from exposure_monitor.bootstrap.exposure_notification import get_exposure_monitor_config
from exposure_monitor.config import ExposureMonitorConfig
from exposure_monitor.infrastructure.observability import configure_structlog


def configure_logging(config: ExposureMonitorConfig | None = None) -> None:
    """Configure structlog for the runtime configuration's environment."""
    config = config or get_exposure_monitor_config()
    configure_structlog(environment=config.environment)


__all__ = ["configure_logging"]
