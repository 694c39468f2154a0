"""
Domain layer - Pure exposure-tracking logic.

This layer contains:
- The exposure status sum type (Monitoring / Exposed / Diagnosed)
- Value objects (summaries, configuration, submission credentials)
- Calendar and period primitives
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or bootstrap.
Only stdlib and typing imports are allowed.
"""

from exposure_monitor.domain.exceptions import ExposureMonitorError
from exposure_monitor.domain.models import (
    Diagnosed,
    Exposed,
    ExposureStatus,
    ExposureStatusType,
    Monitoring,
)

__all__: list[str] = [
    "ExposureMonitorError",
    "ExposureStatus",
    "ExposureStatusType",
    "Monitoring",
    "Exposed",
    "Diagnosed",
]
