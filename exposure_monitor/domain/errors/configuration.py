"""Exposure configuration errors.

Configuration failures are never surfaced to the user: the resolver
absorbs them by falling back to a cached or bundled configuration.
They exist so each failure can be logged distinctly.
"""

from __future__ import annotations

from exposure_monitor.domain.exceptions import ExposureMonitorError


class ExposureConfigurationError(ExposureMonitorError):
    """Base class for exposure configuration failures."""


class ExposureConfigurationValidationError(ExposureConfigurationError):
    """Raised when a configuration document does not match its schema.

    Attributes:
        path: JSON path of the offending value (e.g. "attenuationWeight").
        reason: Validator message describing the mismatch.
    """

    def __init__(self, reason: str, path: str = "") -> None:
        """Initialize validation error.

        Args:
            reason: Validator message describing the mismatch.
            path: JSON path of the offending value, empty for the document root.
        """
        self.path = path
        self.reason = reason
        location = path or "<root>"
        super().__init__(f"Invalid exposure configuration at {location}: {reason}")
