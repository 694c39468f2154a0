"""Domain errors for the exposure monitor.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ExposureMonitorError.
"""

from exposure_monitor.domain.errors.configuration import (
    ExposureConfigurationError,
    ExposureConfigurationValidationError,
)
from exposure_monitor.domain.errors.submission import (
    SubmissionCredentialMissingError,
    SubmissionError,
    TemporaryExposureKeysUnavailableError,
)

__all__: list[str] = [
    "ExposureConfigurationError",
    "ExposureConfigurationValidationError",
    "SubmissionError",
    "SubmissionCredentialMissingError",
    "TemporaryExposureKeysUnavailableError",
]
