"""Exposure monitor runtime configuration.

This module defines the tunables of the exposure monitor with environment
variable overrides. These are local runtime settings; the scoring
configuration handed to the matching capability is resolved separately by
ExposureConfigurationService.

Environment Variables:
- EXPOSURE_PLATFORM: "ios" or "android"; selects attenuation units (default: android)
- EXPOSURE_HOURS_PER_PERIOD: Length of a key publication period (default: 24)
- EXPOSURE_NOTIFICATION_CYCLE_DAYS: Submission cycle and lookback window (default: 14)
- EXPOSURE_REMINDER_INTERVAL_MINUTES: Minimum gap between upload reminders (default: 180)
- EXPOSURE_ENVIRONMENT: "production" (JSON logs) or "development" (default: production)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from exposure_monitor.domain.models.exposure_status import EXPOSURE_NOTIFICATION_CYCLE_DAYS

PLATFORM_IOS = "ios"
PLATFORM_ANDROID = "android"
SUPPORTED_PLATFORMS = (PLATFORM_IOS, PLATFORM_ANDROID)
SUPPORTED_ENVIRONMENTS = ("production", "development")


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_choice_env(key: str, default: str, choices: tuple[str, ...]) -> str:
    """Get an enumerated environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or not one of choices.
        choices: Accepted values (compared case-insensitively).

    Returns:
        The lower-cased value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    value = value.strip().lower()
    return value if value in choices else default


@dataclass(frozen=True)
class ExposureMonitorConfig:
    """Runtime configuration for the exposure monitor.

    Attributes:
        platform: Host platform. On iOS attenuation durations arrive in
                  seconds, on Android in minutes.
        hours_per_period: Size of one key publication window in hours.
        notification_cycle_days: Length of the submission cycle, the exposure
                                 aging horizon and the key fetch lookback.
        minimum_reminder_interval_minutes: Upload reminders fire only when the
                                           previous one is older than this.
        environment: Logging environment passed to configure_structlog().
    """

    platform: str = PLATFORM_ANDROID
    hours_per_period: int = 24
    notification_cycle_days: int = EXPOSURE_NOTIFICATION_CYCLE_DAYS
    minimum_reminder_interval_minutes: int = 180
    environment: str = "production"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.platform not in SUPPORTED_PLATFORMS:
            raise ValueError(
                f"platform must be one of {SUPPORTED_PLATFORMS}, got {self.platform!r}"
            )
        if self.hours_per_period < 1:
            raise ValueError(
                f"hours_per_period must be positive, got {self.hours_per_period}"
            )
        if self.notification_cycle_days < 1:
            raise ValueError(
                "notification_cycle_days must be positive, "
                f"got {self.notification_cycle_days}"
            )
        if self.minimum_reminder_interval_minutes < 0:
            raise ValueError(
                "minimum_reminder_interval_minutes must be non-negative, "
                f"got {self.minimum_reminder_interval_minutes}"
            )
        if self.environment not in SUPPORTED_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {SUPPORTED_ENVIRONMENTS}, "
                f"got {self.environment!r}"
            )

    @property
    def attenuation_duration_divisor(self) -> int:
        """Divisor converting attenuation durations to minutes."""
        return 60 if self.platform == PLATFORM_IOS else 1

    @classmethod
    def from_environment(cls) -> "ExposureMonitorConfig":
        """Create config from environment variables with defaults.

        Returns:
            ExposureMonitorConfig with values from environment or defaults.
        """
        return cls(
            platform=_get_choice_env("EXPOSURE_PLATFORM", PLATFORM_ANDROID, SUPPORTED_PLATFORMS),
            hours_per_period=_get_int_env("EXPOSURE_HOURS_PER_PERIOD", 24),
            notification_cycle_days=_get_int_env(
                "EXPOSURE_NOTIFICATION_CYCLE_DAYS", EXPOSURE_NOTIFICATION_CYCLE_DAYS
            ),
            minimum_reminder_interval_minutes=_get_int_env(
                "EXPOSURE_REMINDER_INTERVAL_MINUTES", 180
            ),
            environment=_get_choice_env(
                "EXPOSURE_ENVIRONMENT", "production", SUPPORTED_ENVIRONMENTS
            ),
        )


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_EXPOSURE_MONITOR_CONFIG = ExposureMonitorConfig()

# iOS config for unit tests (attenuation durations in seconds)
TEST_EXPOSURE_MONITOR_CONFIG = ExposureMonitorConfig(
    platform=PLATFORM_IOS,
    environment="development",
)
