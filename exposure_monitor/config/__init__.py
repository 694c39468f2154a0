"""Configuration module for the exposure monitor.

Available Configurations:
- ExposureMonitorConfig: Platform, period length, cycle length, reminder interval
- Bundled exposure configuration default and JSON schema (package data)
"""

from exposure_monitor.config.exposure_config import (
    DEFAULT_EXPOSURE_MONITOR_CONFIG,
    PLATFORM_ANDROID,
    PLATFORM_IOS,
    TEST_EXPOSURE_MONITOR_CONFIG,
    ExposureMonitorConfig,
)

__all__ = [
    "ExposureMonitorConfig",
    "DEFAULT_EXPOSURE_MONITOR_CONFIG",
    "TEST_EXPOSURE_MONITOR_CONFIG",
    "PLATFORM_ANDROID",
    "PLATFORM_IOS",
]
