"""Availability of the platform exposure-matching capability."""

from enum import Enum


class SystemStatus(str, Enum):
    """Status reported by the matching capability's get_status().

    Values:
        UNDEFINED: Not queried yet.
        ACTIVE: Matching is running.
        DISABLED: User switched exposure notifications off.
        RESTRICTED: Blocked by device policy.
        UNAUTHORIZED: User has not granted permission.
        BLUETOOTH_OFF: Bluetooth is disabled.
        PLAY_SERVICES_NOT_AVAILABLE: Android only, Play Services missing or outdated.
    """

    UNDEFINED = "undefined"
    ACTIVE = "active"
    DISABLED = "disabled"
    RESTRICTED = "restricted"
    UNAUTHORIZED = "unauthorized"
    BLUETOOTH_OFF = "bluetooth_off"
    PLAY_SERVICES_NOT_AVAILABLE = "play_services_not_available"
