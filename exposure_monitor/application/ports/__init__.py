"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- TimeAuthorityProtocol: Device-local and UTC clock
- KeyValueStorageProtocol / SecureStorageProtocol: Device persistence
- ExposureNotificationBridgeProtocol: Platform exposure-matching capability
- DiagnosisBackendProtocol: Diagnosis server client
- PushNotificationProtocol: Local notification presenter
- TranslatorProtocol: Localized strings
"""

from exposure_monitor.application.ports.diagnosis_backend import DiagnosisBackendProtocol
from exposure_monitor.application.ports.exposure_notification_bridge import (
    ExposureNotificationBridgeProtocol,
)
from exposure_monitor.application.ports.persistence import (
    KeyValueStorageProtocol,
    SecureStorageProtocol,
)
from exposure_monitor.application.ports.push_notification import PushNotificationProtocol
from exposure_monitor.application.ports.time_authority import TimeAuthorityProtocol
from exposure_monitor.application.ports.translator import TranslatorProtocol

__all__: list[str] = [
    "DiagnosisBackendProtocol",
    "ExposureNotificationBridgeProtocol",
    "KeyValueStorageProtocol",
    "PushNotificationProtocol",
    "SecureStorageProtocol",
    "TimeAuthorityProtocol",
    "TranslatorProtocol",
]
