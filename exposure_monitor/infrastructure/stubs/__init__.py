"""Infrastructure stubs for development and testing.

This module provides stub implementations of infrastructure ports
for use in development and testing environments.

Available stubs:
- KeyValueStorageStub / SecureStorageStub: In-memory device stores
- ExposureNotificationBridgeStub: Configurable summaries, key history and failures
- DiagnosisBackendStub: Per-period key batch handles, configuration document
- PushNotificationStub: Records presented notifications
- TranslatorStub: Fixed English strings

WARNING: These stubs are NOT for production use.
"""

from exposure_monitor.infrastructure.stubs.diagnosis_backend_stub import (
    DEFAULT_SUBMISSION_KEY_SET,
    KEYS_FILE_URL_TEMPLATE,
    BackendFailure,
    DiagnosisBackendStub,
    ReportedKeys,
)
from exposure_monitor.infrastructure.stubs.exposure_notification_bridge_stub import (
    BridgeFailure,
    BridgeFailureMode,
    DetectExposureCall,
    ExposureNotificationBridgeStub,
)
from exposure_monitor.infrastructure.stubs.key_value_storage_stub import (
    KeyValueStorageStub,
    SecureStorageStub,
    StorageFailure,
)
from exposure_monitor.infrastructure.stubs.push_notification_stub import (
    DEFAULT_TRANSLATIONS,
    PresentedNotification,
    PushNotificationStub,
    TranslatorStub,
)

__all__ = [
    "DEFAULT_SUBMISSION_KEY_SET",
    "DEFAULT_TRANSLATIONS",
    "KEYS_FILE_URL_TEMPLATE",
    "BackendFailure",
    "BridgeFailure",
    "BridgeFailureMode",
    "DetectExposureCall",
    "DiagnosisBackendStub",
    "ExposureNotificationBridgeStub",
    "KeyValueStorageStub",
    "PresentedNotification",
    "PushNotificationStub",
    "ReportedKeys",
    "SecureStorageStub",
    "StorageFailure",
    "TranslatorStub",
]
