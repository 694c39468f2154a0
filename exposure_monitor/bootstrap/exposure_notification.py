"""Bootstrap wiring for exposure notification dependencies.

Ports default to the in-memory stubs; a host application replaces them
with its platform adapters through the set_* functions before the first
get_exposure_notification_service() call.
"""

from __future__ import annotations

from exposure_monitor.application.ports import (
    DiagnosisBackendProtocol,
    ExposureNotificationBridgeProtocol,
    KeyValueStorageProtocol,
    PushNotificationProtocol,
    SecureStorageProtocol,
    TimeAuthorityProtocol,
    TranslatorProtocol,
)
from exposure_monitor.application.services.exposure_notification_service import (
    ExposureNotificationService,
)
from exposure_monitor.application.services.time_authority_service import (
    SystemTimeAuthority,
)
from exposure_monitor.config import ExposureMonitorConfig
from exposure_monitor.infrastructure.stubs import (
    DiagnosisBackendStub,
    ExposureNotificationBridgeStub,
    KeyValueStorageStub,
    PushNotificationStub,
    SecureStorageStub,
    TranslatorStub,
)

_config: ExposureMonitorConfig | None = None
_backend: DiagnosisBackendProtocol | None = None
_bridge: ExposureNotificationBridgeProtocol | None = None
_storage: KeyValueStorageProtocol | None = None
_secure_storage: SecureStorageProtocol | None = None
_push_notification: PushNotificationProtocol | None = None
_translator: TranslatorProtocol | None = None
_time_authority: TimeAuthorityProtocol | None = None
_service: ExposureNotificationService | None = None


def get_exposure_monitor_config() -> ExposureMonitorConfig:
    """Get runtime configuration, read from the environment once."""
    global _config
    if _config is None:
        _config = ExposureMonitorConfig.from_environment()
    return _config


def get_diagnosis_backend() -> DiagnosisBackendProtocol:
    """Get diagnosis backend instance."""
    global _backend
    if _backend is None:
        _backend = DiagnosisBackendStub()
    return _backend


def get_exposure_notification_bridge() -> ExposureNotificationBridgeProtocol:
    """Get exposure notification bridge instance."""
    global _bridge
    if _bridge is None:
        _bridge = ExposureNotificationBridgeStub()
    return _bridge


def get_key_value_storage() -> KeyValueStorageProtocol:
    """Get key/value storage instance."""
    global _storage
    if _storage is None:
        _storage = KeyValueStorageStub()
    return _storage


def get_secure_storage() -> SecureStorageProtocol:
    """Get secure storage instance."""
    global _secure_storage
    if _secure_storage is None:
        _secure_storage = SecureStorageStub()
    return _secure_storage


def get_push_notification() -> PushNotificationProtocol:
    """Get local notification presenter instance."""
    global _push_notification
    if _push_notification is None:
        _push_notification = PushNotificationStub()
    return _push_notification


def get_translator() -> TranslatorProtocol:
    """Get translator instance."""
    global _translator
    if _translator is None:
        _translator = TranslatorStub()
    return _translator


def get_time_authority() -> TimeAuthorityProtocol:
    """Get time authority instance."""
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_exposure_notification_service() -> ExposureNotificationService:
    """Get the exposure notification service, building it on first use."""
    global _service
    if _service is None:
        _service = ExposureNotificationService(
            backend=get_diagnosis_backend(),
            translator=get_translator(),
            storage=get_key_value_storage(),
            secure_storage=get_secure_storage(),
            bridge=get_exposure_notification_bridge(),
            push_notification=get_push_notification(),
            time_authority=get_time_authority(),
            config=get_exposure_monitor_config(),
        )
    return _service


def reset_exposure_notification_dependencies() -> None:
    """Reset all singleton instances for testing."""
    global _config
    global _backend
    global _bridge
    global _storage
    global _secure_storage
    global _push_notification
    global _translator
    global _time_authority
    global _service

    _config = None
    _backend = None
    _bridge = None
    _storage = None
    _secure_storage = None
    _push_notification = None
    _translator = None
    _time_authority = None
    _service = None


def set_exposure_monitor_config(config: ExposureMonitorConfig) -> None:
    """Set runtime configuration explicitly."""
    global _config
    _config = config


def set_diagnosis_backend(backend: DiagnosisBackendProtocol) -> None:
    """Set the diagnosis backend adapter."""
    global _backend
    _backend = backend


def set_exposure_notification_bridge(bridge: ExposureNotificationBridgeProtocol) -> None:
    """Set the platform exposure notification adapter."""
    global _bridge
    _bridge = bridge


def set_key_value_storage(storage: KeyValueStorageProtocol) -> None:
    """Set the key/value storage adapter."""
    global _storage
    _storage = storage


def set_secure_storage(storage: SecureStorageProtocol) -> None:
    """Set the secure storage adapter."""
    global _secure_storage
    _secure_storage = storage


def set_push_notification(push_notification: PushNotificationProtocol) -> None:
    """Set the local notification adapter."""
    global _push_notification
    _push_notification = push_notification


def set_translator(translator: TranslatorProtocol) -> None:
    """Set the translator adapter."""
    global _translator
    _translator = translator


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set custom time authority for testing."""
    global _time_authority
    _time_authority = time_authority
