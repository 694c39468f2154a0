"""
Pytest configuration and shared fixtures for exposure monitor tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Time comes from FakeTimeAuthority, never the machine clock
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from datetime import datetime, timezone

import pytest

from exposure_monitor.config import TEST_EXPOSURE_MONITOR_CONFIG, ExposureMonitorConfig
from exposure_monitor.infrastructure.stubs import (
    DiagnosisBackendStub,
    ExposureNotificationBridgeStub,
    KeyValueStorageStub,
    PushNotificationStub,
    SecureStorageStub,
    TranslatorStub,
)
from tests.helpers import FakeTimeAuthority


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Clock frozen at 2026-01-01T12:00:00Z with a UTC device zone."""
    return FakeTimeAuthority(frozen_at=datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def monitor_config() -> ExposureMonitorConfig:
    return TEST_EXPOSURE_MONITOR_CONFIG


@pytest.fixture
def storage() -> KeyValueStorageStub:
    return KeyValueStorageStub()


@pytest.fixture
def secure_storage() -> SecureStorageStub:
    return SecureStorageStub()


@pytest.fixture
def bridge() -> ExposureNotificationBridgeStub:
    return ExposureNotificationBridgeStub()


@pytest.fixture
def backend() -> DiagnosisBackendStub:
    return DiagnosisBackendStub()


@pytest.fixture
def push_notification() -> PushNotificationStub:
    return PushNotificationStub()


@pytest.fixture
def translator() -> TranslatorStub:
    return TranslatorStub()
