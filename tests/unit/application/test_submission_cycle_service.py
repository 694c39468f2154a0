"""Unit tests for SubmissionCycleService and calculate_needs_submission().

Tests:
- Once-per-UTC-day submission credit
- One-time code redemption
- Key upload error policy
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from exposure_monitor.application.services.exposure_status_machine import (
    ExposureStatusMachine,
)
from exposure_monitor.application.services.submission_cycle_service import (
    SUBMISSION_AUTH_KEYS,
    SubmissionCycleService,
    calculate_needs_submission,
)
from exposure_monitor.domain.errors import (
    SubmissionCredentialMissingError,
    TemporaryExposureKeysUnavailableError,
)
from exposure_monitor.domain.models import (
    ContagiousDateInfo,
    ContagiousDateType,
    Diagnosed,
    Exposed,
    Monitoring,
    TemporaryExposureKey,
)
from exposure_monitor.domain.primitives import to_millis
from exposure_monitor.infrastructure.stubs import (
    DEFAULT_SUBMISSION_KEY_SET,
    BackendFailure,
    BridgeFailureMode,
    DiagnosisBackendStub,
    ExposureNotificationBridgeStub,
    KeyValueStorageStub,
    SecureStorageStub,
)
from tests.helpers import FakeTimeAuthority, make_summary

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
DAY_MS = 24 * 60 * 60 * 1000
NO_DATE = ContagiousDateInfo(date_type=ContagiousDateType.NO_DATE)


def _diagnosed(**overrides) -> Diagnosed:
    fields = {
        "cycle_starts_at": to_millis(NOW) - 2 * DAY_MS,
        "cycle_ends_at": to_millis(NOW) + 12 * DAY_MS,
    }
    fields.update(overrides)
    return Diagnosed(**fields)


@pytest.fixture
def machine(
    storage: KeyValueStorageStub, fake_time_authority: FakeTimeAuthority
) -> ExposureStatusMachine:
    return ExposureStatusMachine(storage=storage, time_authority=fake_time_authority)


@pytest.fixture
def service(
    machine: ExposureStatusMachine,
    backend: DiagnosisBackendStub,
    bridge: ExposureNotificationBridgeStub,
    secure_storage: SecureStorageStub,
    fake_time_authority: FakeTimeAuthority,
) -> SubmissionCycleService:
    return SubmissionCycleService(
        status_machine=machine,
        backend=backend,
        bridge=bridge,
        secure_storage=secure_storage,
        time_authority=fake_time_authority,
    )


class TestCalculateNeedsSubmission:
    """Tests for calculate_needs_submission()."""

    def test_only_diagnosed_needs_submission(self) -> None:
        assert calculate_needs_submission(Monitoring(), NOW) is False
        assert calculate_needs_submission(Exposed(summary=make_summary()), NOW) is False

    def test_never_submitted(self) -> None:
        assert calculate_needs_submission(_diagnosed(), NOW) is True

    def test_submitted_earlier_same_utc_day(self) -> None:
        status = _diagnosed(submission_last_completed_at=to_millis(NOW) - 3_600_000)
        assert calculate_needs_submission(status, NOW) is False

    def test_due_again_after_utc_midnight(self) -> None:
        """23:59 UTC and 00:01 UTC the next day are different submission days."""
        submitted = datetime(2026, 1, 1, 23, 59, tzinfo=timezone.utc)
        status = _diagnosed(submission_last_completed_at=to_millis(submitted))

        assert calculate_needs_submission(status, submitted + timedelta(minutes=2)) is True

    def test_local_midnight_does_not_reset(self) -> None:
        """A local-zone date change alone does not make a submission due."""
        pacific = timezone(timedelta(hours=-8))
        submitted = datetime(2026, 1, 1, 23, 0, tzinfo=pacific)  # 07:00 UTC Jan 2
        status = _diagnosed(
            cycle_ends_at=to_millis(NOW) + 20 * DAY_MS,
            submission_last_completed_at=to_millis(submitted),
        )

        assert calculate_needs_submission(status, submitted + timedelta(hours=2)) is False

    def test_cycle_over(self) -> None:
        status = _diagnosed(cycle_ends_at=to_millis(NOW) + 3_600_000)
        assert calculate_needs_submission(status, NOW) is False


class TestStartKeysSubmission:
    """Tests for start_keys_submission()."""

    @pytest.mark.asyncio
    async def test_redeems_code_and_opens_cycle(
        self,
        service: SubmissionCycleService,
        machine: ExposureStatusMachine,
        backend: DiagnosisBackendStub,
        secure_storage: SecureStorageStub,
    ) -> None:
        await service.start_keys_submission("ABCD1234EF")

        assert backend.claimed_codes == ["ABCD1234EF"]
        stored = json.loads(secure_storage.peek(SUBMISSION_AUTH_KEYS))
        assert stored == DEFAULT_SUBMISSION_KEY_SET.to_dict()
        assert isinstance(machine.status, Diagnosed)
        assert machine.status.needs_submission is True

    @pytest.mark.asyncio
    async def test_invalid_code_propagates(
        self,
        service: SubmissionCycleService,
        machine: ExposureStatusMachine,
        backend: DiagnosisBackendStub,
    ) -> None:
        backend.claim_error = BackendFailure("code expired")

        with pytest.raises(BackendFailure, match="code expired"):
            await service.start_keys_submission("EXPIRED000")

        assert machine.status == Monitoring()

    @pytest.mark.asyncio
    async def test_credential_write_failure_still_diagnoses(
        self,
        machine: ExposureStatusMachine,
        backend: DiagnosisBackendStub,
        bridge: ExposureNotificationBridgeStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        service = SubmissionCycleService(
            status_machine=machine,
            backend=backend,
            bridge=bridge,
            secure_storage=SecureStorageStub(fail_writes=True),
            time_authority=fake_time_authority,
        )

        await service.start_keys_submission("ABCD1234EF")

        assert isinstance(machine.status, Diagnosed)


class TestFetchAndSubmitKeys:
    """Tests for fetch_and_submit_keys()."""

    @pytest.mark.asyncio
    async def test_uploads_keys_and_credits_submission(
        self,
        service: SubmissionCycleService,
        machine: ExposureStatusMachine,
        backend: DiagnosisBackendStub,
        bridge: ExposureNotificationBridgeStub,
    ) -> None:
        key = TemporaryExposureKey(
            key_data="a2V5LWRhdGE=",
            rolling_start_interval_number=2_945_952,
            rolling_period=144,
            transmission_risk_level=1,
        )
        bridge.set_key_history([key])
        await service.start_keys_submission("ABCD1234EF")

        await service.fetch_and_submit_keys(NO_DATE)

        assert len(backend.reported) == 1
        assert backend.reported[0].exposure_keys == [key]
        assert backend.reported[0].key_pair == DEFAULT_SUBMISSION_KEY_SET
        assert machine.status.needs_submission is False
        assert machine.status.submission_last_completed_at == to_millis(NOW)
        assert service.needs_submission() is False

    @pytest.mark.asyncio
    async def test_no_keys_still_credits_submission(
        self,
        service: SubmissionCycleService,
        machine: ExposureStatusMachine,
        backend: DiagnosisBackendStub,
    ) -> None:
        await service.start_keys_submission("ABCD1234EF")

        await service.fetch_and_submit_keys(NO_DATE)

        assert backend.reported == []
        assert machine.status.needs_submission is False

    @pytest.mark.asyncio
    async def test_missing_credential(
        self, service: SubmissionCycleService, backend: DiagnosisBackendStub
    ) -> None:
        with pytest.raises(SubmissionCredentialMissingError):
            await service.fetch_and_submit_keys(NO_DATE)

        assert backend.reported == []

    @pytest.mark.asyncio
    async def test_key_history_failure(
        self,
        service: SubmissionCycleService,
        machine: ExposureStatusMachine,
        bridge: ExposureNotificationBridgeStub,
    ) -> None:
        await service.start_keys_submission("ABCD1234EF")
        bridge.failure_mode = BridgeFailureMode(key_history=True)

        with pytest.raises(TemporaryExposureKeysUnavailableError):
            await service.fetch_and_submit_keys(NO_DATE)

        assert machine.status.needs_submission is True
