"""Key submission cycle management.

A diagnosis opens a fixed-length submission cycle. While it is open the
user is asked to upload their temporary exposure keys once per UTC day.

Error Policy:
- Missing submission credential: SubmissionCredentialMissingError (user must
  redeem a new code)
- Device keys unreadable: TemporaryExposureKeysUnavailableError (retryable)
- Credential write failure: logged, redemption still succeeds
- No keys to share: logged, submission still credited
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING

from structlog import get_logger

from exposure_monitor.domain.errors import (
    SubmissionCredentialMissingError,
    TemporaryExposureKeysUnavailableError,
)
from exposure_monitor.domain.models import (
    ContagiousDateInfo,
    Diagnosed,
    ExposureStatus,
    SubmissionKeySet,
    TemporaryExposureKey,
)
from exposure_monitor.domain.primitives import days_between_utc, from_millis, to_millis

if TYPE_CHECKING:
    from exposure_monitor.application.ports import (
        DiagnosisBackendProtocol,
        ExposureNotificationBridgeProtocol,
        SecureStorageProtocol,
        TimeAuthorityProtocol,
    )
    from exposure_monitor.application.services.exposure_status_machine import (
        ExposureStatusMachine,
    )

logger = get_logger(__name__)

SUBMISSION_AUTH_KEYS = "submissionAuthKeys"


def calculate_needs_submission(status: ExposureStatus, today: datetime) -> bool:
    """Return whether a key upload is due.

    Both checks use UTC calendar days, so at most one submission is credited
    per UTC day and the flag only turns back on after a UTC midnight.

    Args:
        status: Current exposure status.
        today: Current time (any zone; compared in UTC).
    """
    if not isinstance(status, Diagnosed):
        return False

    # Cycle over, nothing left to submit
    if days_between_utc(today, from_millis(status.cycle_ends_at)) <= 0:
        return False

    if not status.submission_last_completed_at:
        return True

    last_submitted = from_millis(status.submission_last_completed_at)
    return days_between_utc(last_submitted, today) > 0


class SubmissionCycleService:
    """Runs the one-time-code redemption and key upload workflow.

    Example:
        >>> service = SubmissionCycleService(
        ...     status_machine=machine,
        ...     backend=backend,
        ...     bridge=bridge,
        ...     secure_storage=secure_storage,
        ...     time_authority=clock,
        ... )
        >>> await service.start_keys_submission("ABCD1234EF")
        >>> await service.fetch_and_submit_keys(
        ...     ContagiousDateInfo(date_type=ContagiousDateType.NO_DATE)
        ... )
    """

    def __init__(
        self,
        status_machine: ExposureStatusMachine,
        backend: DiagnosisBackendProtocol,
        bridge: ExposureNotificationBridgeProtocol,
        secure_storage: SecureStorageProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._status_machine = status_machine
        self._backend = backend
        self._bridge = bridge
        self._secure_storage = secure_storage
        self._time = time_authority

    def needs_submission(self) -> bool:
        return calculate_needs_submission(self._status_machine.status, self._time.utcnow())

    async def start_keys_submission(self, one_time_code: str) -> None:
        """Redeem a one-time code and open a submission cycle.

        Raises:
            Whatever the backend raises for an invalid or expired code.
        """
        key_set = await self._backend.claim_one_time_code(one_time_code)
        try:
            await self._secure_storage.set(
                SUBMISSION_AUTH_KEYS, json.dumps(key_set.to_dict()), {}
            )
        except Exception:
            logger.exception("submission_credential_write_failed")

        await self._status_machine.start_diagnosis()
        logger.info("submission_cycle_started")

    async def fetch_and_submit_keys(self, contagious_date_info: ContagiousDateInfo) -> None:
        """Upload the device's keys and credit the submission.

        Raises:
            SubmissionCredentialMissingError: No credential was stored.
            TemporaryExposureKeysUnavailableError: Device keys could not be read.
        """
        stored = await self._secure_storage.get(SUBMISSION_AUTH_KEYS)
        if not stored:
            raise SubmissionCredentialMissingError()
        key_set = SubmissionKeySet.from_dict(json.loads(stored))

        try:
            exposure_keys: list[TemporaryExposureKey] = (
                await self._bridge.get_temporary_exposure_key_history()
            )
        except Exception as exc:
            logger.exception("temporary_exposure_key_history_failed")
            raise TemporaryExposureKeysUnavailableError() from exc

        if exposure_keys:
            logger.info("uploading_diagnosis_keys", key_count=len(exposure_keys))
            await self._backend.report_diagnosis_keys(
                key_set, exposure_keys, contagious_date_info
            )
        else:
            logger.info("no_temporary_exposure_keys_to_upload")

        await self.record_key_submission()

    async def record_key_submission(self) -> None:
        """Credit a submission now. No-op unless Diagnosed."""
        await self._status_machine.record_key_submission(to_millis(self._time.utcnow()))
