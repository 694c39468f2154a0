"""Diagnosis backend port.

This module defines the contract of the diagnosis server HTTP client:
one-time-code redemption, key upload, key batch retrieval by period and
exposure configuration retrieval.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from exposure_monitor.domain.models import (
        ContagiousDateInfo,
        SubmissionKeySet,
        TemporaryExposureKey,
    )


class DiagnosisBackendProtocol(Protocol):
    """Protocol for the diagnosis server client."""

    async def claim_one_time_code(self, one_time_code: str) -> SubmissionKeySet:
        """Redeem a one-time code for a submission credential.

        Raises:
            Any transport or server error; the caller shows it to the user.
        """
        ...

    async def retrieve_diagnosis_keys(self, period: int) -> str:
        """Download the key batch published for period.

        Returns:
            A handle (local file URL) the bridge can read.
        """
        ...

    async def report_diagnosis_keys(
        self,
        key_pair: SubmissionKeySet,
        exposure_keys: list[TemporaryExposureKey],
        contagious_date_info: ContagiousDateInfo,
    ) -> None:
        """Upload the device's keys as diagnosis keys."""
        ...

    async def get_exposure_configuration(self) -> dict[str, Any]:
        """Download the exposure configuration document.

        Returns:
            The decoded JSON document, unvalidated.

        Raises:
            json.JSONDecodeError: If the payload is not JSON.
            Any transport error.
        """
        ...
