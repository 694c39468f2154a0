"""Stub DiagnosisBackend.

Serves key batch handles of the form file:///keys/<period>.zip, a fixed
exposure configuration document and a fixed submission credential.
Individual periods, the configuration download and code redemption can be
made to fail.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from exposure_monitor.application.ports.diagnosis_backend import DiagnosisBackendProtocol
from exposure_monitor.domain.models import (
    ContagiousDateInfo,
    SubmissionKeySet,
    TemporaryExposureKey,
)

KEYS_FILE_URL_TEMPLATE = "file:///keys/{period}.zip"

DEFAULT_SUBMISSION_KEY_SET = SubmissionKeySet(
    server_public_key="c2VydmVyLXB1YmxpYy1rZXk=",
    client_private_key="Y2xpZW50LXByaXZhdGUta2V5",
    client_public_key="Y2xpZW50LXB1YmxpYy1rZXk=",
)


class BackendFailure(Exception):
    """Simulated diagnosis server failure."""


@dataclass
class ReportedKeys:
    """Arguments of one report_diagnosis_keys() invocation."""

    key_pair: SubmissionKeySet
    exposure_keys: list[TemporaryExposureKey]
    contagious_date_info: ContagiousDateInfo


@dataclass
class DiagnosisBackendStub(DiagnosisBackendProtocol):
    """Configurable in-memory diagnosis backend.

    Attributes:
        configuration_document: Returned by get_exposure_configuration().
        configuration_error: Raised by get_exposure_configuration() if set.
        failing_periods: Periods whose key batch download fails.
        claim_error: Raised by claim_one_time_code() if set.
        key_set: Credential handed out on a successful claim.
    """

    configuration_document: dict[str, Any] | None = None
    configuration_error: Exception | None = None
    failing_periods: set[int] = field(default_factory=set)
    claim_error: Exception | None = None
    key_set: SubmissionKeySet = DEFAULT_SUBMISSION_KEY_SET
    requested_periods: list[int] = field(default_factory=list)
    claimed_codes: list[str] = field(default_factory=list)
    reported: list[ReportedKeys] = field(default_factory=list)

    def set_malformed_configuration(self, payload: str = "{not json") -> None:
        """Make the configuration download fail the way an unparseable body does."""
        try:
            json.loads(payload)
        except json.JSONDecodeError as exc:
            self.configuration_error = exc
            return
        raise ValueError("payload is valid JSON")

    def clear(self) -> None:
        self.configuration_document = None
        self.configuration_error = None
        self.failing_periods = set()
        self.claim_error = None
        self.requested_periods = []
        self.claimed_codes = []
        self.reported = []

    async def claim_one_time_code(self, one_time_code: str) -> SubmissionKeySet:
        self.claimed_codes.append(one_time_code)
        if self.claim_error is not None:
            raise self.claim_error
        return self.key_set

    async def retrieve_diagnosis_keys(self, period: int) -> str:
        self.requested_periods.append(period)
        if period in self.failing_periods:
            raise BackendFailure(f"key batch {period} unavailable")
        return KEYS_FILE_URL_TEMPLATE.format(period=period)

    async def report_diagnosis_keys(
        self,
        key_pair: SubmissionKeySet,
        exposure_keys: list[TemporaryExposureKey],
        contagious_date_info: ContagiousDateInfo,
    ) -> None:
        self.reported.append(
            ReportedKeys(
                key_pair=key_pair,
                exposure_keys=list(exposure_keys),
                contagious_date_info=contagious_date_info,
            )
        )

    async def get_exposure_configuration(self) -> dict[str, Any]:
        if self.configuration_error is not None:
            raise self.configuration_error
        if self.configuration_document is None:
            raise BackendFailure("no exposure configuration published")
        return dict(self.configuration_document)
