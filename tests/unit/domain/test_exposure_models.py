"""Unit tests for exposure summary, configuration and submission value objects."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from exposure_monitor.application.services.exposure_configuration_service import (
    load_default_configuration,
)
from exposure_monitor.domain.errors import (
    ExposureConfigurationValidationError,
    SubmissionCredentialMissingError,
    TemporaryExposureKeysUnavailableError,
)
from exposure_monitor.domain.exceptions import ExposureMonitorError
from exposure_monitor.domain.models import (
    ContagiousDateInfo,
    ContagiousDateType,
    ExposureConfiguration,
    ExposureSummary,
    SubmissionKeySet,
)
from tests.helpers import make_summary


class TestExposureSummary:
    """Tests for ExposureSummary."""

    def test_bucket_accessors(self) -> None:
        summary = make_summary(immediate=300, near=600, medium=900)
        assert summary.immediate_duration == 300
        assert summary.near_duration == 600

    def test_requires_immediate_and_near_buckets(self) -> None:
        with pytest.raises(ValueError, match="at least immediate and near"):
            ExposureSummary(
                days_since_last_exposure=0,
                last_exposure_timestamp=0,
                matched_key_count=0,
                attenuation_durations=(5,),
            )

    def test_from_platform_dict(self) -> None:
        """Platform payloads use camelCase and may omit the risk score."""
        summary = ExposureSummary.from_dict(
            {
                "daysSinceLastExposure": 2,
                "lastExposureTimestamp": 1_767_225_600_000,
                "matchedKeyCount": 3,
                "attenuationDurations": [900, 300, 0],
            }
        )
        assert summary.maximum_risk_score == 0
        assert summary.attenuation_durations == (900, 300, 0)


class TestExposureConfiguration:
    """Tests for ExposureConfiguration."""

    def test_bundled_default_values(self) -> None:
        configuration = load_default_configuration()
        assert configuration.minimum_exposure_duration_minutes == 15
        assert configuration.attenuation_duration_thresholds == (50, 70)

    def test_to_dict_round_trips_camel_case(self) -> None:
        configuration = load_default_configuration()
        payload = configuration.to_dict()
        assert "minimumExposureDurationMinutes" in payload
        assert ExposureConfiguration.from_dict(payload) == configuration


class TestSubmissionModels:
    """Tests for submission credential and contagious date info."""

    def test_key_set_uses_camel_case(self) -> None:
        key_set = SubmissionKeySet(
            server_public_key="s", client_private_key="p", client_public_key="c"
        )
        assert key_set.to_dict() == {
            "serverPublicKey": "s",
            "clientPrivateKey": "p",
            "clientPublicKey": "c",
        }
        assert SubmissionKeySet.from_dict(key_set.to_dict()) == key_set

    def test_no_date_rejects_a_date(self) -> None:
        with pytest.raises(ValueError):
            ContagiousDateInfo(
                date_type=ContagiousDateType.NO_DATE,
                date=datetime(2026, 1, 1, tzinfo=timezone.utc),
            )

    def test_dated_info(self) -> None:
        info = ContagiousDateInfo(
            date_type=ContagiousDateType.SYMPTOM_ONSET_DATE,
            date=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        assert info.date_type.value == "symptomOnsetDate"


class TestErrors:
    """Tests for domain error types."""

    def test_submission_errors_share_base(self) -> None:
        assert isinstance(SubmissionCredentialMissingError(), ExposureMonitorError)
        assert isinstance(TemporaryExposureKeysUnavailableError(), ExposureMonitorError)

    def test_user_facing_messages(self) -> None:
        assert str(SubmissionCredentialMissingError()) == "Submission keys: bad certificate"
        assert str(TemporaryExposureKeysUnavailableError()) == "Unable to retrieve TEKs"

    def test_validation_error_carries_path(self) -> None:
        error = ExposureConfigurationValidationError(
            reason="'x' is not of type 'integer'", path="transmissionRiskWeight"
        )
        assert error.path == "transmissionRiskWeight"
        assert error.reason == "'x' is not of type 'integer'"
