"""Exposure configuration value object.

Mirrors the configuration document the matching capability consumes.
Only minimum_exposure_duration_minutes is interpreted locally; every other
field is passed through to the platform untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, eq=True)
class ExposureConfiguration:
    """Scoring parameters handed to the matching capability.

    Attributes:
        minimum_risk_score: Summaries scoring below this are ignored by the platform.
        attenuation_level_values: Eight-bucket score table for signal attenuation.
        attenuation_weight: Weight of the attenuation score (0-100).
        days_since_last_exposure_level_values: Score table for exposure recency.
        days_since_last_exposure_weight: Weight of the recency score.
        duration_level_values: Score table for exposure duration.
        duration_weight: Weight of the duration score.
        transmission_risk_level_values: Score table for transmission risk.
        transmission_risk_weight: Weight of the transmission risk score.
        attenuation_duration_thresholds: dB boundaries of the immediate/near/other buckets.
        minimum_exposure_duration_minutes: Immediate+near minutes a summary needs
            to count as an exposure.
    """

    minimum_risk_score: int
    attenuation_level_values: tuple[int, ...]
    attenuation_weight: int
    days_since_last_exposure_level_values: tuple[int, ...]
    days_since_last_exposure_weight: int
    duration_level_values: tuple[int, ...]
    duration_weight: int
    transmission_risk_level_values: tuple[int, ...]
    transmission_risk_weight: int
    attenuation_duration_thresholds: tuple[int, ...]
    minimum_exposure_duration_minutes: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase configuration document."""
        return {
            "minimumRiskScore": self.minimum_risk_score,
            "attenuationLevelValues": list(self.attenuation_level_values),
            "attenuationWeight": self.attenuation_weight,
            "daysSinceLastExposureLevelValues": list(
                self.days_since_last_exposure_level_values
            ),
            "daysSinceLastExposureWeight": self.days_since_last_exposure_weight,
            "durationLevelValues": list(self.duration_level_values),
            "durationWeight": self.duration_weight,
            "transmissionRiskLevelValues": list(self.transmission_risk_level_values),
            "transmissionRiskWeight": self.transmission_risk_weight,
            "attenuationDurationThresholds": list(self.attenuation_duration_thresholds),
            "minimumExposureDurationMinutes": self.minimum_exposure_duration_minutes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExposureConfiguration:
        """Deserialize from the camelCase configuration document.

        No schema validation happens here; callers validate untrusted
        documents first.

        Raises:
            KeyError: If a field is missing.
            TypeError: If a list field is not iterable.
        """
        return cls(
            minimum_risk_score=data["minimumRiskScore"],
            attenuation_level_values=tuple(data["attenuationLevelValues"]),
            attenuation_weight=data["attenuationWeight"],
            days_since_last_exposure_level_values=tuple(
                data["daysSinceLastExposureLevelValues"]
            ),
            days_since_last_exposure_weight=data["daysSinceLastExposureWeight"],
            duration_level_values=tuple(data["durationLevelValues"]),
            duration_weight=data["durationWeight"],
            transmission_risk_level_values=tuple(data["transmissionRiskLevelValues"]),
            transmission_risk_weight=data["transmissionRiskWeight"],
            attenuation_duration_thresholds=tuple(data["attenuationDurationThresholds"]),
            minimum_exposure_duration_minutes=data["minimumExposureDurationMinutes"],
        )
