"""Exposure summary value object.

An ExposureSummary is the matching capability's evidence for one detection
run. The monitor only reads two things from it: the attenuation bucket
durations (for threshold filtering) and the last exposure timestamp (for
recency ranking and exposure aging).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, eq=True)
class ExposureSummary:
    """Risk evidence for one detection run.

    Attributes:
        days_since_last_exposure: Days between the last exposure and the run.
        last_exposure_timestamp: Epoch milliseconds of the last exposure.
        matched_key_count: Number of diagnosis keys that matched.
        maximum_risk_score: Highest risk score across matched keys.
        attenuation_durations: Time spent in each attenuation bucket, ordered
            immediate, near, other. Seconds on iOS, minutes on Android.
    """

    days_since_last_exposure: int
    last_exposure_timestamp: int
    matched_key_count: int
    maximum_risk_score: int = 0
    attenuation_durations: tuple[int, ...] = field(default=(0, 0, 0))

    def __post_init__(self) -> None:
        """Validate summary fields after initialization.

        Raises:
            ValueError: If fewer than two attenuation buckets are present.
        """
        if len(self.attenuation_durations) < 2:
            raise ValueError(
                "attenuation_durations needs at least immediate and near buckets, "
                f"got {len(self.attenuation_durations)}"
            )

    @property
    def immediate_duration(self) -> int:
        return self.attenuation_durations[0]

    @property
    def near_duration(self) -> int:
        return self.attenuation_durations[1]

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the platform's camelCase field names."""
        return {
            "daysSinceLastExposure": self.days_since_last_exposure,
            "lastExposureTimestamp": self.last_exposure_timestamp,
            "matchedKeyCount": self.matched_key_count,
            "maximumRiskScore": self.maximum_risk_score,
            "attenuationDurations": list(self.attenuation_durations),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExposureSummary:
        """Deserialize from the platform's camelCase representation.

        Raises:
            KeyError: If a required field is missing.
        """
        return cls(
            days_since_last_exposure=int(data["daysSinceLastExposure"]),
            last_exposure_timestamp=int(data["lastExposureTimestamp"]),
            matched_key_count=int(data["matchedKeyCount"]),
            maximum_risk_score=int(data.get("maximumRiskScore", 0)),
            attenuation_durations=tuple(
                int(value) for value in data.get("attenuationDurations", (0, 0, 0))
            ),
        )
