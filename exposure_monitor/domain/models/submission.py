"""Key submission domain models.

This module defines the values exchanged while a diagnosed user uploads
their temporary exposure keys:
- SubmissionKeySet: credential obtained by redeeming a one-time code
- TemporaryExposureKey: one key from the device's key history
- ContagiousDateInfo: when the user became contagious
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True, eq=True)
class SubmissionKeySet:
    """Credential for uploading diagnosis keys.

    Written once to the secure store on code redemption and read once on
    key submission.

    Attributes:
        server_public_key: Backend public key (base64).
        client_private_key: Device private key for this submission (base64).
        client_public_key: Device public key registered with the backend (base64).
    """

    server_public_key: str
    client_private_key: str
    client_public_key: str

    def to_dict(self) -> dict[str, str]:
        return {
            "serverPublicKey": self.server_public_key,
            "clientPrivateKey": self.client_private_key,
            "clientPublicKey": self.client_public_key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubmissionKeySet:
        return cls(
            server_public_key=data["serverPublicKey"],
            client_private_key=data["clientPrivateKey"],
            client_public_key=data["clientPublicKey"],
        )


@dataclass(frozen=True, eq=True)
class TemporaryExposureKey:
    """One daily key from the device's exposure key history.

    Attributes:
        key_data: Opaque key material (base64).
        rolling_start_interval_number: 10-minute interval the key became valid.
        rolling_period: Number of 10-minute intervals the key was valid for.
        transmission_risk_level: Platform risk level (0-8).
    """

    key_data: str
    rolling_start_interval_number: int
    rolling_period: int
    transmission_risk_level: int


class ContagiousDateType(str, Enum):
    """Which date the user supplied for the start of their contagious period."""

    SYMPTOM_ONSET_DATE = "symptomOnsetDate"
    TEST_DATE = "testDate"
    NO_DATE = "noDate"


@dataclass(frozen=True, eq=True)
class ContagiousDateInfo:
    """Contagious-period metadata sent along with uploaded keys.

    Attributes:
        date_type: Kind of date supplied.
        date: The supplied date, None when date_type is NO_DATE.
    """

    date_type: ContagiousDateType
    date: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.date_type == ContagiousDateType.NO_DATE and self.date is not None:
            raise ValueError("date must be None when date_type is noDate")
