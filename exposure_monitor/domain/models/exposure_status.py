"""Exposure status sum type.

The exposure status is the single persisted source of truth for a device's
risk state. Each variant carries only the fields meaningful for it, so a
Monitoring value can never hold a needs_submission flag and a Diagnosed
value can never hold an exposure summary.

Variants:
- Monitoring: default rest state
- Exposed: a qualifying exposure was detected and has not aged out
- Diagnosed: the user has a verified diagnosis and a key-submission cycle

Persisted Format:
    The JSON object stored under the "exposureStatus" key, tagged by "type":

    {"type": "diagnosed", "needsSubmission": true, "cycleStartsAt": 1598400000000,
     "cycleEndsAt": 1599609600000, "submissionLastCompletedAt": null,
     "uploadReminderLastSentAt": null,
     "lastChecked": {"period": 18500, "timestamp": 1598400000000}}
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from exposure_monitor.domain.models.exposure_summary import ExposureSummary

EXPOSURE_NOTIFICATION_CYCLE_DAYS = 14


class ExposureStatusType(str, Enum):
    """Tag of the persisted status object."""

    MONITORING = "monitoring"
    EXPOSED = "exposed"
    DIAGNOSED = "diagnosed"


@dataclass(frozen=True, eq=True)
class LastChecked:
    """Checkpoint of the last processed period.

    Attributes:
        period: Highest period whose key batch has been processed.
        timestamp: Epoch milliseconds when the checkpoint was stamped.
    """

    period: int
    timestamp: int

    def to_dict(self) -> dict[str, int]:
        return {"period": self.period, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LastChecked:
        return cls(period=int(data["period"]), timestamp=int(data["timestamp"]))


@dataclass(frozen=True, eq=True)
class Monitoring:
    """Rest state: no active exposure and no diagnosis."""

    status_type: ClassVar[ExposureStatusType] = ExposureStatusType.MONITORING

    last_checked: Optional[LastChecked] = None

    def to_dict(self) -> dict[str, Any]:
        return _with_last_checked({"type": self.status_type.value}, self.last_checked)


@dataclass(frozen=True, eq=True)
class Exposed:
    """At least one qualifying exposure was detected.

    Attributes:
        summary: The most relevant summary of the current exposure episode.
        notification_sent: Whether the exposure alert fired for this episode.
        last_checked: Checkpoint of the last processed period.
    """

    status_type: ClassVar[ExposureStatusType] = ExposureStatusType.EXPOSED

    summary: ExposureSummary
    notification_sent: bool = False
    last_checked: Optional[LastChecked] = None

    def to_dict(self) -> dict[str, Any]:
        return _with_last_checked(
            {
                "type": self.status_type.value,
                "summary": self.summary.to_dict(),
                "notificationSent": self.notification_sent,
            },
            self.last_checked,
        )


@dataclass(frozen=True, eq=True)
class Diagnosed:
    """The user has a verified diagnosis.

    The cycle bounds are fixed when the diagnosis is recorded and are
    never recomputed afterwards.

    Attributes:
        cycle_starts_at: Epoch milliseconds when the submission cycle opened.
        cycle_ends_at: Epoch milliseconds when the submission cycle closes.
        needs_submission: Whether a key upload is currently due.
        submission_last_completed_at: Epoch milliseconds of the last upload.
        upload_reminder_last_sent_at: Epoch milliseconds of the last reminder.
        last_checked: Checkpoint of the last processed period.
    """

    status_type: ClassVar[ExposureStatusType] = ExposureStatusType.DIAGNOSED

    cycle_starts_at: int
    cycle_ends_at: int
    needs_submission: bool = True
    submission_last_completed_at: Optional[int] = None
    upload_reminder_last_sent_at: Optional[int] = None
    last_checked: Optional[LastChecked] = None

    def __post_init__(self) -> None:
        if self.cycle_ends_at <= self.cycle_starts_at:
            raise ValueError(
                f"cycle_ends_at ({self.cycle_ends_at}) must be after "
                f"cycle_starts_at ({self.cycle_starts_at})"
            )

    def to_dict(self) -> dict[str, Any]:
        return _with_last_checked(
            {
                "type": self.status_type.value,
                "needsSubmission": self.needs_submission,
                "submissionLastCompletedAt": self.submission_last_completed_at,
                "uploadReminderLastSentAt": self.upload_reminder_last_sent_at,
                "cycleStartsAt": self.cycle_starts_at,
                "cycleEndsAt": self.cycle_ends_at,
            },
            self.last_checked,
        )


ExposureStatus = Union[Monitoring, Exposed, Diagnosed]


def with_last_checked(status: ExposureStatus, last_checked: LastChecked) -> ExposureStatus:
    """Return a copy of status carrying the given checkpoint."""
    return replace(status, last_checked=last_checked)


def exposure_status_from_dict(data: dict[str, Any] | None) -> ExposureStatus:
    """Deserialize a persisted status object.

    A missing object, or one without a type tag, is the default
    Monitoring state.

    Raises:
        ValueError: If the type tag is unknown.
        KeyError: If a variant's required field is missing.
    """
    if not data:
        return Monitoring()

    raw_last_checked = data.get("lastChecked")
    last_checked = LastChecked.from_dict(raw_last_checked) if raw_last_checked else None
    status_type = ExposureStatusType(data.get("type", ExposureStatusType.MONITORING.value))

    if status_type == ExposureStatusType.EXPOSED:
        return Exposed(
            summary=ExposureSummary.from_dict(data["summary"]),
            notification_sent=bool(data.get("notificationSent", False)),
            last_checked=last_checked,
        )
    if status_type == ExposureStatusType.DIAGNOSED:
        return Diagnosed(
            cycle_starts_at=int(data["cycleStartsAt"]),
            cycle_ends_at=int(data["cycleEndsAt"]),
            needs_submission=bool(data.get("needsSubmission", False)),
            submission_last_completed_at=_optional_int(data.get("submissionLastCompletedAt")),
            upload_reminder_last_sent_at=_optional_int(data.get("uploadReminderLastSentAt")),
            last_checked=last_checked,
        )
    return Monitoring(last_checked=last_checked)


def _with_last_checked(
    payload: dict[str, Any], last_checked: LastChecked | None
) -> dict[str, Any]:
    if last_checked is not None:
        payload["lastChecked"] = last_checked.to_dict()
    return payload


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)
