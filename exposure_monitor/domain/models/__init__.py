"""Domain models for the exposure monitor."""

from exposure_monitor.domain.models.exposure_configuration import ExposureConfiguration
from exposure_monitor.domain.models.exposure_status import (
    EXPOSURE_NOTIFICATION_CYCLE_DAYS,
    Diagnosed,
    Exposed,
    ExposureStatus,
    ExposureStatusType,
    LastChecked,
    Monitoring,
    exposure_status_from_dict,
    with_last_checked,
)
from exposure_monitor.domain.models.exposure_summary import ExposureSummary
from exposure_monitor.domain.models.submission import (
    ContagiousDateInfo,
    ContagiousDateType,
    SubmissionKeySet,
    TemporaryExposureKey,
)
from exposure_monitor.domain.models.system_status import SystemStatus

__all__: list[str] = [
    "EXPOSURE_NOTIFICATION_CYCLE_DAYS",
    "ContagiousDateInfo",
    "ContagiousDateType",
    "Diagnosed",
    "Exposed",
    "ExposureConfiguration",
    "ExposureStatus",
    "ExposureStatusType",
    "ExposureSummary",
    "LastChecked",
    "Monitoring",
    "SubmissionKeySet",
    "SystemStatus",
    "TemporaryExposureKey",
    "exposure_status_from_dict",
    "with_last_checked",
]
