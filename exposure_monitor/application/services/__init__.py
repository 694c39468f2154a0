"""Application services - Use case orchestration.

This module contains application services that orchestrate domain
operations and coordinate with infrastructure adapters.

Available services:
- ExposureNotificationService: Host-facing facade, single-flight exposure check
- ExposureStatusMachine: Persisted exposure status and its transitions
- ExposureConfigurationService: Matching configuration with cache/default fallback
- PeriodKeyFetcher: Diagnosis key batches since the last checkpoint
- ExposureEvaluator: Exposure summaries and the duration threshold filter
- SubmissionCycleService: One-time code redemption and key upload
- NotificationDispatcher: Exposure alert and upload reminder
- SystemTimeAuthority: Wall clock
"""

from exposure_monitor.application.services.exposure_configuration_service import (
    EXPOSURE_CONFIGURATION_KEY,
    ExposureConfigurationService,
    ExposureConfigurationValidator,
    load_configuration_schema,
    load_default_configuration,
)
from exposure_monitor.application.services.exposure_evaluator import (
    EvaluationResult,
    ExposureEvaluator,
    summaries_containing_exposures,
    summary_exposure_minutes,
)
from exposure_monitor.application.services.exposure_notification_service import (
    ExposureNotificationService,
    SystemStatusObserver,
)
from exposure_monitor.application.services.exposure_status_machine import (
    EXPOSURE_STATUS_KEY,
    LAST_EXPOSURE_TIMESTAMP_KEY,
    ExposureStatusMachine,
    StatusObserver,
)
from exposure_monitor.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from exposure_monitor.application.services.period_key_fetcher import (
    DEFAULT_LOOKBACK_PERIODS,
    FetchedKeys,
    PeriodKeyBatch,
    PeriodKeyFetcher,
)
from exposure_monitor.application.services.submission_cycle_service import (
    SUBMISSION_AUTH_KEYS,
    SubmissionCycleService,
    calculate_needs_submission,
)
from exposure_monitor.application.services.time_authority_service import (
    SystemTimeAuthority,
)

__all__: list[str] = [
    "DEFAULT_LOOKBACK_PERIODS",
    "EXPOSURE_CONFIGURATION_KEY",
    "EXPOSURE_STATUS_KEY",
    "LAST_EXPOSURE_TIMESTAMP_KEY",
    "SUBMISSION_AUTH_KEYS",
    "EvaluationResult",
    "ExposureConfigurationService",
    "ExposureConfigurationValidator",
    "ExposureEvaluator",
    "ExposureNotificationService",
    "ExposureStatusMachine",
    "FetchedKeys",
    "NotificationDispatcher",
    "PeriodKeyBatch",
    "PeriodKeyFetcher",
    "StatusObserver",
    "SubmissionCycleService",
    "SystemStatusObserver",
    "SystemTimeAuthority",
    "calculate_needs_submission",
    "load_configuration_schema",
    "load_default_configuration",
    "summaries_containing_exposures",
    "summary_exposure_minutes",
]
