"""Exposure notification service.

Entry point the host application talks to. Wires the configuration
resolver, key fetcher, evaluator, state machine, submission cycle and
notification dispatcher together.

Exposure Check:
    configuration -> summaries -> Exposed, or finalize as-is

    The check is single-flight per service instance: while one is running,
    further calls await the same task instead of invoking the matching
    capability again. The slot is cleared when the task finishes, whether
    it succeeded or failed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from exposure_monitor.application.services.base import LoggingMixin
from exposure_monitor.application.services.exposure_configuration_service import (
    ExposureConfigurationService,
)
from exposure_monitor.application.services.exposure_evaluator import ExposureEvaluator
from exposure_monitor.application.services.exposure_status_machine import (
    ExposureStatusMachine,
    StatusObserver,
)
from exposure_monitor.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from exposure_monitor.application.services.period_key_fetcher import PeriodKeyFetcher
from exposure_monitor.application.services.submission_cycle_service import (
    SubmissionCycleService,
)
from exposure_monitor.config import DEFAULT_EXPOSURE_MONITOR_CONFIG, ExposureMonitorConfig
from exposure_monitor.domain.models import (
    ContagiousDateInfo,
    ExposureStatus,
    ExposureSummary,
    SystemStatus,
)
from exposure_monitor.infrastructure.observability.correlation import exposure_check_scope

SystemStatusObserver = Callable[[SystemStatus], Awaitable[None]]

if TYPE_CHECKING:
    from exposure_monitor.application.ports import (
        DiagnosisBackendProtocol,
        ExposureNotificationBridgeProtocol,
        KeyValueStorageProtocol,
        PushNotificationProtocol,
        SecureStorageProtocol,
        TimeAuthorityProtocol,
        TranslatorProtocol,
    )


class ExposureNotificationService(LoggingMixin):
    """Tracks exposure status and drives the key submission workflow.

    Example:
        >>> service = ExposureNotificationService(
        ...     backend=backend,
        ...     translator=translator,
        ...     storage=storage,
        ...     secure_storage=secure_storage,
        ...     bridge=bridge,
        ...     push_notification=push,
        ...     time_authority=SystemTimeAuthority(),
        ... )
        >>> await service.start()
        >>> service.exposure_status
        Monitoring(last_checked=LastChecked(period=20500, timestamp=...))
    """

    def __init__(
        self,
        backend: DiagnosisBackendProtocol,
        translator: TranslatorProtocol,
        storage: KeyValueStorageProtocol,
        secure_storage: SecureStorageProtocol,
        bridge: ExposureNotificationBridgeProtocol,
        push_notification: PushNotificationProtocol,
        time_authority: TimeAuthorityProtocol,
        config: ExposureMonitorConfig = DEFAULT_EXPOSURE_MONITOR_CONFIG,
    ) -> None:
        """Initialize the service and its components.

        Args:
            backend: Diagnosis server client.
            translator: Localized notification strings.
            storage: Key/value store for status and cached configuration.
            secure_storage: Secure store for the submission credential.
            bridge: Platform exposure-matching capability.
            push_notification: Local notification presenter.
            time_authority: Clock.
            config: Runtime configuration.
        """
        self._bridge = bridge
        self._system_status = SystemStatus.UNDEFINED
        self._system_status_observers: list[SystemStatusObserver] = []
        self._starting = False
        self._in_flight_check: asyncio.Task[None] | None = None

        self._status_machine = ExposureStatusMachine(
            storage=storage, time_authority=time_authority, config=config
        )
        self._configuration_service = ExposureConfigurationService(
            backend=backend, storage=storage
        )
        self._evaluator = ExposureEvaluator(
            bridge=bridge,
            key_fetcher=PeriodKeyFetcher(
                backend=backend,
                time_authority=time_authority,
                hours_per_period=config.hours_per_period,
                lookback_periods=config.notification_cycle_days,
            ),
            status_machine=self._status_machine,
            time_authority=time_authority,
            config=config,
        )
        self._submission_cycle = SubmissionCycleService(
            status_machine=self._status_machine,
            backend=backend,
            bridge=bridge,
            secure_storage=secure_storage,
            time_authority=time_authority,
        )
        self._notification_dispatcher = NotificationDispatcher(
            status_machine=self._status_machine,
            push_notification=push_notification,
            translator=translator,
            time_authority=time_authority,
            config=config,
        )
        self._init_logger()

    @property
    def exposure_status(self) -> ExposureStatus:
        return self._status_machine.status

    def _status_for_logging(self) -> ExposureStatus:
        return self._status_machine.status

    @property
    def system_status(self) -> SystemStatus:
        return self._system_status

    @property
    def status_machine(self) -> ExposureStatusMachine:
        return self._status_machine

    @property
    def is_check_in_flight(self) -> bool:
        return self._in_flight_check is not None

    def observe_exposure_status(self, observer: StatusObserver) -> None:
        """Subscribe to every exposure status change."""
        self._status_machine.observe(observer)

    async def start(self) -> None:
        """Load status, start the platform framework and run a first check.

        Concurrent calls while a start is in progress return immediately.
        """
        if self._starting:
            return
        self._starting = True
        log = self._log_operation("start")
        try:
            await self._status_machine.load()
            try:
                await self._bridge.start()
            except Exception:
                log.exception("exposure_framework_start_failed")
            await self.update_system_status()
        finally:
            self._starting = False

        await self.update_exposure_status()

    def observe_system_status(self, observer: SystemStatusObserver) -> None:
        """Subscribe to system status changes."""
        self._system_status_observers.append(observer)

    async def update_system_status(self) -> None:
        status = await self._bridge.get_status()
        if status == self._system_status:
            return
        self._system_status = status
        self._log_operation("update_system_status").info(
            "system_status_changed", system_status=status.value
        )
        for observer in self._system_status_observers:
            await observer(status)

    async def update_exposure_status(self) -> None:
        """Run an exposure check, joining one that is already running."""
        if self._in_flight_check is None:
            check = asyncio.ensure_future(self._run_exposure_check())
            check.add_done_callback(self._log_check_failure)
            self._in_flight_check = check
        # Shielded so a cancelled caller does not cancel the shared check
        await asyncio.shield(self._in_flight_check)

    async def update_exposure_status_in_background(self) -> None:
        """Background entry point: reload, check, notify. Never raises."""
        await self._status_machine.load()
        log = self._log_operation("update_exposure_status_in_background")
        try:
            log.info("background_update_started")
            await self.update_exposure_status()
            await self._notification_dispatcher.process_notification()
            log.info(
                "background_update_completed",
                status_type=self.exposure_status.status_type.value,
            )
        except Exception:
            log.exception("background_update_failed")

    async def perform_exposure_check(self) -> None:
        configuration = await self._configuration_service.get_exposure_configuration()
        result = await self._evaluator.get_summaries(configuration)

        exposures = self._evaluator.summaries_containing_exposures(
            configuration.minimum_exposure_duration_minutes, result.summaries
        )
        if exposures:
            await self._status_machine.set_to_exposed(exposures[0], result.checkpoint_period)
            return
        await self._status_machine.finalize(last_checked_period=result.checkpoint_period)

    async def start_keys_submission(self, one_time_code: str) -> None:
        await self._submission_cycle.start_keys_submission(one_time_code)

    async def fetch_and_submit_keys(self, contagious_date_info: ContagiousDateInfo) -> None:
        """Upload keys for the current diagnosis.

        Raises:
            SubmissionCredentialMissingError: No credential was stored.
            TemporaryExposureKeysUnavailableError: Device keys could not be read.
        """
        await self._submission_cycle.fetch_and_submit_keys(contagious_date_info)

    def summaries_containing_exposures(
        self,
        minimum_exposure_duration_minutes: int,
        summaries: list[ExposureSummary],
    ) -> list[ExposureSummary]:
        return self._evaluator.summaries_containing_exposures(
            minimum_exposure_duration_minutes, summaries
        )

    def is_reminder_needed(self, status: ExposureStatus) -> bool:
        return self._notification_dispatcher.is_reminder_needed(status)

    def _log_check_failure(self, check: asyncio.Future[None]) -> None:
        # Runs even when no caller is still awaiting the check
        if check.cancelled():
            return
        error = check.exception()
        if error is not None:
            self._log_operation("update_exposure_status").error(
                "exposure_check_failed", exc_info=error
            )

    async def _run_exposure_check(self) -> None:
        try:
            with exposure_check_scope():
                await self.perform_exposure_check()
        finally:
            self._in_flight_check = None
