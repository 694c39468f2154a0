"""Exposure status state machine.

Owns the persisted ExposureStatus and every change made to it.

States:
- Monitoring: rest state
- Exposed: qualifying exposure detected, not yet aged out
- Diagnosed: verified diagnosis, inside (or past) a submission cycle

Transitions:
- any -> Diagnosed: start_diagnosis(), after a one-time code is redeemed
- any -> Exposed: set_to_exposed(); an active Exposed summary is kept
- Exposed -> Monitoring: last exposure is cycle_days or more local calendar
  days old
- Diagnosed -> Monitoring: today is on or after the cycle end (UTC days)
- Diagnosed -> Diagnosed: needs_submission recomputed while the cycle is open

Every transition goes through finalize(), which stamps a fresh checkpoint.
Every change, transition or not, is written through to storage by the
persistence observer.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from exposure_monitor.application.services.base import LoggingMixin
from exposure_monitor.application.services.submission_cycle_service import (
    calculate_needs_submission,
)
from exposure_monitor.config import DEFAULT_EXPOSURE_MONITOR_CONFIG, ExposureMonitorConfig
from exposure_monitor.domain.models import (
    Diagnosed,
    Exposed,
    ExposureStatus,
    ExposureSummary,
    LastChecked,
    Monitoring,
    exposure_status_from_dict,
    with_last_checked,
)
from exposure_monitor.domain.primitives import (
    add_days,
    days_between,
    days_between_utc,
    from_millis,
    to_millis,
)

if TYPE_CHECKING:
    from exposure_monitor.application.ports import (
        KeyValueStorageProtocol,
        TimeAuthorityProtocol,
    )

EXPOSURE_STATUS_KEY = "exposureStatus"
LAST_EXPOSURE_TIMESTAMP_KEY = "lastExposureTimestamp"

StatusObserver = Callable[[ExposureStatus], Awaitable[None]]


class ExposureStatusMachine(LoggingMixin):
    """State machine over the persisted exposure status.

    Transition methods do no I/O besides persistence, and persistence
    failures are logged rather than raised, so transitions never fail.

    Example:
        >>> machine = ExposureStatusMachine(storage=storage, time_authority=clock)
        >>> await machine.load()
        >>> await machine.start_diagnosis()
        >>> machine.status.needs_submission
        True
    """

    def __init__(
        self,
        storage: KeyValueStorageProtocol,
        time_authority: TimeAuthorityProtocol,
        config: ExposureMonitorConfig = DEFAULT_EXPOSURE_MONITOR_CONFIG,
    ) -> None:
        """Initialize the state machine in the Monitoring state.

        Args:
            storage: Key/value store for the status and the last exposure timestamp.
            time_authority: Clock for checkpoints and cycle arithmetic.
            config: Runtime configuration (cycle length).
        """
        self._storage = storage
        self._time = time_authority
        self._config = config
        self._status: ExposureStatus = Monitoring()
        self._observers: list[StatusObserver] = [self._persist_status]
        self._init_logger()

    @property
    def status(self) -> ExposureStatus:
        return self._status

    def _status_for_logging(self) -> ExposureStatus:
        return self._status

    def observe(self, observer: StatusObserver) -> None:
        """Register a coroutine called with the new status after every change."""
        self._observers.append(observer)

    async def load(self) -> None:
        """Replace the in-memory status with the persisted one.

        A blob that cannot be read or decoded is logged and the in-memory
        status is kept as it was.
        """
        log = self._log_operation("load")
        try:
            raw = await self._storage.get_item(EXPOSURE_STATUS_KEY)
        except Exception:
            log.exception("exposure_status_read_failed")
            return
        try:
            # A missing key and a stored "null" both mean Monitoring
            status = exposure_status_from_dict(json.loads(raw or "null"))
        except (ValueError, KeyError, TypeError) as exc:
            log.error("exposure_status_unreadable", error=str(exc))
            return
        self._status = status
        log.debug("exposure_status_loaded", status_type=status.status_type.value)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def finalize(
        self,
        update: ExposureStatus | None = None,
        last_checked_period: int | None = None,
    ) -> None:
        """Commit update (or the current status) with a fresh checkpoint.

        The checkpoint period is last_checked_period if given, else the
        update's own checkpoint, else the previous checkpoint, else 0. It
        never moves below the previous checkpoint.

        Args:
            update: New status value. None keeps the current variant as-is.
            last_checked_period: Highest period processed by this check.
        """
        previous = self._status
        target = update if update is not None else previous
        previous_period = previous.last_checked.period if previous.last_checked else 0

        if last_checked_period is None:
            period = (
                target.last_checked.period if target.last_checked else 0
            ) or previous_period
        else:
            period = last_checked_period

        log = self._log_operation("finalize")
        if period < previous_period:
            log.warning(
                "checkpoint_regression_ignored",
                requested_period=period,
                previous_period=previous_period,
            )
            period = previous_period

        timestamp = to_millis(self._time.utcnow())
        await self._set(with_last_checked(target, LastChecked(period=period, timestamp=timestamp)))
        log.info(
            "exposure_status_finalized",
            previous_status_type=previous.status_type.value,
            status_type=self._status.status_type.value,
            period=period,
        )

    async def set_to_exposed(
        self, summary: ExposureSummary, last_checked_period: int | None
    ) -> None:
        """Transition to Exposed.

        An already active exposure keeps its summary and its notification
        flag; the side-channel timestamp still moves to the newest exposure.
        """
        log = self._log_operation(
            "set_to_exposed", last_exposure_timestamp=summary.last_exposure_timestamp
        )
        await self._store_last_exposure_timestamp(summary.last_exposure_timestamp)

        current = self._status
        if isinstance(current, Exposed):
            log.info("exposure_summary_retained")
            update: ExposureStatus = current
        else:
            log.info("exposure_summary_selected")
            update = Exposed(summary=summary, last_checked=current.last_checked)
        await self.finalize(update, last_checked_period)

    async def set_to_monitoring(self) -> None:
        self._log_operation("set_to_monitoring").info("returning_to_monitoring")
        await self.finalize(Monitoring(last_checked=self._status.last_checked))

    async def start_diagnosis(self) -> None:
        """Transition to Diagnosed and open a new submission cycle now."""
        now = self._time.utcnow()
        cycle_ends = add_days(now, self._config.notification_cycle_days)
        await self.finalize(
            Diagnosed(
                cycle_starts_at=to_millis(now),
                cycle_ends_at=to_millis(cycle_ends),
                needs_submission=True,
                last_checked=self._status.last_checked,
            )
        )

    async def update_exposure(self) -> None:
        """Age out an exposure or close/refresh a submission cycle.

        Runs at the start of every check that goes through key fetching.
        """
        current = self._status
        if isinstance(current, Diagnosed):
            today = self._time.utcnow()
            # Cycle end is judged in UTC calendar days
            if days_between_utc(today, from_millis(current.cycle_ends_at)) <= 0:
                await self.set_to_monitoring()
                return
            await self.finalize(
                replace(
                    current,
                    needs_submission=calculate_needs_submission(current, today),
                )
            )
        elif isinstance(current, Exposed):
            last_exposure = await self.get_stored_last_exposure_timestamp()
            if last_exposure is None:
                return
            # Exposure aging is judged in device-local calendar days
            elapsed = days_between(
                self._time.to_local(from_millis(last_exposure)), self._time.now()
            )
            if elapsed >= self._config.notification_cycle_days:
                self._log_operation("update_exposure", elapsed_days=elapsed).info(
                    "exposure_aged_out"
                )
                await self.set_to_monitoring()

    # ------------------------------------------------------------------
    # Field updates (no checkpoint stamp)
    # ------------------------------------------------------------------

    async def mark_notification_sent(self) -> None:
        if isinstance(self._status, Exposed):
            await self._set(replace(self._status, notification_sent=True))

    async def mark_upload_reminder_sent(self, sent_at: int) -> None:
        if isinstance(self._status, Diagnosed):
            await self._set(replace(self._status, upload_reminder_last_sent_at=sent_at))

    async def record_key_submission(self, completed_at: int) -> None:
        """Credit a completed key submission. No-op unless Diagnosed."""
        if not isinstance(self._status, Diagnosed):
            return
        await self._set(
            replace(
                self._status,
                needs_submission=False,
                submission_last_completed_at=completed_at,
            )
        )

    # ------------------------------------------------------------------
    # Last exposure timestamp side channel
    # ------------------------------------------------------------------

    async def get_stored_last_exposure_timestamp(self) -> int | None:
        """Return the epoch-millisecond time of the latest exposure.

        Only meaningful while Exposed. Read order: the side-channel key, the
        active summary, then now (which is written back so aging starts).
        """
        current = self._status
        if not isinstance(current, Exposed):
            return None

        log = self._log_operation("get_stored_last_exposure_timestamp")
        stored = await self._storage.get_item(LAST_EXPOSURE_TIMESTAMP_KEY)
        if stored:
            try:
                return int(stored)
            except ValueError:
                log.warning("last_exposure_timestamp_unreadable", value=stored)

        if current.summary.last_exposure_timestamp:
            log.info("last_exposure_timestamp_from_summary")
            return current.summary.last_exposure_timestamp

        now = to_millis(self._time.utcnow())
        log.info("last_exposure_timestamp_from_now")
        await self._store_last_exposure_timestamp(now)
        return now

    async def _store_last_exposure_timestamp(self, timestamp: int) -> None:
        try:
            await self._storage.set_item(LAST_EXPOSURE_TIMESTAMP_KEY, str(timestamp))
        except Exception:
            self._log_operation("store_last_exposure_timestamp").exception(
                "last_exposure_timestamp_write_failed"
            )

    # ------------------------------------------------------------------
    # Write-through
    # ------------------------------------------------------------------

    async def _set(self, status: ExposureStatus) -> None:
        self._status = status
        for observer in self._observers:
            try:
                await observer(status)
            except Exception:
                self._log_operation("notify_observers").exception(
                    "exposure_status_observer_failed"
                )

    async def _persist_status(self, status: ExposureStatus) -> None:
        try:
            await self._storage.set_item(EXPOSURE_STATUS_KEY, json.dumps(status.to_dict()))
        except Exception:
            self._log_operation("persist_status").exception("exposure_status_write_failed")
