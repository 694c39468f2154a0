"""Exposure evaluation.

Obtains exposure summaries for one check and picks out the ones that
count as exposures.

Summaries come from one of two places:
1. A pending summary set the platform computed on its own (Android). The
   checkpoint candidate is then the current period.
2. Otherwise: cycle maintenance runs, the unprocessed key batches are
   downloaded, and the matching capability is invoked on them.

A failure anywhere in either path yields no summaries and no checkpoint,
so the status stays as it was and the next check retries the same periods.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from structlog import get_logger

from exposure_monitor.config import DEFAULT_EXPOSURE_MONITOR_CONFIG, ExposureMonitorConfig
from exposure_monitor.domain.models import ExposureConfiguration, ExposureSummary
from exposure_monitor.domain.primitives import period_since_epoch

if TYPE_CHECKING:
    from exposure_monitor.application.ports import (
        ExposureNotificationBridgeProtocol,
        TimeAuthorityProtocol,
    )
    from exposure_monitor.application.services.exposure_status_machine import (
        ExposureStatusMachine,
    )
    from exposure_monitor.application.services.period_key_fetcher import (
        PeriodKeyFetcher,
    )

logger = get_logger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Summaries of one check and the checkpoint they cover.

    Attributes:
        summaries: Raw summaries, unfiltered.
        checkpoint_period: Period to commit as the new checkpoint, or None
            when the check failed.
    """

    summaries: list[ExposureSummary] = field(default_factory=list)
    checkpoint_period: int | None = None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def summary_exposure_minutes(summary: ExposureSummary, divisor: int) -> int:
    """Immediate plus near attenuation time, in whole minutes.

    Args:
        summary: Summary to measure.
        divisor: 60 when bucket durations are in seconds (iOS), 1 when they
            are already minutes (Android).
    """
    minutes = summary.immediate_duration / divisor + summary.near_duration / divisor
    return _round_half_up(minutes)


def summaries_containing_exposures(
    minimum_exposure_duration_minutes: int,
    summaries: list[ExposureSummary],
    divisor: int = 1,
) -> list[ExposureSummary]:
    """Keep summaries meeting the duration threshold, most recent first.

    A threshold of zero disables exposure detection entirely.
    """
    if minimum_exposure_duration_minutes <= 0:
        return []
    qualifying = [
        summary
        for summary in summaries
        if summary_exposure_minutes(summary, divisor) >= minimum_exposure_duration_minutes
    ]
    return sorted(qualifying, key=lambda summary: summary.last_exposure_timestamp, reverse=True)


class ExposureEvaluator:
    """Collects exposure summaries for a check.

    Example:
        >>> evaluator = ExposureEvaluator(
        ...     bridge=bridge,
        ...     key_fetcher=fetcher,
        ...     status_machine=machine,
        ...     time_authority=clock,
        ... )
        >>> result = await evaluator.get_summaries(configuration)
        >>> exposures = evaluator.summaries_containing_exposures(
        ...     configuration.minimum_exposure_duration_minutes, result.summaries
        ... )
    """

    def __init__(
        self,
        bridge: ExposureNotificationBridgeProtocol,
        key_fetcher: PeriodKeyFetcher,
        status_machine: ExposureStatusMachine,
        time_authority: TimeAuthorityProtocol,
        config: ExposureMonitorConfig = DEFAULT_EXPOSURE_MONITOR_CONFIG,
    ) -> None:
        self._bridge = bridge
        self._key_fetcher = key_fetcher
        self._status_machine = status_machine
        self._time = time_authority
        self._config = config

    def summaries_containing_exposures(
        self,
        minimum_exposure_duration_minutes: int,
        summaries: list[ExposureSummary],
    ) -> list[ExposureSummary]:
        """Platform-aware summaries_containing_exposures()."""
        return summaries_containing_exposures(
            minimum_exposure_duration_minutes,
            summaries,
            self._config.attenuation_duration_divisor,
        )

    async def get_summaries(self, configuration: ExposureConfiguration) -> EvaluationResult:
        """Return this check's summaries and checkpoint. Never raises."""
        try:
            pending = await self._bridge.get_pending_exposure_summary()
            if pending:
                period = period_since_epoch(self._time.utcnow(), self._config.hours_per_period)
                logger.info(
                    "pending_exposure_summaries_used",
                    summary_count=len(pending),
                    checkpoint_period=period,
                )
                return EvaluationResult(summaries=list(pending), checkpoint_period=period)

            # Checkpoint is read before maintenance re-stamps the status
            last_checked = self._status_machine.status.last_checked
            await self._status_machine.update_exposure()

            fetched = await self._key_fetcher.collect(
                last_checked.period if last_checked else None
            )
            summaries = await self._bridge.detect_exposure(
                configuration, fetched.keys_file_urls
            )
            logger.info(
                "exposure_detection_completed",
                key_file_count=len(fetched.keys_file_urls),
                summary_count=len(summaries),
            )
            return EvaluationResult(
                summaries=list(summaries), checkpoint_period=fetched.checkpoint_period
            )
        except Exception:
            logger.exception("exposure_summaries_unavailable")
            return EvaluationResult()
