"""Period-windowed diagnosis key fetching.

Diagnosis keys are published in one batch per period (a fixed window of
hours since the epoch). This module works out which batches have not been
processed since the last checkpoint and downloads them one at a time,
newest first.

Fetch Window:
    current period down to, but excluding,
    max(last_checked_period - 1, current_period - lookback_periods)

    The previous checkpoint's own period is fetched again because its batch
    may have been published after the previous check.

Bootstrap:
    Without a checkpoint only the current period is fetched; a first run
    does not backfill the whole lookback window.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from structlog import get_logger

from exposure_monitor.domain.primitives import HOURS_PER_PERIOD, period_since_epoch

if TYPE_CHECKING:
    from exposure_monitor.application.ports import (
        DiagnosisBackendProtocol,
        TimeAuthorityProtocol,
    )

logger = get_logger(__name__)

DEFAULT_LOOKBACK_PERIODS = 14


@dataclass(frozen=True)
class PeriodKeyBatch:
    """Handle to one downloaded key batch.

    Attributes:
        keys_file_url: Local handle the matching capability reads.
        period: Period the batch was published for.
    """

    keys_file_url: str
    period: int


@dataclass(frozen=True)
class FetchedKeys:
    """Result of draining the fetcher.

    Attributes:
        keys_file_urls: Handles in fetch order (newest period first).
        checkpoint_period: Highest period fetched, or the previous checkpoint
            when nothing could be fetched.
    """

    keys_file_urls: list[str] = field(default_factory=list)
    checkpoint_period: int | None = None


class PeriodKeyFetcher:
    """Downloads the key batches published since the last checkpoint.

    Example:
        >>> fetcher = PeriodKeyFetcher(backend=backend, time_authority=clock)
        >>> async for batch in fetcher.keys_since_last_fetch(18500):
        ...     print(batch.period, batch.keys_file_url)
    """

    def __init__(
        self,
        backend: DiagnosisBackendProtocol,
        time_authority: TimeAuthorityProtocol,
        hours_per_period: int = HOURS_PER_PERIOD,
        lookback_periods: int = DEFAULT_LOOKBACK_PERIODS,
    ) -> None:
        """Initialize the fetcher.

        Args:
            backend: Diagnosis backend serving key batches.
            time_authority: Clock used to find the current period.
            hours_per_period: Length of a publication period.
            lookback_periods: Oldest period ever fetched, relative to the
                current one.
        """
        self._backend = backend
        self._time = time_authority
        self._hours_per_period = hours_per_period
        self._lookback_periods = lookback_periods

    def current_period(self) -> int:
        return period_since_epoch(self._time.utcnow(), self._hours_per_period)

    async def keys_since_last_fetch(
        self, last_checked_period: int | None
    ) -> AsyncIterator[PeriodKeyBatch]:
        """Yield unprocessed key batches, newest period first.

        A period whose download fails is logged and skipped; the remaining
        periods are still attempted.

        Args:
            last_checked_period: Checkpoint of the previous check. None or 0
                means no check has completed yet.
        """
        running_period = self.current_period()

        if not last_checked_period:
            batch = await self._fetch_period(running_period)
            if batch is not None:
                yield batch
            return

        lower_bound = max(
            last_checked_period - 1, running_period - self._lookback_periods
        )
        logger.debug(
            "key_fetch_window",
            newest_period=running_period,
            exclusive_lower_bound=lower_bound,
        )
        while running_period > lower_bound:
            batch = await self._fetch_period(running_period)
            if batch is not None:
                yield batch
            running_period -= 1

    async def collect(self, last_checked_period: int | None) -> FetchedKeys:
        """Drain keys_since_last_fetch() into a list of handles and a checkpoint."""
        keys_file_urls: list[str] = []
        checkpoint_period = last_checked_period
        async for batch in self.keys_since_last_fetch(last_checked_period):
            keys_file_urls.append(batch.keys_file_url)
            checkpoint_period = max(checkpoint_period or 0, batch.period)

        logger.info(
            "key_batches_collected",
            batch_count=len(keys_file_urls),
            checkpoint_period=checkpoint_period,
        )
        return FetchedKeys(keys_file_urls=keys_file_urls, checkpoint_period=checkpoint_period)

    async def _fetch_period(self, period: int) -> PeriodKeyBatch | None:
        try:
            keys_file_url = await self._backend.retrieve_diagnosis_keys(period)
        except Exception:
            logger.exception("key_batch_download_failed", period=period)
            return None
        return PeriodKeyBatch(keys_file_url=keys_file_url, period=period)
