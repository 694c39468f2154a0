"""Unit tests for PeriodKeyFetcher.

Current period at the fixture time (2026-01-01T12:00Z) is 20454.
"""

from __future__ import annotations

import pytest

from exposure_monitor.application.services.period_key_fetcher import PeriodKeyFetcher
from exposure_monitor.infrastructure.stubs import DiagnosisBackendStub
from tests.helpers import FakeTimeAuthority

CURRENT_PERIOD = 20454


@pytest.fixture
def fetcher(
    backend: DiagnosisBackendStub, fake_time_authority: FakeTimeAuthority
) -> PeriodKeyFetcher:
    return PeriodKeyFetcher(
        backend=backend, time_authority=fake_time_authority, lookback_periods=14
    )


async def _periods(fetcher: PeriodKeyFetcher, last_checked: int | None) -> list[int]:
    return [batch.period async for batch in fetcher.keys_since_last_fetch(last_checked)]


class TestKeysSinceLastFetch:
    """Tests for keys_since_last_fetch()."""

    def test_current_period(self, fetcher: PeriodKeyFetcher) -> None:
        assert fetcher.current_period() == CURRENT_PERIOD

    @pytest.mark.asyncio
    @pytest.mark.parametrize("last_checked", [None, 0])
    async def test_bootstrap_fetches_only_current_period(
        self,
        fetcher: PeriodKeyFetcher,
        backend: DiagnosisBackendStub,
        last_checked: int | None,
    ) -> None:
        assert await _periods(fetcher, last_checked) == [CURRENT_PERIOD]
        assert backend.requested_periods == [CURRENT_PERIOD]

    @pytest.mark.asyncio
    async def test_refetches_previous_checkpoint_period(
        self, fetcher: PeriodKeyFetcher
    ) -> None:
        """The checkpoint's own period is fetched again, newest first."""
        assert await _periods(fetcher, CURRENT_PERIOD - 2) == [
            CURRENT_PERIOD,
            CURRENT_PERIOD - 1,
            CURRENT_PERIOD - 2,
        ]

    @pytest.mark.asyncio
    async def test_same_period_checkpoint_refetches_current(
        self, fetcher: PeriodKeyFetcher
    ) -> None:
        assert await _periods(fetcher, CURRENT_PERIOD) == [CURRENT_PERIOD]

    @pytest.mark.asyncio
    async def test_window_capped_by_lookback(self, fetcher: PeriodKeyFetcher) -> None:
        periods = await _periods(fetcher, CURRENT_PERIOD - 100)

        assert len(periods) == 14
        assert periods[0] == CURRENT_PERIOD
        assert periods[-1] == CURRENT_PERIOD - 13

    @pytest.mark.asyncio
    async def test_failed_period_is_skipped(
        self, fetcher: PeriodKeyFetcher, backend: DiagnosisBackendStub
    ) -> None:
        backend.failing_periods = {CURRENT_PERIOD - 1}

        periods = await _periods(fetcher, CURRENT_PERIOD - 2)

        assert periods == [CURRENT_PERIOD, CURRENT_PERIOD - 2]
        assert backend.requested_periods == [
            CURRENT_PERIOD,
            CURRENT_PERIOD - 1,
            CURRENT_PERIOD - 2,
        ]


class TestCollect:
    """Tests for collect()."""

    @pytest.mark.asyncio
    async def test_checkpoint_is_highest_fetched_period(
        self, fetcher: PeriodKeyFetcher
    ) -> None:
        fetched = await fetcher.collect(CURRENT_PERIOD - 3)

        assert fetched.checkpoint_period == CURRENT_PERIOD
        assert fetched.keys_file_urls[0] == f"file:///keys/{CURRENT_PERIOD}.zip"
        assert len(fetched.keys_file_urls) == 4

    @pytest.mark.asyncio
    async def test_checkpoint_unchanged_when_nothing_fetched(
        self, fetcher: PeriodKeyFetcher, backend: DiagnosisBackendStub
    ) -> None:
        backend.failing_periods = {CURRENT_PERIOD, CURRENT_PERIOD - 1}

        fetched = await fetcher.collect(CURRENT_PERIOD - 1)

        assert fetched.keys_file_urls == []
        assert fetched.checkpoint_period == CURRENT_PERIOD - 1

    @pytest.mark.asyncio
    async def test_checkpoint_skips_over_failed_newest_period(
        self, fetcher: PeriodKeyFetcher, backend: DiagnosisBackendStub
    ) -> None:
        backend.failing_periods = {CURRENT_PERIOD}

        fetched = await fetcher.collect(CURRENT_PERIOD - 2)

        assert fetched.checkpoint_period == CURRENT_PERIOD - 1
