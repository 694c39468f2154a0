"""Unit tests for the calendar primitives.

The two day-count helpers must disagree exactly when a local midnight and
a UTC midnight fall on different sides of an interval.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from exposure_monitor.domain.primitives import (
    add_days,
    days_between,
    days_between_utc,
    from_millis,
    minutes_between,
    period_since_epoch,
    to_millis,
)

PACIFIC = timezone(timedelta(hours=-8))


class TestMillis:
    """Tests for epoch-millisecond conversion."""

    def test_to_millis_is_exact(self) -> None:
        moment = datetime(2026, 1, 1, 0, 0, 0, 123000, tzinfo=timezone.utc)
        assert to_millis(moment) == 1_767_225_600_123

    def test_to_millis_rejects_naive(self) -> None:
        with pytest.raises(ValueError, match="timezone-aware"):
            to_millis(datetime(2026, 1, 1))

    def test_from_millis_defaults_to_utc(self) -> None:
        assert from_millis(1_767_225_600_000) == datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert from_millis(1_767_225_600_000).tzinfo is timezone.utc

    def test_from_millis_in_zone(self) -> None:
        moment = from_millis(1_767_225_600_000, PACIFIC)
        assert moment.day == 31
        assert moment.hour == 16


class TestPeriodSinceEpoch:
    """Tests for period_since_epoch()."""

    def test_daily_periods(self) -> None:
        # 2026-01-01 is day 20454 since the epoch
        assert period_since_epoch(datetime(2026, 1, 1, 12, tzinfo=timezone.utc)) == 20454

    def test_independent_of_zone(self) -> None:
        utc = datetime(2026, 1, 1, 1, tzinfo=timezone.utc)
        assert period_since_epoch(utc.astimezone(PACIFIC)) == period_since_epoch(utc)

    def test_hourly_periods(self) -> None:
        assert period_since_epoch(datetime(1970, 1, 1, 5, 30, tzinfo=timezone.utc), 1) == 5


class TestDayCounts:
    """Tests for days_between() and days_between_utc()."""

    def test_local_and_utc_disagree_across_midnight(self) -> None:
        """23:00 to 01:00 Pacific is one local day but zero UTC days."""
        start = datetime(2026, 1, 1, 23, 0, tzinfo=PACIFIC)
        end = datetime(2026, 1, 2, 1, 0, tzinfo=PACIFIC)

        assert days_between(start, end) == 1
        assert days_between_utc(start, end) == 0

    def test_days_between_across_daylight_saving_change(self) -> None:
        """EST 23:30 to EDT 00:10 two weeks later is 14 local dates apart."""
        new_york = ZoneInfo("America/New_York")
        start = datetime(2026, 3, 1, 23, 30, tzinfo=new_york)
        end = datetime(2026, 3, 15, 0, 10, tzinfo=new_york)

        assert start.utcoffset() != end.utcoffset()
        assert days_between(start, end) == 14

    def test_negative_when_end_precedes_start(self) -> None:
        start = datetime(2026, 1, 10, tzinfo=timezone.utc)
        assert days_between_utc(start, add_days(start, -3)) == -3

    def test_minutes_between(self) -> None:
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert minutes_between(start, start + timedelta(minutes=181)) == 181.0
