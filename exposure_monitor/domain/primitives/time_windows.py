"""Date arithmetic on epoch-millisecond instants and aware datetimes.

Persisted timestamps are epoch milliseconds, the format the key/value
store has always held. Domain code converts at the edges with
to_millis() / from_millis().
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

HOURS_PER_PERIOD = 24
MILLISECONDS_PER_HOUR = 60 * 60 * 1000
_MILLISECONDS_PER_MINUTE = 60 * 1000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_millis(moment: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    if moment.tzinfo is None:
        raise ValueError("moment must be timezone-aware")
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def from_millis(millis: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch milliseconds to an aware datetime.

    Args:
        millis: Milliseconds since the Unix epoch.
        tz: Zone to express the instant in (default: UTC).
    """
    return datetime.fromtimestamp(millis / 1000, tz=tz or timezone.utc)


def add_days(moment: datetime, days: int) -> datetime:
    return moment + timedelta(days=days)


def period_since_epoch(moment: datetime, hours_per_period: int = HOURS_PER_PERIOD) -> int:
    """Return the index of the fixed-size window containing moment.

    Periods are counted from the Unix epoch in UTC, so the result does not
    depend on the zone moment is expressed in.
    """
    return to_millis(moment) // (hours_per_period * MILLISECONDS_PER_HOUR)


def days_between(start: datetime, end: datetime) -> int:
    """Whole calendar days between the wall-clock dates of start and end.

    Each datetime is read in the zone it carries. Callers pass both in
    device-local time, each converted with the offset in force at its own
    instant, so a daylight-saving change in between does not shift a date.
    """
    return (end.date() - start.date()).days


def days_between_utc(start: datetime, end: datetime) -> int:
    """Whole UTC calendar days from start to end."""
    start_utc = start.astimezone(timezone.utc)
    end_utc = end.astimezone(timezone.utc)
    return (end_utc.date() - start_utc.date()).days


def minutes_between(start: datetime, end: datetime) -> float:
    return (to_millis(end) - to_millis(start)) / _MILLISECONDS_PER_MINUTE
