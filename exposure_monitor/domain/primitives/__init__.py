"""Calendar primitives for the exposure monitor domain layer.

Two time bases coexist in the state machine and must not be unified:

- UTC calendar days (days_between_utc): submission cycle end and
  once-per-day submission credit.
- Device-local calendar days (days_between): exposure aging.
"""

from exposure_monitor.domain.primitives.time_windows import (
    HOURS_PER_PERIOD,
    MILLISECONDS_PER_HOUR,
    add_days,
    days_between,
    days_between_utc,
    from_millis,
    minutes_between,
    period_since_epoch,
    to_millis,
)

__all__: list[str] = [
    "HOURS_PER_PERIOD",
    "MILLISECONDS_PER_HOUR",
    "add_days",
    "days_between",
    "days_between_utc",
    "from_millis",
    "minutes_between",
    "period_since_epoch",
    "to_millis",
]
