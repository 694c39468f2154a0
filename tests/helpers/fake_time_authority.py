"""FakeTimeAuthority - controllable clock for deterministic tests.

No test may depend on the machine's clock or zone. The fake holds a single
instant plus a device zone, so a test can put local and UTC midnight on
different sides of a check:

    >>> pacific = timezone(timedelta(hours=-8))
    >>> clock = FakeTimeAuthority(
    ...     frozen_at=datetime(2026, 1, 15, 23, 0, tzinfo=pacific), local_tz=pacific
    ... )
    >>> clock.now().day, clock.utcnow().day
    (15, 16)
    >>> clock.advance(delta=timedelta(days=1))

Most tests use the ``fake_time_authority`` fixture from conftest.py.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

from exposure_monitor.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_FROZEN_AT = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Clock that only moves when a test advances it."""

    def __init__(
        self,
        frozen_at: datetime = DEFAULT_FROZEN_AT,
        *,
        local_tz: tzinfo = timezone.utc,
    ) -> None:
        """Freeze the clock.

        Args:
            frozen_at: Starting instant. A naive value is taken as UTC.
            local_tz: Zone now() expresses the instant in.
        """
        if frozen_at.tzinfo is None:
            frozen_at = frozen_at.replace(tzinfo=timezone.utc)
        self._instant = frozen_at
        self._local_tz = local_tz

    def now(self) -> datetime:
        return self._instant.astimezone(self._local_tz)

    def utcnow(self) -> datetime:
        return self._instant.astimezone(timezone.utc)

    def to_local(self, moment: datetime) -> datetime:
        return moment.astimezone(self._local_tz)

    def advance(self, seconds: float | None = None, delta: timedelta | None = None) -> None:
        """Move the clock forward by delta, or else by seconds.

        Raises:
            ValueError: Neither amount was given, or the amount is negative.
        """
        if delta is None:
            if seconds is None:
                raise ValueError("Must provide either 'seconds' or 'delta' argument")
            delta = timedelta(seconds=seconds)
        if delta < timedelta(0):
            raise ValueError(f"Cannot advance time backwards, got {delta}")
        self._instant += delta

    def __repr__(self) -> str:
        return f"FakeTimeAuthority(instant={self._instant.isoformat()}, local_tz={self._local_tz})"
