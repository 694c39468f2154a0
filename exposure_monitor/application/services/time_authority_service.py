"""System time authority.

Production implementation of TimeAuthorityProtocol backed by the host
clock. now() is expressed in the host's local zone because exposure aging
is judged in device-local calendar days.
"""

from datetime import datetime, timezone

from exposure_monitor.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority reading the host wall clock.

    Example:
        >>> clock = SystemTimeAuthority()
        >>> clock.now().tzinfo is not None
        True
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc).astimezone()

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def to_local(self, moment: datetime) -> datetime:
        return moment.astimezone()
