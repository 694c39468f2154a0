"""Clock port.

Exposure monitoring reads two views of the same instant:

- now(): device-local wall clock. Exposure aging counts local calendar days,
  so an exposure expires at the user's midnight.
- utcnow(): UTC. Submission cycles, the daily submission credit, checkpoint
  and reminder timestamps are all UTC.

Services take a TimeAuthorityProtocol instead of calling datetime.now().
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TimeAuthorityProtocol(Protocol):
    def now(self) -> datetime:
        """Return the current instant as an aware datetime in the device zone."""
        ...

    def utcnow(self) -> datetime:
        """Return the same instant as now(), expressed in UTC."""
        ...

    def to_local(self, moment: datetime) -> datetime:
        """Express an aware instant in the device zone.

        Uses the zone rules in force at that instant, which can differ from
        the offset of now() across a daylight-saving change.
        """
        ...
