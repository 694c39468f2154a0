"""Local push notification port."""

from __future__ import annotations

from typing import Protocol


class PushNotificationProtocol(Protocol):
    """Protocol for presenting local (on-device) notifications."""

    async def present_local_notification(self, title: str, body: str) -> None:
        """Show a notification with the given title and body."""
        ...
