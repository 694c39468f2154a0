"""Stub local notifications and translator.

WARNING: These stubs are for development/testing only.
"""

from __future__ import annotations

from dataclasses import dataclass

from exposure_monitor.application.ports.push_notification import PushNotificationProtocol
from exposure_monitor.application.ports.translator import TranslatorProtocol

DEFAULT_TRANSLATIONS: dict[str, str] = {
    "Notification.ExposedMessageTitle": "You have possibly been exposed to COVID-19",
    "Notification.ExposedMessageBody": "Tap for more information.",
    "Notification.DailyUploadNotificationTitle": "Share your random IDs",
    "Notification.DailyUploadNotificationBody": (
        "Upload today's random IDs to help slow the spread."
    ),
}


@dataclass(frozen=True)
class PresentedNotification:
    title: str
    body: str


class PushNotificationStub(PushNotificationProtocol):
    """Records presented notifications instead of showing them."""

    def __init__(self) -> None:
        self.presented: list[PresentedNotification] = []

    def clear(self) -> None:
        self.presented = []

    async def present_local_notification(self, title: str, body: str) -> None:
        self.presented.append(PresentedNotification(title=title, body=body))


class TranslatorStub(TranslatorProtocol):
    """Looks keys up in a fixed table; unknown keys translate to themselves."""

    def __init__(self, translations: dict[str, str] | None = None) -> None:
        self._translations = dict(DEFAULT_TRANSLATIONS if translations is None else translations)

    def translate(self, key: str) -> str:
        return self._translations.get(key, key)
