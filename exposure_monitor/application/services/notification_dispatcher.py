"""Exposure alert and upload reminder dispatch.

Both notifications are idempotent across repeated background runs:
- Exposure alert: once per Exposed episode (notification_sent flag)
- Upload reminder: at most once per reminder interval while a
  submission is due (upload_reminder_last_sent_at)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from structlog import get_logger

from exposure_monitor.config import DEFAULT_EXPOSURE_MONITOR_CONFIG, ExposureMonitorConfig
from exposure_monitor.domain.models import Diagnosed, Exposed, ExposureStatus
from exposure_monitor.domain.primitives import from_millis, minutes_between, to_millis

if TYPE_CHECKING:
    from exposure_monitor.application.ports import (
        PushNotificationProtocol,
        TimeAuthorityProtocol,
        TranslatorProtocol,
    )
    from exposure_monitor.application.services.exposure_status_machine import (
        ExposureStatusMachine,
    )

logger = get_logger(__name__)

EXPOSED_TITLE_KEY = "Notification.ExposedMessageTitle"
EXPOSED_BODY_KEY = "Notification.ExposedMessageBody"
UPLOAD_REMINDER_TITLE_KEY = "Notification.DailyUploadNotificationTitle"
UPLOAD_REMINDER_BODY_KEY = "Notification.DailyUploadNotificationBody"


class NotificationDispatcher:
    """Presents due notifications and records that they were sent."""

    def __init__(
        self,
        status_machine: ExposureStatusMachine,
        push_notification: PushNotificationProtocol,
        translator: TranslatorProtocol,
        time_authority: TimeAuthorityProtocol,
        config: ExposureMonitorConfig = DEFAULT_EXPOSURE_MONITOR_CONFIG,
    ) -> None:
        self._status_machine = status_machine
        self._push = push_notification
        self._translator = translator
        self._time = time_authority
        self._config = config

    def is_reminder_needed(self, status: ExposureStatus) -> bool:
        """Return whether an upload reminder is due for status."""
        if not isinstance(status, Diagnosed) or not status.needs_submission:
            return False
        if not status.upload_reminder_last_sent_at:
            return True
        elapsed = minutes_between(
            from_millis(status.upload_reminder_last_sent_at), self._time.utcnow()
        )
        return elapsed > self._config.minimum_reminder_interval_minutes

    async def process_notification(self) -> None:
        status = self._status_machine.status

        if isinstance(status, Exposed) and not status.notification_sent:
            await self._push.present_local_notification(
                title=self._translator.translate(EXPOSED_TITLE_KEY),
                body=self._translator.translate(EXPOSED_BODY_KEY),
            )
            await self._status_machine.mark_notification_sent()
            logger.info("exposure_notification_sent")

        if self.is_reminder_needed(status):
            await self._push.present_local_notification(
                title=self._translator.translate(UPLOAD_REMINDER_TITLE_KEY),
                body=self._translator.translate(UPLOAD_REMINDER_BODY_KEY),
            )
            await self._status_machine.mark_upload_reminder_sent(
                to_millis(self._time.utcnow())
            )
            logger.info("upload_reminder_sent")
