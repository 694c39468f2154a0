"""Exposure notification bridge port.

This module defines the contract of the platform exposure-matching
capability (Apple/Google Exposure Notification framework). The bridge
performs the cryptographic matching; the monitor only supplies a
configuration and key-file handles and reads back summaries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from exposure_monitor.domain.models import (
        ExposureConfiguration,
        ExposureSummary,
        SystemStatus,
        TemporaryExposureKey,
    )


class ExposureNotificationBridgeProtocol(Protocol):
    """Protocol for the platform exposure-matching capability.

    Calls are expensive and rate-limited by the platform; they must not run
    concurrently with themselves.
    """

    async def start(self) -> None:
        """Start the framework. May prompt the user for permission."""
        ...

    async def get_status(self) -> SystemStatus:
        """Return the framework's current availability."""
        ...

    async def get_pending_exposure_summary(self) -> list[ExposureSummary] | None:
        """Return summaries the platform computed asynchronously, if any.

        Only Android queues summaries; iOS always returns None.
        """
        ...

    async def detect_exposure(
        self,
        configuration: ExposureConfiguration,
        diagnosis_keys_urls: list[str],
    ) -> list[ExposureSummary]:
        """Match the given key files against locally observed keys."""
        ...

    async def get_temporary_exposure_key_history(self) -> list[TemporaryExposureKey]:
        """Return the device's own keys. Prompts the user for consent."""
        ...
