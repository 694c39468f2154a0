"""Stub ExposureNotificationBridge.

Stands in for the platform exposure-matching framework. Summaries returned
by detect_exposure() and get_pending_exposure_summary() are whatever the
test configured; no cryptographic matching happens.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import structlog

from exposure_monitor.application.ports.exposure_notification_bridge import (
    ExposureNotificationBridgeProtocol,
)
from exposure_monitor.domain.models import (
    ExposureConfiguration,
    ExposureSummary,
    SystemStatus,
    TemporaryExposureKey,
)

log = structlog.get_logger()


class BridgeFailure(Exception):
    """Simulated platform framework failure."""


@dataclass
class BridgeFailureMode:
    """Which bridge calls fail.

    Attributes:
        start: start() raises.
        detect_exposure: detect_exposure() raises.
        pending_summary: get_pending_exposure_summary() raises.
        key_history: get_temporary_exposure_key_history() raises.
    """

    start: bool = False
    detect_exposure: bool = False
    pending_summary: bool = False
    key_history: bool = False


@dataclass
class DetectExposureCall:
    """Arguments of one detect_exposure() invocation."""

    configuration: ExposureConfiguration
    diagnosis_keys_urls: list[str] = field(default_factory=list)


class ExposureNotificationBridgeStub(ExposureNotificationBridgeProtocol):
    """Configurable in-memory bridge.

    Example:
        >>> bridge = ExposureNotificationBridgeStub()
        >>> bridge.set_detected_summaries([summary])
        >>> await bridge.detect_exposure(configuration, ["file:///keys/1.zip"])
        [ExposureSummary(...)]
    """

    DEV_MODE_WATERMARK = "[DEV MODE - NO EXPOSURE FRAMEWORK]"

    def __init__(
        self,
        *,
        status: SystemStatus = SystemStatus.ACTIVE,
        failure_mode: BridgeFailureMode | None = None,
    ) -> None:
        self.status = status
        self.failure_mode = failure_mode or BridgeFailureMode()
        self._pending: list[ExposureSummary] | None = None
        self._detected: list[ExposureSummary] = []
        self._key_history: list[TemporaryExposureKey] = []
        self.start_count = 0
        self.detect_calls: list[DetectExposureCall] = []

    def set_pending_summaries(self, summaries: list[ExposureSummary] | None) -> None:
        self._pending = summaries

    def set_detected_summaries(self, summaries: list[ExposureSummary]) -> None:
        self._detected = list(summaries)

    def set_key_history(self, keys: list[TemporaryExposureKey]) -> None:
        self._key_history = list(keys)

    def clear(self) -> None:
        """Reset configured results, failures and recorded calls."""
        self.status = SystemStatus.ACTIVE
        self.failure_mode = BridgeFailureMode()
        self._pending = None
        self._detected = []
        self._key_history = []
        self.start_count = 0
        self.detect_calls = []

    async def start(self) -> None:
        self.start_count += 1
        # Real frameworks suspend here while the permission prompt is shown
        await asyncio.sleep(0)
        if self.failure_mode.start:
            raise BridgeFailure("framework start failed")

    async def get_status(self) -> SystemStatus:
        return self.status

    async def get_pending_exposure_summary(self) -> list[ExposureSummary] | None:
        if self.failure_mode.pending_summary:
            raise BridgeFailure("pending summary unavailable")
        return self._pending

    async def detect_exposure(
        self,
        configuration: ExposureConfiguration,
        diagnosis_keys_urls: list[str],
    ) -> list[ExposureSummary]:
        self.detect_calls.append(
            DetectExposureCall(
                configuration=configuration,
                diagnosis_keys_urls=list(diagnosis_keys_urls),
            )
        )
        # Yield so overlapping callers can observe an in-flight detection
        await asyncio.sleep(0)
        if self.failure_mode.detect_exposure:
            raise BridgeFailure("exposure detection failed")
        log.debug(
            "exposure_bridge_stub_detect",
            key_file_count=len(diagnosis_keys_urls),
            summary_count=len(self._detected),
            watermark=self.DEV_MODE_WATERMARK,
        )
        return list(self._detected)

    async def get_temporary_exposure_key_history(self) -> list[TemporaryExposureKey]:
        if self.failure_mode.key_history:
            raise BridgeFailure("key history unavailable")
        return list(self._key_history)
