"""Key submission errors.

These errors are user-actionable: they propagate to the caller so the
presentation layer can show a specific message for each.
"""

from exposure_monitor.domain.exceptions import ExposureMonitorError


class SubmissionError(ExposureMonitorError):
    """Base class for failures while uploading diagnosis keys."""


class SubmissionCredentialMissingError(SubmissionError):
    """Raised when no submission credential has been stored.

    The credential is written when a one-time code is redeemed. Without it
    the backend will reject any upload, so the user has to redeem a new code.
    """

    def __init__(self) -> None:
        super().__init__("Submission keys: bad certificate")


class TemporaryExposureKeysUnavailableError(SubmissionError):
    """Raised when the device's temporary exposure keys cannot be read.

    Unlike a missing credential this is retryable: the user may have
    declined the platform permission prompt, or the platform is busy.
    """

    def __init__(self) -> None:
        super().__init__("Unable to retrieve TEKs")
