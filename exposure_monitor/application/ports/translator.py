"""Localization port."""

from __future__ import annotations

from typing import Protocol


class TranslatorProtocol(Protocol):
    """Protocol for looking up localized strings."""

    def translate(self, key: str) -> str:
        """Return the localized string for key (e.g. "Notification.ExposedMessageTitle")."""
        ...
