"""Persistence ports.

Two stores back the exposure monitor:
- KeyValueStorageProtocol: plain key/value strings (status, cached
  configuration, last exposure timestamp)
- SecureStorageProtocol: encrypted key/value strings (submission credential)

Values are JSON or numeric strings; encoding is the caller's concern.
"""

from __future__ import annotations

from typing import Protocol


class KeyValueStorageProtocol(Protocol):
    """Protocol for the device key/value store."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Write value under key, replacing any previous value."""
        ...


class SecureStorageProtocol(Protocol):
    """Protocol for the device secure (keychain/keystore) store."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""
        ...

    async def set(self, key: str, value: str, options: dict[str, str] | None = None) -> None:
        """Write value under key.

        Args:
            key: Storage key.
            value: Value to store.
            options: Platform options such as {"accessible": "AfterFirstUnlock"}.
        """
        ...
