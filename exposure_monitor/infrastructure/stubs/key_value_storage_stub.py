"""In-memory key/value storage stubs.

Both device stores are plain string maps here. Reads and writes can be
made to fail to exercise the logged-and-continue persistence paths.

WARNING: These stubs are for development/testing only.
"""

from __future__ import annotations

from exposure_monitor.application.ports.persistence import (
    KeyValueStorageProtocol,
    SecureStorageProtocol,
)


class StorageFailure(Exception):
    """Simulated device storage failure."""


class KeyValueStorageStub(KeyValueStorageProtocol):
    """In-memory KeyValueStorageProtocol.

    Example:
        >>> storage = KeyValueStorageStub()
        >>> storage.seed({"exposureStatus": '{"type": "monitoring"}'})
        >>> await storage.get_item("exposureStatus")
        '{"type": "monitoring"}'
    """

    def __init__(self, *, fail_reads: bool = False, fail_writes: bool = False) -> None:
        self._items: dict[str, str] = {}
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_count = 0

    def seed(self, items: dict[str, str]) -> None:
        self._items.update(items)

    def peek(self, key: str) -> str | None:
        """Read a value without going through the async interface."""
        return self._items.get(key)

    def clear(self) -> None:
        self._items.clear()
        self.write_count = 0

    async def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageFailure(f"read failed: {key}")
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageFailure(f"write failed: {key}")
        self._items[key] = value
        self.write_count += 1


class SecureStorageStub(SecureStorageProtocol):
    """In-memory SecureStorageProtocol that records the options of each write."""

    def __init__(self, *, fail_writes: bool = False) -> None:
        self._items: dict[str, str] = {}
        self.options: dict[str, dict[str, str] | None] = {}
        self.fail_writes = fail_writes

    def peek(self, key: str) -> str | None:
        return self._items.get(key)

    def clear(self) -> None:
        self._items.clear()
        self.options.clear()

    async def get(self, key: str) -> str | None:
        return self._items.get(key)

    async def set(self, key: str, value: str, options: dict[str, str] | None = None) -> None:
        if self.fail_writes:
            raise StorageFailure(f"secure write failed: {key}")
        self._items[key] = value
        self.options[key] = options
