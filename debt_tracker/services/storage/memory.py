"""
In-Memory Storage Implementation

Used for tests and for running the tracker without touching the disk.
An optional quota mimics the size limit of browser local storage.
"""

from typing import Optional

from debt_tracker.services.storage.interface import (
    KeyValueStorage,
    QuotaExceededError,
)


class InMemoryStorage(KeyValueStorage):
    """Dictionary-backed key-value storage."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def _size_with(self, key: str, value: str) -> int:
        total = 0
        for existing_key, existing_value in self._items.items():
            if existing_key == key:
                continue
            total += len(existing_key.encode("utf-8")) + len(existing_value.encode("utf-8"))
        return total + len(key.encode("utf-8")) + len(value.encode("utf-8"))

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            needed = self._size_with(key, value)
            if needed > self._quota_bytes:
                raise QuotaExceededError(
                    f"Storing {key!r} needs {needed} bytes, quota is {self._quota_bytes}"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items
