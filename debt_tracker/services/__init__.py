"""Services package."""

from debt_tracker.services.storage import (
    CorruptDataError,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    QuotaExceededError,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptDataError",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "QuotaExceededError",
    "StorageError",
]
