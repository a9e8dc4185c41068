"""
Storage Services Package

Provides the abstract key-value interface and its backends.
The ledger is stored on disk as JSON by default; an in-memory backend
serves tests and throwaway sessions.
"""

from debt_tracker.services.storage.interface import (
    CorruptDataError,
    KeyValueStorage,
    QuotaExceededError,
    StorageError,
)
from debt_tracker.services.storage.json_file import JsonFileStorage
from debt_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "CorruptDataError",
    "QuotaExceededError",
    "StorageError",
    # Backends
    "InMemoryStorage",
    "JsonFileStorage",
]
