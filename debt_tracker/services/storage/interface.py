"""
Abstract Storage Interface

DESIGN DECISION: The ledger is persisted through a minimal key-value
interface, the same shape as a browser's local storage:
1. One serialized blob per namespaced key
2. Whole-value reads and writes, no partial updates
3. Backends decide where the bytes go (disk, memory)

Keeping the interface this small lets the store own all knowledge of the
snapshot format while backends stay format-agnostic.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for key-value persistence.

    Any backend (JSON files, memory, ...) must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The namespaced storage key

        Returns:
            The stored text, or None if nothing is stored under the key

        Raises:
            StorageError: If the medium cannot be read
            CorruptDataError: If the stored bytes are not text
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Replace the value stored under a key.

        A failed write must leave the previous value intact.

        Raises:
            StorageError: If the write fails (including quota exhaustion)
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the medium cannot be modified
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class QuotaExceededError(StorageError):
    """The value does not fit in the space the backend allows."""
    pass


class CorruptDataError(Exception):
    """
    Persisted data exists but cannot be used.

    Raised when the stored blob is not valid JSON or does not have
    the shape of a ledger snapshot.
    """
    pass
