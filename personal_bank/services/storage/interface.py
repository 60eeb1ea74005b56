"""
Abstract Storage Interface

We define an abstract interface for the local key-value store.
This allows us to:
1. Keep ledger and session logic decoupled from where bytes live
2. Use in-memory storage for testing
3. Swap the file-backed store for something else later

The interface follows browser local storage: string keys,
string values, synchronous calls and last writer wins. Values are JSON
documents, but encoding them is the caller's job.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for a string-keyed, string-valued store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: String to store

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Args:
            key: Storage key
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List every stored key."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class InvalidKeyError(StorageError):
    """Key cannot be used with this backend."""
    pass


class StorageUnavailableError(StorageError):
    """The storage backend could not be reached or written."""
    pass
