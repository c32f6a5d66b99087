"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key-value interface for storage.
This allows us to:
1. Keep data in local files today
2. Use in-memory storage for testing
3. Swap in another backend later without touching the payment store

The interface is intentionally tiny - a get and a set of raw bytes.
What the bytes mean is the payment store's business, not the backend's.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for durable key-value storage.

    Any storage implementation (local files, memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[bytes]:
        """
        Read the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored bytes, or None if nothing was ever stored

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: bytes) -> bool:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: The storage key
            value: The full value to store

        Returns:
            True if stored successfully

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class PersistenceError(StorageError):
    """Reading from or writing to durable storage failed."""
    pass


class DeserializationError(StorageError):
    """Stored bytes do not match the expected schema."""
    pass
