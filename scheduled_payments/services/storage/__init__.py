"""
Storage Services Package

Provides the abstract key-value interface and concrete implementations.
Currently implements local files as the backend, but designed to be swappable.
"""

from scheduled_payments.services.storage.interface import (
    DeserializationError,
    KeyValueStorageInterface,
    PersistenceError,
    StorageError,
)
from scheduled_payments.services.storage.local_files import LocalFileStorage
from scheduled_payments.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "DeserializationError",
    "PersistenceError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "LocalFileStorage",
]
