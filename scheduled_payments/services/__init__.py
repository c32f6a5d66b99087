"""Services package."""

from scheduled_payments.services.storage import (
    DeserializationError,
    InMemoryStorage,
    KeyValueStorageInterface,
    LocalFileStorage,
    PersistenceError,
    StorageError,
)

__all__ = [
    # Storage services
    "DeserializationError",
    "InMemoryStorage",
    "KeyValueStorageInterface",
    "LocalFileStorage",
    "PersistenceError",
    "StorageError",
]
