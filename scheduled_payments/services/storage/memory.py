"""
In-Memory Storage Implementation

Used by tests and for throwaway sessions where nothing should
touch the disk. Values are copied on the way in and out so callers
can't mutate what is "stored".
"""

from typing import Optional

from scheduled_payments.services.storage.interface import KeyValueStorageInterface


class InMemoryStorage(KeyValueStorageInterface):
    """Dict-backed key-value storage."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._data: dict[str, bytes] = {
            key: bytes(value) for key, value in (initial or {}).items()
        }

    async def get(self, key: str) -> Optional[bytes]:
        value = self._data.get(key)
        return bytes(value) if value is not None else None

    async def set(self, key: str, value: bytes) -> bool:
        self._data[key] = bytes(value)
        return True

    def keys(self) -> list[str]:
        return list(self._data)
