"""
Local File Storage Implementation

DESIGN DECISION: Local files are used as the storage backend because:
1. Data stays on the user's machine (single local writer)
2. No database setup required
3. Users can back up or inspect the data directory directly

Each key is one file inside the data directory. A write replaces the
whole file atomically (temp file + rename), so readers only ever see
the previous value or the new one - never a half-written blob.

TRADEOFFS:
- Whole-value rewrites cost O(value size) per write (fine for personal use)
- No locking between processes (we assume one writer)
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from scheduled_payments.config import get_settings
from scheduled_payments.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)


class LocalFileStorage(KeyValueStorageInterface):
    """
    File-per-key implementation of key-value storage.

    The data directory is created lazily on first write, so a fresh
    install with no directory simply reads as "no data yet".
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        write_retry_attempts: Optional[int] = None,
    ):
        settings = get_settings().storage
        self._data_dir = Path(data_dir) if data_dir is not None else settings.data_dir
        self._write_retry_attempts = (
            write_retry_attempts
            if write_retry_attempts is not None
            else settings.write_retry_attempts
        )

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """Path of the file holding a key."""
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._data_dir / key

    async def get(self, key: str) -> Optional[bytes]:
        """Read a key's file, or None if it doesn't exist."""
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")

    async def set(self, key: str, value: bytes) -> bool:
        """Atomically replace a key's file, retrying transient OS errors."""
        path = self.path_for(key)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._write_retry_attempts),
                wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._write_atomic(path, value)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}")
        return True

    def _write_atomic(self, path: Path, value: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(value)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            # Leave no stray temp files behind on failure
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
