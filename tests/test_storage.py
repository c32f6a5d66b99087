"""Tests for the key-value storage backends."""

import asyncio
import os

import pytest

from scheduled_payments.services.storage import (
    InMemoryStorage,
    LocalFileStorage,
    StorageError,
)


class TestInMemoryStorage:

    def test_missing_key_is_none(self):
        assert asyncio.run(InMemoryStorage().get("nothing")) is None

    def test_set_then_get(self):
        storage = InMemoryStorage()
        assert asyncio.run(storage.set("k", b"value")) is True
        assert asyncio.run(storage.get("k")) == b"value"
        assert storage.keys() == ["k"]

    def test_set_replaces_value(self):
        storage = InMemoryStorage({"k": b"old"})
        asyncio.run(storage.set("k", b"new"))
        assert asyncio.run(storage.get("k")) == b"new"

    def test_stored_bytes_are_copied(self):
        value = bytearray(b"abc")
        storage = InMemoryStorage()
        asyncio.run(storage.set("k", value))
        value[0] = ord("z")
        assert asyncio.run(storage.get("k")) == b"abc"


class TestLocalFileStorage:

    def test_missing_directory_reads_as_empty(self, tmp_path):
        storage = LocalFileStorage(data_dir=tmp_path / "not-created")
        assert asyncio.run(storage.get("scheduledPayments")) is None

    def test_set_creates_directory_and_file(self, tmp_path):
        storage = LocalFileStorage(data_dir=tmp_path / "data")
        assert asyncio.run(storage.set("scheduledPayments", b"[]")) is True
        assert (tmp_path / "data" / "scheduledPayments").read_bytes() == b"[]"

    def test_round_trip(self, tmp_path):
        storage = LocalFileStorage(data_dir=tmp_path)
        asyncio.run(storage.set("k", b'[{"title":"Rent"}]'))
        assert asyncio.run(LocalFileStorage(data_dir=tmp_path).get("k")) == b'[{"title":"Rent"}]'

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        storage = LocalFileStorage(data_dir=tmp_path)
        asyncio.run(storage.set("k", b"one"))
        asyncio.run(storage.set("k", b"two"))
        assert asyncio.run(storage.get("k")) == b"two"
        assert os.listdir(tmp_path) == ["k"]

    @pytest.mark.parametrize("key", ["", "a/b", "..", "a\\b"])
    def test_invalid_keys_rejected(self, tmp_path, key):
        with pytest.raises(StorageError):
            asyncio.run(LocalFileStorage(data_dir=tmp_path).get(key))

    def test_write_failure_raises_storage_error(self, tmp_path):
        # A regular file where the data directory should be
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")
        storage = LocalFileStorage(data_dir=blocker, write_retry_attempts=1)
        with pytest.raises(StorageError):
            asyncio.run(storage.set("k", b"[]"))

    def test_read_failure_raises_storage_error(self, tmp_path):
        # The key path is a directory, so reading it fails
        (tmp_path / "k").mkdir()
        with pytest.raises(StorageError):
            asyncio.run(LocalFileStorage(data_dir=tmp_path).get("k"))
