"""
Unit tests for Data Store.
"""

import os
from datetime import datetime

import pytest

from health_tracker.data_store import DataStore, DataStoreError


def store_entry(data_store, user_key, key, value=b"x", timestamp=None):
    metadata = {'timestamp': (timestamp or datetime.now()).isoformat()}
    return data_store.store(key, value, metadata, user_key)


class TestDataStore:
    """Test suite for DataStore."""

    def test_store_and_retrieve(self, data_store, user_key):
        result = store_entry(data_store, user_key, "u1/health/a", b"payload")

        assert result.success
        assert result.key == "u1/health/a"
        assert data_store.retrieve("u1/health/a", user_key) == b"payload"

    def test_value_is_encrypted_on_disk(self, data_store, user_key):
        store_entry(data_store, user_key, "u1/health/a", b"rahasia-sekali")

        with open(data_store.base_path / "u1/health/a", "rb") as f:
            assert b"rahasia-sekali" not in f.read()

    def test_invalid_key(self, data_store, user_key):
        result = store_entry(data_store, user_key, "u1")
        assert not result.success
        assert "Invalid key" in result.message

    def test_retrieve_missing(self, data_store, user_key):
        assert data_store.retrieve("u1/health/none", user_key) is None

    def test_retrieve_with_wrong_key(self, data_store, user_key):
        store_entry(data_store, user_key, "u1/health/a")
        assert data_store.retrieve("u1/health/a", os.urandom(32)) is None

    def test_retrieve_malformed_key_raises(self, data_store, user_key):
        with pytest.raises(DataStoreError):
            data_store.retrieve("nothing", user_key)

    def test_query_by_data_type(self, data_store, user_key):
        store_entry(data_store, user_key, "u1/health/a", b"1")
        store_entry(data_store, user_key, "u1/health/b", b"2")
        store_entry(data_store, user_key, "u1/symptoms/c", b"3")
        store_entry(data_store, user_key, "u2/health/d", b"4")

        assert sorted(data_store.query("u1", "health", {}, user_key)) == [b"1", b"2"]
        assert data_store.count("u1", "health") == 2
        assert data_store.count("u1", "goals") == 0

    def test_query_date_filters(self, data_store, user_key):
        store_entry(data_store, user_key, "u1/health/a", b"jan", datetime(2024, 1, 10))
        store_entry(data_store, user_key, "u1/health/b", b"feb", datetime(2024, 2, 10))
        store_entry(data_store, user_key, "u1/health/c", b"mar", datetime(2024, 3, 10))

        results = data_store.query(
            "u1", "health",
            {'start_date': datetime(2024, 2, 1), 'end_date': datetime(2024, 3, 10)},
            user_key
        )

        assert sorted(results) == [b"feb", b"mar"]

    def test_index_survives_restart(self, data_store, user_key, privacy_module):
        store_entry(data_store, user_key, "u1/health/a", b"1")

        reopened = DataStore(base_path=str(data_store.base_path), privacy_module=privacy_module)

        assert reopened.keys("u1", "health") == ["u1/health/a"]
        assert reopened.retrieve("u1/health/a", user_key) == b"1"

    def test_keys_fallback_to_directory_scan(self, data_store, user_key, privacy_module):
        store_entry(data_store, user_key, "u1/health/a", b"1")
        (data_store.base_path / "_index.json").unlink()

        reopened = DataStore(base_path=str(data_store.base_path), privacy_module=privacy_module)

        assert reopened.keys("u1", "health") == ["u1/health/a"]

    def test_delete_own_record(self, data_store, user_key):
        store_entry(data_store, user_key, "u1/health/a")

        result = data_store.delete("u1/health/a", "u1")

        assert result.success
        assert data_store.retrieve("u1/health/a", user_key) is None
        assert data_store.count("u1", "health") == 0

    def test_delete_other_users_record_denied(self, data_store, user_key):
        store_entry(data_store, user_key, "u1/health/a")

        result = data_store.delete("u1/health/a", "u2")

        assert not result.success
        assert result.message == "Unauthorized access"
        assert data_store.retrieve("u1/health/a", user_key) is not None

    def test_delete_missing(self, data_store):
        result = data_store.delete("u1/health/none", "u1")
        assert not result.success
        assert result.message == "Key not found"
