"""
Data Store module for Health Tracker.

Provides encrypted file-based storage with user-based partitioning and
timestamp-filtered queries.
"""

import json
import logging
import pickle
from pathlib import Path
from typing import Optional, Any
from datetime import datetime
from dataclasses import dataclass

from .config import get_settings
from .models import EncryptedData
from .privacy import PrivacyError, PrivacyModule

logger = logging.getLogger(__name__)

INDEX_FILE = '_index.json'


@dataclass
class StorageResult:
    """Result of storage operation."""
    success: bool
    message: str = ""
    key: Optional[str] = None


class DataStoreError(Exception):
    """Raised when data store operations fail."""
    pass


def _split_key(key: str) -> tuple[str, str]:
    parts = key.split('/')
    if len(parts) < 3 or not all(parts):
        raise DataStoreError(
            f"Invalid key {key!r}. Expected: user_id/data_type/identifier"
        )
    return parts[0], parts[1]


class DataStore:
    """
    Encrypted file-based storage system.

    Records live at ``{user_id}/{data_type}/{identifier}``. Values are
    encrypted with the owner's key; metadata (including the ``timestamp``
    used by queries) is stored alongside in clear.
    """

    def __init__(self, base_path: Optional[str] = None, privacy_module: PrivacyModule = None):
        """
        Initialize data store.

        Args:
            base_path: Base directory for data storage
            privacy_module: Privacy module for encryption (created if not provided)
        """
        self.base_path = Path(base_path or get_settings().data_dir)
        self.privacy_module = privacy_module or PrivacyModule()

        self.base_path.mkdir(parents=True, exist_ok=True)

        # Index for efficient querying: {user_id: {data_type: [keys]}}
        self._index: dict[str, dict[str, list[str]]] = {}
        self._load_index()

    def store(
        self,
        key: str,
        value: bytes,
        metadata: dict[str, Any],
        user_key: bytes
    ) -> StorageResult:
        """
        Store encrypted data with metadata.

        Args:
            key: Storage key (format: user_id/data_type/identifier)
            value: Data to store (will be encrypted)
            metadata: Metadata; ``timestamp`` (ISO format) enables date filters
            user_key: User's encryption key

        Returns:
            StorageResult indicating success/failure
        """
        try:
            user_id, data_type = _split_key(key)
            encrypted_data = self.privacy_module.encrypt_data(value, user_key)
        except (DataStoreError, PrivacyError) as e:
            return StorageResult(success=False, message=str(e))

        storage_obj = {
            'encrypted_data': encrypted_data.model_dump(),
            'metadata': metadata
        }

        file_path = self.base_path / key
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'wb') as f:
                pickle.dump(storage_obj, f)
        except OSError as e:
            logger.error("Failed to write %s: %s", key, e)
            self.privacy_module.log_access(user_id, f"store_{data_type}", datetime.now(), False)
            return StorageResult(success=False, message=f"Storage failed: {e}")

        self._update_index(user_id, data_type, key)
        self.privacy_module.log_access(user_id, f"store_{data_type}", datetime.now(), True)
        logger.debug("Stored %s", key)

        return StorageResult(success=True, message="Data stored successfully", key=key)

    def retrieve(self, key: str, user_key: bytes) -> Optional[bytes]:
        """
        Retrieve and decrypt data.

        Args:
            key: Storage key
            user_key: User's encryption key

        Returns:
            Decrypted data or None if not found or not decryptable
        """
        user_id, data_type = _split_key(key)
        storage_obj = self._load(key)
        if storage_obj is None:
            return None

        try:
            encrypted_data = EncryptedData(**storage_obj['encrypted_data'])
            decrypted_data = self.privacy_module.decrypt_data(encrypted_data, user_key)
        except PrivacyError as e:
            logger.warning("Could not decrypt %s: %s", key, e)
            self.privacy_module.log_access(user_id, f"retrieve_{data_type}", datetime.now(), False)
            return None

        self.privacy_module.log_access(user_id, f"retrieve_{data_type}", datetime.now(), True)
        return decrypted_data

    def query(
        self,
        user_id: str,
        data_type: str,
        filters: dict[str, Any],
        user_key: bytes
    ) -> list[bytes]:
        """
        Query data with filters.

        Args:
            user_id: User identifier
            data_type: Type of data to query
            filters: Optional ``start_date`` / ``end_date`` bounds (inclusive)
                applied to the stored ``timestamp`` metadata
            user_key: User's encryption key

        Returns:
            List of matching decrypted data
        """
        start_date = filters.get('start_date')
        end_date = filters.get('end_date')
        results = []

        for key in self.keys(user_id, data_type):
            if start_date or end_date:
                storage_obj = self._load(key)
                if storage_obj is None:
                    continue
                timestamp = storage_obj['metadata'].get('timestamp')
                if timestamp is None:
                    continue
                timestamp = datetime.fromisoformat(timestamp)
                if start_date and timestamp < start_date:
                    continue
                if end_date and timestamp > end_date:
                    continue

            data = self.retrieve(key, user_key)
            if data is not None:
                results.append(data)

        self.privacy_module.log_access(user_id, f"query_{data_type}", datetime.now(), True)
        return results

    def keys(self, user_id: str, data_type: str) -> list[str]:
        """
        List stored keys for a user's data type without decrypting anything.

        Falls back to scanning the partition directory when the index has no
        entry for it.
        """
        keys = self._index.get(user_id, {}).get(data_type)
        if keys is not None:
            return list(keys)

        search_path = self.base_path / user_id / data_type
        if not search_path.exists():
            return []
        return sorted(
            file_path.relative_to(self.base_path).as_posix()
            for file_path in search_path.iterdir()
            if file_path.is_file()
        )

    def count(self, user_id: str, data_type: str) -> int:
        """Number of stored records for a user's data type."""
        return len(self.keys(user_id, data_type))

    def delete(self, key: str, user_id: str) -> StorageResult:
        """
        Delete data after authorization check.

        Args:
            key: Storage key
            user_id: User requesting deletion

        Returns:
            StorageResult indicating success/failure
        """
        if not self.privacy_module.verify_authorization(user_id, key, "delete"):
            return StorageResult(success=False, message="Unauthorized access")

        file_path = self.base_path / key
        if not file_path.exists():
            return StorageResult(success=False, message="Key not found")

        try:
            file_path.unlink()
        except OSError as e:
            self.privacy_module.log_access(user_id, "delete", datetime.now(), False)
            return StorageResult(success=False, message=f"Deletion failed: {e}")

        owner, data_type = _split_key(key)
        keys = self._index.get(owner, {}).get(data_type, [])
        if key in keys:
            keys.remove(key)
            self._save_index()

        self.privacy_module.log_access(user_id, "delete", datetime.now(), True)
        return StorageResult(success=True, message="Data deleted successfully", key=key)

    def _load(self, key: str) -> Optional[dict[str, Any]]:
        """Read the raw storage object for a key."""
        file_path = self.base_path / key
        if not file_path.exists():
            return None
        try:
            with open(file_path, 'rb') as f:
                return pickle.load(f)
        except (OSError, pickle.UnpicklingError, EOFError) as e:
            logger.warning("Unreadable record %s: %s", key, e)
            return None

    def _update_index(self, user_id: str, data_type: str, key: str) -> None:
        """Update index with new key."""
        keys = self._index.setdefault(user_id, {}).setdefault(data_type, [])
        if key not in keys:
            keys.append(key)
        self._save_index()

    def _save_index(self) -> None:
        """Save index to disk."""
        index_path = self.base_path / INDEX_FILE
        try:
            with open(index_path, 'w', encoding='utf-8') as f:
                json.dump(self._index, f)
        except OSError as e:
            logger.error("Failed to save index: %s", e)

    def _load_index(self) -> None:
        """Load index from disk."""
        index_path = self.base_path / INDEX_FILE
        if not index_path.exists():
            return
        try:
            with open(index_path, 'r', encoding='utf-8') as f:
                self._index = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load index: %s", e)
            self._index = {}
