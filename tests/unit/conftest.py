"""
Shared fixtures for storage-backed tests.
"""

import os

import pytest

from health_tracker.accounts import AccountService
from health_tracker.data_store import DataStore
from health_tracker.privacy import PrivacyModule
from health_tracker.tracker import HealthTracker


@pytest.fixture
def privacy_module(tmp_path):
    return PrivacyModule(audit_log_path=str(tmp_path / "audit.log"))


@pytest.fixture
def data_store(tmp_path, privacy_module):
    return DataStore(base_path=str(tmp_path / "store"), privacy_module=privacy_module)


@pytest.fixture
def user_key():
    return os.urandom(32)


@pytest.fixture
def accounts(data_store, privacy_module):
    return AccountService(data_store=data_store, privacy_module=privacy_module)


@pytest.fixture
def tracker(data_store, privacy_module):
    return HealthTracker(data_store=data_store, privacy_module=privacy_module)
