"""
Account management for Health Tracker.

Registration, login and profile storage. Credentials live in a small
registry file keyed by email; the profile itself is stored encrypted with a
key derived from the user's password.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from .config import get_settings
from .data_store import DataStore
from .models import ActivityLevel, UserProfile
from .privacy import AuthResult, PrivacyModule

logger = logging.getLogger(__name__)

REGISTRY_FILE = '_accounts.json'
PROFILE_TYPE = 'profile'


class AccountError(Exception):
    """Raised when an account operation cannot be completed."""
    pass


@dataclass
class RegistrationResult:
    """Result of a registration attempt."""
    success: bool
    message: str = ""
    profile: Optional[UserProfile] = None


class AccountService:
    """
    Registers users and manages their profiles.

    A successful ``authenticate`` returns the user's encryption key in the
    AuthResult; every other data access needs that key.
    """

    def __init__(
        self,
        data_store: DataStore = None,
        privacy_module: PrivacyModule = None,
        min_password_length: Optional[int] = None,
    ):
        """
        Initialize account service.

        Args:
            data_store: DataStore instance (created if not provided)
            privacy_module: PrivacyModule instance (created if not provided)
            min_password_length: Shortest accepted password
        """
        self.privacy_module = privacy_module or PrivacyModule()
        self.data_store = data_store or DataStore(privacy_module=self.privacy_module)
        self.min_password_length = min_password_length or get_settings().min_password_length
        self._registry_path = self.data_store.base_path / REGISTRY_FILE
        self._registry: dict[str, dict[str, str]] = self._load_registry()

    def register(
        self,
        email: str,
        password: str,
        name: str,
        **profile_fields
    ) -> RegistrationResult:
        """
        Create an account.

        Args:
            email: Login email (case-insensitive)
            password: Plain password
            name: Display name
            **profile_fields: Optional UserProfile fields (height_cm, ...)

        Returns:
            RegistrationResult with the stored profile on success
        """
        if len(password) < self.min_password_length:
            return RegistrationResult(
                success=False,
                message=f"Password must be at least {self.min_password_length} characters"
            )

        try:
            profile = UserProfile(email=email, name=name, **profile_fields)
        except ValidationError as e:
            return RegistrationResult(success=False, message=f"Invalid profile: {e}")

        if profile.email in self._registry:
            return RegistrationResult(success=False, message="Email already registered")

        user_key, salt = self.privacy_module.derive_key_from_password(password)
        if not self._save_profile(profile, user_key):
            return RegistrationResult(success=False, message="Failed to store profile")

        self._registry[profile.email] = {
            'user_id': profile.id,
            'password_hash': self.privacy_module.hash_password(password).decode('utf-8'),
            'key_salt': salt.hex(),
        }
        self._save_registry()
        logger.info("Registered user %s", profile.id)

        return RegistrationResult(success=True, message="Registration successful", profile=profile)

    def authenticate(self, email: str, password: str) -> AuthResult:
        """
        Log a user in.

        Args:
            email: Login email
            password: Plain password

        Returns:
            AuthResult carrying the session token and the user's key
        """
        email = email.lower()
        account = self._registry.get(email)
        if account is None:
            self.privacy_module.log_access(email, "authentication", datetime.now(), False)
            return AuthResult(success=False, message="Invalid credentials")

        result = self.privacy_module.authenticate_user(
            email,
            password,
            account['password_hash'].encode('utf-8'),
            user_id=account['user_id']
        )
        if result.success:
            result.user_key, _ = self.privacy_module.derive_key_from_password(
                password, bytes.fromhex(account['key_salt'])
            )
        return result

    def get_profile(self, user_id: str, user_key: bytes) -> Optional[UserProfile]:
        """
        Load a user's profile.

        Returns:
            The profile, or None when missing or not decryptable with the key
        """
        data = self.data_store.retrieve(self._profile_key(user_id), user_key)
        if data is None:
            return None
        return UserProfile.model_validate_json(data)

    def update_profile(self, user_id: str, user_key: bytes, **changes) -> UserProfile:
        """
        Update profile fields.

        Args:
            user_id: User identifier
            user_key: User's encryption key
            **changes: Fields to change; ``id``, ``email`` and ``created_at``
                cannot be changed

        Returns:
            The updated profile

        Raises:
            AccountError: If the profile does not exist or cannot be saved
            ValidationError: If a changed field is invalid
        """
        profile = self.get_profile(user_id, user_key)
        if profile is None:
            raise AccountError(f"Profile not found for user {user_id}")

        for field in ('id', 'email', 'created_at'):
            changes.pop(field, None)

        data = profile.model_dump()
        data.update(changes)
        data['updated_at'] = datetime.now()
        updated = UserProfile.model_validate(data)

        if not self._save_profile(updated, user_key):
            raise AccountError(f"Failed to save profile for user {user_id}")
        return updated

    def default_activity_level(self, user_id: str, user_key: bytes) -> ActivityLevel:
        """Profile activity level, or unspecified when there is no profile."""
        profile = self.get_profile(user_id, user_key)
        if profile is None:
            return ActivityLevel.UNSPECIFIED
        return profile.activity_level

    def _profile_key(self, user_id: str) -> str:
        return f"{user_id}/{PROFILE_TYPE}/current"

    def _save_profile(self, profile: UserProfile, user_key: bytes) -> bool:
        metadata = {
            'timestamp': profile.updated_at.isoformat(),
            'data_type': PROFILE_TYPE,
        }
        result = self.data_store.store(
            self._profile_key(profile.id),
            profile.model_dump_json().encode('utf-8'),
            metadata,
            user_key
        )
        if not result.success:
            logger.error("Failed to store profile %s: %s", profile.id, result.message)
        return result.success

    def _load_registry(self) -> dict[str, dict[str, str]]:
        if not self._registry_path.exists():
            return {}
        try:
            with open(self._registry_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise AccountError(f"Account registry is unreadable: {e}") from e

    def _save_registry(self) -> None:
        try:
            with open(self._registry_path, 'w', encoding='utf-8') as f:
                json.dump(self._registry, f)
        except OSError as e:
            raise AccountError(f"Failed to save account registry: {e}") from e
