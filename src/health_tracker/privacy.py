"""
Privacy Module for Health Tracker.

Provides encryption of stored health records, password authentication with
session tokens, owner-only access control and an append-only audit log.
"""

import logging
import os
import secrets
from datetime import datetime, timedelta
from typing import Optional
from dataclasses import dataclass

import bcrypt
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives import hashes

from .config import get_settings
from .models import EncryptedData

logger = logging.getLogger(__name__)

KEY_LENGTH = 32
IV_LENGTH = 12
TAG_LENGTH = 16
PBKDF2_ITERATIONS = 100000


class PrivacyError(Exception):
    """Raised when privacy operations fail."""
    pass


@dataclass
class AuthResult:
    """Authentication result with session token."""
    success: bool
    user_id: Optional[str] = None
    session_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    message: str = ""
    user_key: Optional[bytes] = None


class PrivacyModule:
    """
    Handles encryption, authentication, and access control.

    Implements AES-256-GCM encryption, PBKDF2 key derivation, bcrypt
    password hashing and audit logging of every data access.
    """

    def __init__(
        self,
        audit_log_path: Optional[str] = None,
        max_failed_logins: Optional[int] = None,
        lockout_minutes: Optional[int] = None,
        session_minutes: Optional[int] = None,
    ):
        """
        Initialize privacy module.

        Args:
            audit_log_path: Path to audit log file
            max_failed_logins: Failed attempts that lock an account
            lockout_minutes: Window in which failed attempts are counted
            session_minutes: Session token lifetime
        """
        settings = get_settings()
        self.audit_log_path = audit_log_path or settings.audit_log_path
        self.max_failed_logins = max_failed_logins or settings.max_failed_logins
        self.lockout_minutes = lockout_minutes or settings.lockout_minutes
        self.session_minutes = session_minutes or settings.session_minutes
        self._sessions: dict[str, tuple[str, datetime]] = {}  # token -> (user_id, expires_at)
        self._failed_attempts: dict[str, list[datetime]] = {}  # username -> [attempt_times]

        log_dir = os.path.dirname(self.audit_log_path)
        os.makedirs(log_dir or ".", exist_ok=True)

    def encrypt_data(self, plaintext: bytes, user_key: bytes) -> EncryptedData:
        """
        Encrypt data using AES-256-GCM.

        Args:
            plaintext: Data to encrypt
            user_key: 32-byte encryption key

        Returns:
            EncryptedData with ciphertext, IV, and auth tag

        Raises:
            PrivacyError: If the key has the wrong length
        """
        if len(user_key) != KEY_LENGTH:
            raise PrivacyError("User key must be 32 bytes for AES-256")

        iv = os.urandom(IV_LENGTH)
        ciphertext_with_tag = AESGCM(user_key).encrypt(iv, plaintext, None)

        # AESGCM appends the tag to the ciphertext
        return EncryptedData(
            ciphertext=ciphertext_with_tag[:-TAG_LENGTH],
            iv=iv,
            auth_tag=ciphertext_with_tag[-TAG_LENGTH:],
            algorithm="AES-256-GCM"
        )

    def decrypt_data(self, encrypted_data: EncryptedData, user_key: bytes) -> bytes:
        """
        Decrypt data using AES-256-GCM.

        Args:
            encrypted_data: EncryptedData to decrypt
            user_key: 32-byte encryption key

        Returns:
            Decrypted plaintext

        Raises:
            PrivacyError: If the key is invalid or authentication fails
        """
        if len(user_key) != KEY_LENGTH:
            raise PrivacyError("User key must be 32 bytes for AES-256")

        try:
            return AESGCM(user_key).decrypt(
                encrypted_data.iv,
                encrypted_data.ciphertext + encrypted_data.auth_tag,
                None
            )
        except InvalidTag as e:
            raise PrivacyError("Decryption failed: authentication tag mismatch") from e

    def derive_key_from_password(self, password: str, salt: bytes = None) -> tuple[bytes, bytes]:
        """
        Derive encryption key from password using PBKDF2.

        Args:
            password: User password
            salt: Optional salt (generated if not provided)

        Returns:
            Tuple of (derived_key, salt)
        """
        if salt is None:
            salt = os.urandom(16)

        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=KEY_LENGTH,
            salt=salt,
            iterations=PBKDF2_ITERATIONS,
        )

        key = kdf.derive(password.encode('utf-8'))
        return key, salt

    def hash_password(self, password: str) -> bytes:
        """
        Hash password using bcrypt.

        Args:
            password: Password to hash

        Returns:
            Bcrypt password hash
        """
        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())

    def authenticate_user(
        self,
        username: str,
        password: str,
        stored_hash: bytes,
        user_id: Optional[str] = None
    ) -> AuthResult:
        """
        Authenticate user with bcrypt password verification.

        Args:
            username: Login name (email); failed attempts are counted per name
            password: Password to verify
            stored_hash: Stored bcrypt password hash
            user_id: Account id placed in the session (defaults to username)

        Returns:
            AuthResult with session token if successful
        """
        user_id = user_id or username

        if self._is_rate_limited(username):
            logger.warning("Login rejected for %s: too many failed attempts", username)
            self.log_access(user_id, "authentication", datetime.now(), False)
            return AuthResult(
                success=False,
                message="Too many failed attempts. Please try again later."
            )

        try:
            valid = bcrypt.checkpw(password.encode('utf-8'), stored_hash)
        except ValueError as e:
            logger.warning("Stored password hash for %s is unusable: %s", username, e)
            valid = False

        if not valid:
            self._record_failed_attempt(username)
            self.log_access(user_id, "authentication", datetime.now(), False)
            return AuthResult(success=False, message="Invalid credentials")

        session_token = secrets.token_urlsafe(32)
        expires_at = datetime.now() + timedelta(minutes=self.session_minutes)
        self._sessions[session_token] = (user_id, expires_at)
        self._failed_attempts.pop(username, None)
        self.log_access(user_id, "authentication", datetime.now(), True)

        return AuthResult(
            success=True,
            user_id=user_id,
            session_token=session_token,
            expires_at=expires_at,
            message="Authentication successful"
        )

    def verify_session(self, session_token: str) -> Optional[str]:
        """
        Verify session token and return user_id if valid.

        Args:
            session_token: Session token to verify

        Returns:
            user_id if session is valid, None otherwise
        """
        if session_token not in self._sessions:
            return None

        user_id, expires_at = self._sessions[session_token]

        if datetime.now() > expires_at:
            del self._sessions[session_token]
            return None

        return user_id

    def end_session(self, session_token: str) -> None:
        """Invalidate a session token."""
        self._sessions.pop(session_token, None)

    def log_access(
        self,
        user_id: str,
        operation: str,
        timestamp: datetime,
        success: bool
    ) -> None:
        """
        Append an entry to the audit trail.

        Args:
            user_id: User identifier
            operation: Operation type
            timestamp: Operation timestamp
            success: Whether operation succeeded
        """
        log_entry = (
            f"{timestamp.isoformat()} | "
            f"USER: {user_id} | "
            f"OPERATION: {operation} | "
            f"SUCCESS: {success}\n"
        )

        try:
            with open(self.audit_log_path, 'a', encoding='utf-8') as f:
                f.write(log_entry)
        except OSError as e:
            logger.error("Failed to write audit log: %s", e)

    def verify_authorization(
        self,
        user_id: str,
        resource: str,
        operation: str
    ) -> bool:
        """
        Verify user authorization for resource access.

        Args:
            user_id: User identifier
            resource: Resource key (``user_id/data_type/...``)
            operation: Operation type (read, write, delete)

        Returns:
            True if authorized, False otherwise
        """
        # Users can only access their own partition
        if resource.startswith(f"{user_id}/"):
            return True

        logger.warning("User %s denied %s on %s", user_id, operation, resource)
        self.log_access(user_id, f"unauthorized_{operation}_{resource}", datetime.now(), False)
        return False

    def _is_rate_limited(self, username: str) -> bool:
        """Check if user is rate limited due to failed attempts."""
        if username not in self._failed_attempts:
            return False

        cutoff = datetime.now() - timedelta(minutes=self.lockout_minutes)
        self._failed_attempts[username] = [
            t for t in self._failed_attempts[username] if t > cutoff
        ]

        return len(self._failed_attempts[username]) >= self.max_failed_logins

    def _record_failed_attempt(self, username: str) -> None:
        """Record a failed authentication attempt."""
        self._failed_attempts.setdefault(username, []).append(datetime.now())
