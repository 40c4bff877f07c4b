"""
Configuration for Health Tracker.

Values are read from the environment (prefix ``HEALTH_TRACKER_``) or an
optional ``.env`` file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings with defaults matching the hosted service."""

    # Storage
    data_dir: str = "data/store"
    audit_log_path: str = "data/audit.log"

    # Recency caps for the recommendation queries
    recommendation_symptom_limit: int = 10
    emotional_symptom_limit: int = 5

    # Dashboard
    dashboard_symptom_days: int = 7
    weekly_progress_limit: int = 7
    symptom_history_limit: int = 50

    # Accounts
    min_password_length: int = 6
    max_failed_logins: int = 5
    lockout_minutes: int = 15
    session_minutes: int = 30

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="HEALTH_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
