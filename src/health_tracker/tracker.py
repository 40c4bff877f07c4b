"""
Health Tracker data access.

Records health snapshots and symptoms and serves the read queries the
recommendation core and the dashboard depend on.
"""

import logging
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Optional, Union
from dataclasses import dataclass

from pydantic import ValidationError

from .accounts import AccountError, AccountService
from .bmi import BMICategory, classify
from .config import get_settings
from .data_store import DataStore
from .models import (
    ActivityLevel, HealthDataRequest, HealthGraphPoint, HealthSnapshot,
    Symptom, SymptomFrequency, SymptomHistory, SymptomRequest, SymptomStats,
    SymptomType
)
from .privacy import PrivacyModule

logger = logging.getLogger(__name__)

HEALTH_TYPE = 'health'
SYMPTOM_TYPE = 'symptoms'

GRAPH_PERIODS = {
    'week': 7,
    'month': 30,
    'year': 365,
}


class TrackingError(Exception):
    """Raised when tracked data cannot be read back."""
    pass


@dataclass
class TrackingResult:
    """Result of a tracking operation."""
    success: bool
    message: str = ""
    entry_id: Optional[str] = None
    snapshot: Optional[HealthSnapshot] = None
    bmi_category: Optional[BMICategory] = None
    symptom: Optional[Symptom] = None


def _entry_key(user_id: str, data_type: str, timestamp: datetime, entry_id: str) -> str:
    # Timestamp prefix keeps directory listings in chronological order
    return f"{user_id}/{data_type}/{timestamp.strftime('%Y%m%d_%H%M%S_%f')}_{entry_id}"


class HealthTracker:
    """
    Records and retrieves health snapshots and symptoms.

    Integrates with DataStore for encrypted persistence and validation
    through Pydantic models. All reads return newest first unless stated.
    """

    def __init__(
        self,
        data_store: DataStore = None,
        privacy_module: PrivacyModule = None,
        account_service: Optional[AccountService] = None
    ):
        """
        Initialize health tracker.

        Args:
            data_store: DataStore instance (created if not provided)
            privacy_module: PrivacyModule instance (created if not provided)
            account_service: When given, recording health data also updates
                the user's profile measurements
        """
        self.privacy_module = privacy_module or PrivacyModule()
        self.data_store = data_store or DataStore(privacy_module=self.privacy_module)
        self.account_service = account_service

    # Health snapshots

    def record_health_data(
        self,
        user_id: str,
        request: HealthDataRequest,
        user_key: bytes,
        record_date: datetime = None
    ) -> TrackingResult:
        """
        Record a health snapshot.

        Args:
            user_id: User identifier
            request: Measurements (validated by Pydantic)
            user_key: User's encryption key
            record_date: Optional record time (defaults to now)

        Returns:
            TrackingResult with the stored snapshot and its BMI category
        """
        snapshot = HealthSnapshot(
            user_id=user_id,
            record_date=record_date or datetime.now(),
            **request.model_dump()
        )
        key = _entry_key(user_id, HEALTH_TYPE, snapshot.record_date, snapshot.id)
        metadata = {
            'timestamp': snapshot.record_date.isoformat(),
            'data_type': HEALTH_TYPE,
        }

        result = self.data_store.store(
            key, snapshot.model_dump_json().encode('utf-8'), metadata, user_key
        )
        if not result.success:
            return TrackingResult(success=False, message=result.message)

        logger.info("Recorded health data %s for user %s", snapshot.id, user_id)
        self._update_profile_measurements(user_id, user_key, request)

        return TrackingResult(
            success=True,
            message="Health data saved",
            entry_id=snapshot.id,
            snapshot=snapshot,
            bmi_category=classify(snapshot.bmi)
        )

    def health_history(
        self,
        user_id: str,
        user_key: bytes,
        start_date: datetime = None,
        end_date: datetime = None
    ) -> list[HealthSnapshot]:
        """
        All health snapshots, most recent first.

        Args:
            user_id: User identifier
            user_key: User's encryption key
            start_date: Optional inclusive lower bound on record_date
            end_date: Optional inclusive upper bound on record_date
        """
        snapshots = self._load_entries(
            HealthSnapshot, user_id, HEALTH_TYPE, user_key, start_date, end_date
        )
        snapshots.sort(key=lambda s: s.record_date, reverse=True)
        return snapshots

    def latest_health_snapshot(self, user_id: str, user_key: bytes) -> Optional[HealthSnapshot]:
        """The most recently dated snapshot, or None if nothing is recorded."""
        history = self.health_history(user_id, user_key)
        return history[0] if history else None

    def total_records(self, user_id: str) -> int:
        """Number of recorded health snapshots."""
        return self.data_store.count(user_id, HEALTH_TYPE)

    def weekly_progress(
        self,
        user_id: str,
        user_key: bytes,
        limit: Optional[int] = None
    ) -> list[HealthSnapshot]:
        """The latest ``limit`` snapshots, most recent first."""
        limit = limit or get_settings().weekly_progress_limit
        return self.health_history(user_id, user_key)[:limit]

    def health_graph(
        self,
        user_id: str,
        user_key: bytes,
        period: str = 'week',
        now: datetime = None
    ) -> list[HealthGraphPoint]:
        """
        Chart points for a period, oldest first.

        Args:
            user_id: User identifier
            user_key: User's encryption key
            period: week, month or year; anything else is treated as week
            now: Reference time (defaults to now)

        Returns:
            One point per snapshot recorded within the period
        """
        days = GRAPH_PERIODS.get(period, GRAPH_PERIODS['week'])
        start_date = (now or datetime.now()) - timedelta(days=days)
        snapshots = self.health_history(user_id, user_key, start_date=start_date)
        return [
            HealthGraphPoint(
                date=snapshot.record_date.strftime('%Y-%m-%d'),
                weight=snapshot.weight_kg,
                bmi=snapshot.bmi,
                emotional_state=snapshot.emotional_state
            )
            for snapshot in reversed(snapshots)
        ]

    # Symptoms

    def log_symptom(
        self,
        user_id: str,
        request: SymptomRequest,
        user_key: bytes,
        logged_at: datetime = None
    ) -> TrackingResult:
        """
        Log a single symptom.

        Args:
            user_id: User identifier
            request: Symptom input (validated by Pydantic)
            user_key: User's encryption key
            logged_at: Optional log time (defaults to now)

        Returns:
            TrackingResult with the stored symptom
        """
        symptom = Symptom(
            user_id=user_id,
            logged_at=logged_at or datetime.now(),
            **request.model_dump()
        )
        key = _entry_key(user_id, SYMPTOM_TYPE, symptom.logged_at, symptom.id)
        metadata = {
            'timestamp': symptom.logged_at.isoformat(),
            'data_type': SYMPTOM_TYPE,
            'symptom_type': symptom.symptom_type.value,
        }

        result = self.data_store.store(
            key, symptom.model_dump_json().encode('utf-8'), metadata, user_key
        )
        if not result.success:
            return TrackingResult(success=False, message=result.message)

        logger.info("Logged symptom %r for user %s", symptom.symptom_name, user_id)
        return TrackingResult(
            success=True,
            message="Symptom logged",
            entry_id=symptom.id,
            symptom=symptom
        )

    def log_symptoms(
        self,
        user_id: str,
        requests: Iterable[SymptomRequest],
        user_key: bytes,
        logged_at: datetime = None
    ) -> list[TrackingResult]:
        """Log several symptoms under one shared timestamp."""
        logged_at = logged_at or datetime.now()
        return [
            self.log_symptom(user_id, request, user_key, logged_at=logged_at)
            for request in requests
        ]

    def recent_symptoms(
        self,
        user_id: str,
        user_key: bytes,
        limit: Optional[int] = None,
        symptom_type: Union[SymptomType, str, None] = None,
        since: datetime = None
    ) -> list[Symptom]:
        """
        Logged symptoms, most recent first.

        Args:
            user_id: User identifier
            user_key: User's encryption key
            limit: Maximum number returned (None for all)
            symptom_type: Only return this type
            since: Only return symptoms logged strictly after this time
        """
        symptoms = self._load_entries(Symptom, user_id, SYMPTOM_TYPE, user_key, since)
        if since is not None:
            symptoms = [s for s in symptoms if s.logged_at > since]
        if symptom_type is not None:
            symptom_type = SymptomType(symptom_type)
            symptoms = [s for s in symptoms if s.symptom_type == symptom_type]
        symptoms.sort(key=lambda s: s.logged_at, reverse=True)
        if limit is not None:
            symptoms = symptoms[:limit]
        return symptoms

    def symptom_history(
        self,
        user_id: str,
        user_key: bytes,
        limit: Optional[int] = None
    ) -> SymptomHistory:
        """The latest symptoms plus the same list grouped by day."""
        limit = limit or get_settings().symptom_history_limit
        symptoms = self.recent_symptoms(user_id, user_key, limit=limit)

        grouped: dict[str, list[Symptom]] = defaultdict(list)
        for symptom in symptoms:
            grouped[symptom.logged_at.strftime('%Y-%m-%d')].append(symptom)

        return SymptomHistory(symptoms=symptoms, grouped=dict(grouped))

    def symptom_stats(self, user_id: str, user_key: bytes, now: datetime = None) -> SymptomStats:
        """
        Frequency and severity statistics over all logged symptoms.

        Returns:
            Top five symptom names by count, the number logged in the last
            seven days and the average severity (0 when nothing is logged)
        """
        symptoms = self.recent_symptoms(user_id, user_key)
        if not symptoms:
            return SymptomStats()

        week_ago = (now or datetime.now()) - timedelta(days=7)
        counts = Counter(s.symptom_name for s in symptoms)

        return SymptomStats(
            frequent_symptoms=[
                SymptomFrequency(symptom_name=name, count=count)
                for name, count in counts.most_common(5)
            ],
            symptoms_this_week=sum(1 for s in symptoms if s.logged_at > week_ago),
            average_severity=sum(s.severity for s in symptoms) / len(symptoms)
        )

    def _load_entries(
        self,
        model,
        user_id: str,
        data_type: str,
        user_key: bytes,
        start_date: datetime = None,
        end_date: datetime = None
    ) -> list:
        filters = {}
        if start_date:
            filters['start_date'] = start_date
        if end_date:
            filters['end_date'] = end_date

        entries = []
        for raw in self.data_store.query(user_id, data_type, filters, user_key):
            try:
                entries.append(model.model_validate_json(raw))
            except ValidationError as e:
                raise TrackingError(f"Corrupt {data_type} record for user {user_id}") from e
        return entries

    def _update_profile_measurements(
        self,
        user_id: str,
        user_key: bytes,
        request: HealthDataRequest
    ) -> None:
        if self.account_service is None:
            return

        changes = {'weight_kg': request.weight_kg, 'height_cm': request.height_cm}
        if request.activity_level != ActivityLevel.UNSPECIFIED:
            changes['activity_level'] = request.activity_level
        try:
            self.account_service.update_profile(user_id, user_key, **changes)
        except AccountError as e:
            logger.warning("Profile of user %s not updated: %s", user_id, e)
