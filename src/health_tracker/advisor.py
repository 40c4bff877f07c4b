"""
Health Advisor service.

Fetches a user's latest snapshot and recent symptoms through the tracker and
runs the recommendation core over them. This is the only layer that combines
storage access with the pure rule evaluation.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from .accounts import AccountService
from .bmi import BMICategory, classify
from .config import Settings, get_settings
from .health_score import calculate_health_score
from .menu_composer import DailyMenuComposer
from .models import (
    ActivityLevel, DailyMenu, DashboardData, EmotionalRecommendation,
    EmotionalState, ExerciseRecommendation, FoodRecommendation,
    HealthSnapshot, RecommendationItem, Symptom, SymptomType
)
from .recommendation_engine import RecommendationEngine
from .symptoms import build_presence_set
from .tracker import HealthTracker

logger = logging.getLogger(__name__)

# More recent symptoms than this triggers the doctor visit hint
MANY_SYMPTOMS_THRESHOLD = 3


def quick_recommendations(
    snapshot: HealthSnapshot,
    symptoms: list[Symptom]
) -> list[RecommendationItem]:
    """
    Short dashboard hints.

    Args:
        snapshot: Latest snapshot (zero-valued when none exists)
        symptoms: Symptoms of the dashboard window

    Returns:
        BMI hint, stress hint and many-symptoms hint, in that order, each
        only when it applies
    """
    recommendations = []

    bmi_category = classify(snapshot.bmi)
    if bmi_category != BMICategory.NORMAL:
        recommendations.append(RecommendationItem(
            type="health",
            title="Perhatikan BMI Anda",
            description=(
                f"BMI Anda termasuk {bmi_category.value}. "
                "Pertimbangkan untuk menyesuaikan pola makan dan olahraga."
            ),
            priority="high"
        ))

    if snapshot.emotional_state in (EmotionalState.STRESSED, EmotionalState.ANXIOUS):
        recommendations.append(RecommendationItem(
            type="emotional",
            title="Kelola Stres Anda",
            description="Coba teknik relaksasi seperti meditasi atau pernapasan dalam.",
            priority="medium"
        ))

    if len(symptoms) > MANY_SYMPTOMS_THRESHOLD:
        recommendations.append(RecommendationItem(
            type="health",
            title="Banyak Gejala Terdeteksi",
            description="Anda memiliki beberapa gejala. Pertimbangkan untuk berkonsultasi dengan dokter.",
            priority="high"
        ))

    return recommendations


class HealthAdvisor:
    """
    Per-user entry point to recommendations, the daily menu and the dashboard.

    Users without any health record are served from a zero-valued snapshot,
    which classifies as Underweight.
    """

    def __init__(
        self,
        tracker: HealthTracker = None,
        account_service: Optional[AccountService] = None,
        engine: RecommendationEngine = None,
        composer: DailyMenuComposer = None,
        settings: Settings = None
    ):
        """
        Initialize health advisor.

        Args:
            tracker: HealthTracker instance (created if not provided)
            account_service: Source of the profile activity level fallback
            engine: RecommendationEngine instance
            composer: DailyMenuComposer instance
            settings: Recency caps and dashboard window
        """
        self.tracker = tracker or HealthTracker()
        self.account_service = account_service
        self.engine = engine or RecommendationEngine()
        self.composer = composer or DailyMenuComposer()
        self.settings = settings or get_settings()

    def food_recommendations(self, user_id: str, user_key: bytes) -> list[FoodRecommendation]:
        snapshot, presence = self._inputs(user_id, user_key)
        return self.engine.generate_food_recommendations(snapshot, presence)

    def exercise_recommendations(self, user_id: str, user_key: bytes) -> list[ExerciseRecommendation]:
        snapshot, presence = self._inputs(user_id, user_key)
        default_activity_level = ActivityLevel.UNSPECIFIED
        if self.account_service is not None:
            default_activity_level = self.account_service.default_activity_level(user_id, user_key)
        return self.engine.generate_exercise_recommendations(
            snapshot, presence, default_activity_level
        )

    def emotional_recommendations(self, user_id: str, user_key: bytes) -> list[EmotionalRecommendation]:
        """Emotional advice, considering only the latest mental symptoms."""
        snapshot, presence = self._inputs(
            user_id,
            user_key,
            limit=self.settings.emotional_symptom_limit,
            symptom_type=SymptomType.MENTAL
        )
        return self.engine.generate_emotional_recommendations(snapshot, presence)

    def daily_menu(self, user_id: str, user_key: bytes) -> DailyMenu:
        snapshot, presence = self._inputs(user_id, user_key)
        return self.composer.compose_menu(snapshot, presence)

    def health_score(self, user_id: str, user_key: bytes, now: datetime = None) -> int:
        """Score over the latest snapshot and the dashboard window's symptoms."""
        snapshot = self._snapshot(user_id, user_key)
        symptoms = self._window_symptoms(user_id, user_key, now)
        return calculate_health_score(snapshot, len(symptoms))

    def dashboard(self, user_id: str, user_key: bytes, now: datetime = None) -> DashboardData:
        """
        Dashboard summary.

        Args:
            user_id: User identifier
            user_key: User's encryption key
            now: Reference time for the symptom window (defaults to now)

        Returns:
            DashboardData; ``latest_health`` is None when nothing is recorded
        """
        latest = self.tracker.latest_health_snapshot(user_id, user_key)
        snapshot = latest or HealthSnapshot(user_id=user_id)
        symptoms = self._window_symptoms(user_id, user_key, now)

        return DashboardData(
            latest_health=latest,
            bmi_category=classify(snapshot.bmi),
            health_score=calculate_health_score(snapshot, len(symptoms)),
            total_records=self.tracker.total_records(user_id),
            recent_symptoms=symptoms,
            weekly_progress=self.tracker.weekly_progress(
                user_id, user_key, self.settings.weekly_progress_limit
            ),
            recommendations=quick_recommendations(snapshot, symptoms)
        )

    def _snapshot(self, user_id: str, user_key: bytes) -> HealthSnapshot:
        latest = self.tracker.latest_health_snapshot(user_id, user_key)
        if latest is None:
            logger.debug("No health data for user %s, using empty snapshot", user_id)
            return HealthSnapshot(user_id=user_id)
        return latest

    def _inputs(
        self,
        user_id: str,
        user_key: bytes,
        limit: Optional[int] = None,
        symptom_type: Optional[SymptomType] = None
    ) -> tuple[HealthSnapshot, frozenset]:
        snapshot = self._snapshot(user_id, user_key)
        symptoms = self.tracker.recent_symptoms(
            user_id,
            user_key,
            limit=limit or self.settings.recommendation_symptom_limit,
            symptom_type=symptom_type
        )
        return snapshot, build_presence_set(symptoms)

    def _window_symptoms(self, user_id: str, user_key: bytes, now: datetime = None) -> list[Symptom]:
        since = (now or datetime.now()) - timedelta(days=self.settings.dashboard_symptom_days)
        return self.tracker.recent_symptoms(user_id, user_key, since=since)
