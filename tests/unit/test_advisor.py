"""
Unit tests for Health Advisor.

Tests that stored data flows through the recommendation core with the
configured recency caps, and the dashboard aggregate.
"""

from datetime import datetime, timedelta

import pytest

from health_tracker.advisor import HealthAdvisor, quick_recommendations
from health_tracker.bmi import BMICategory
from health_tracker.config import Settings
from health_tracker.models import (
    EmotionalState, HealthDataRequest, HealthSnapshot,
    Symptom, SymptomRequest, SymptomType
)
from health_tracker.tracker import HealthTracker


NOW = datetime(2024, 6, 15, 12, 0, 0)


def record(tracker, user_key, weight_kg=65.0, when=NOW - timedelta(hours=1), **fields):
    request = HealthDataRequest(weight_kg=weight_kg, height_cm=170, **fields)
    return tracker.record_health_data("u1", request, user_key, record_date=when)


def log(tracker, user_key, name, symptom_type=SymptomType.PHYSICAL, when=NOW - timedelta(hours=1)):
    request = SymptomRequest(symptom_type=symptom_type, symptom_name=name, severity=5)
    return tracker.log_symptom("u1", request, user_key, logged_at=when)


@pytest.fixture
def advisor(tracker):
    return HealthAdvisor(tracker=tracker, settings=Settings())


class TestRecommendationQueries:
    """Test suite for the per-axis queries."""

    def test_no_data_uses_empty_snapshot(self, advisor, user_key):
        food = advisor.food_recommendations("u1", user_key)
        assert [r.category for r in food] == ["weight_gain"]

    def test_food_uses_latest_snapshot_and_symptoms(self, advisor, tracker, user_key):
        record(tracker, user_key, 50, when=NOW - timedelta(days=2))
        record(tracker, user_key, 80, when=NOW - timedelta(days=1))
        log(tracker, user_key, "Diabetes")

        food = advisor.food_recommendations("u1", user_key)

        assert [r.category for r in food] == ["weight_loss", "diabetes"]

    def test_recommendation_symptom_cap(self, tracker, user_key):
        advisor = HealthAdvisor(tracker=tracker, settings=Settings(recommendation_symptom_limit=1))
        record(tracker, user_key)
        log(tracker, user_key, "Demam", when=NOW - timedelta(hours=2))
        log(tracker, user_key, "Diare", when=NOW - timedelta(hours=1))

        food = advisor.food_recommendations("u1", user_key)

        assert [r.category for r in food] == ["maintenance", "diarrhea"]

    def test_exercise_falls_back_to_profile(self, data_store, privacy_module, accounts):
        accounts.register("ani@example.com", "rahasia123", "Ani")
        session = accounts.authenticate("ani@example.com", "rahasia123")
        tracker = HealthTracker(data_store, privacy_module, account_service=accounts)
        advisor = HealthAdvisor(tracker=tracker, account_service=accounts, settings=Settings())
        tracker.record_health_data(
            session.user_id, HealthDataRequest(weight_kg=65, height_cm=170), session.user_key
        )

        exercise = advisor.exercise_recommendations(session.user_id, session.user_key)

        # Profile default is sedentary
        assert [r.category for r in exercise] == ["beginner"]

    def test_exercise_without_profile(self, advisor, tracker, user_key):
        record(tracker, user_key)
        assert advisor.exercise_recommendations("u1", user_key) == []

    def test_emotional_only_sees_mental_symptoms(self, advisor, tracker, user_key):
        record(tracker, user_key, emotional_state=EmotionalState.HAPPY)
        log(tracker, user_key, "Stres", SymptomType.PHYSICAL)
        log(tracker, user_key, "Burnout", SymptomType.MENTAL)

        emotional = advisor.emotional_recommendations("u1", user_key)

        assert [r.emotional_state for r in emotional] == ["happy", "burnout"]

    def test_emotional_symptom_cap(self, advisor, tracker, user_key):
        record(tracker, user_key)
        log(tracker, user_key, "Kesepian Sosial", SymptomType.MENTAL, when=NOW - timedelta(days=1))
        for minute in range(5):
            log(tracker, user_key, "Stres", SymptomType.MENTAL, when=NOW - timedelta(minutes=minute))

        emotional = advisor.emotional_recommendations("u1", user_key)

        assert [r.emotional_state for r in emotional] == ["stress"]

    def test_daily_menu(self, advisor, tracker, user_key):
        record(tracker, user_key, 50)
        log(tracker, user_key, "Demam")

        menu = advisor.daily_menu("u1", user_key)

        assert menu.total_calories == "~1200 kkal"
        assert len(menu.snacks) == 2


class TestDashboard:
    """Test suite for the dashboard aggregate."""

    def test_empty_dashboard(self, advisor, user_key):
        dashboard = advisor.dashboard("u1", user_key, now=NOW)

        assert dashboard.latest_health is None
        assert dashboard.bmi_category == BMICategory.UNDERWEIGHT
        assert dashboard.health_score == 85
        assert dashboard.total_records == 0
        assert dashboard.weekly_progress == []
        assert [r.title for r in dashboard.recommendations] == ["Perhatikan BMI Anda"]

    def test_dashboard(self, advisor, tracker, user_key):
        record(tracker, user_key, 80, emotional_state=EmotionalState.STRESSED)
        log(tracker, user_key, "Demam", when=NOW - timedelta(days=10))
        for name in ("Flu", "Pilek", "Batuk", "Pusing"):
            log(tracker, user_key, name)

        dashboard = advisor.dashboard("u1", user_key, now=NOW)

        assert dashboard.latest_health.weight_kg == 80
        assert dashboard.bmi_category == BMICategory.OVERWEIGHT
        assert len(dashboard.recent_symptoms) == 4
        assert dashboard.health_score == 100 - 10 - 20 - 10
        assert dashboard.total_records == 1
        assert [r.title for r in dashboard.recommendations] == [
            "Perhatikan BMI Anda", "Kelola Stres Anda", "Banyak Gejala Terdeteksi"
        ]
        assert advisor.health_score("u1", user_key, now=NOW) == dashboard.health_score


class TestQuickRecommendations:
    """Test suite for quick_recommendations."""

    def test_normal_calm_few_symptoms(self):
        snapshot = HealthSnapshot(weight_kg=65, height_cm=170, emotional_state=EmotionalState.HAPPY)
        symptoms = [Symptom(symptom_type=SymptomType.PHYSICAL, symptom_name="Flu", severity=3)] * 3
        assert quick_recommendations(snapshot, symptoms) == []

    def test_priorities(self):
        snapshot = HealthSnapshot(weight_kg=95, height_cm=170, emotional_state=EmotionalState.ANXIOUS)
        symptoms = [Symptom(symptom_type=SymptomType.PHYSICAL, symptom_name="Flu", severity=3)] * 4

        items = quick_recommendations(snapshot, symptoms)

        assert [i.priority for i in items] == ["high", "medium", "high"]
        assert "Obese" in items[0].description
