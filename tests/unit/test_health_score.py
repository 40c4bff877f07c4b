"""
Unit tests for the health score.
"""

import pytest

from health_tracker.health_score import calculate_health_score
from health_tracker.models import EmotionalState, HealthSnapshot


def make_snapshot(weight_kg: float, emotional_state=EmotionalState.UNSPECIFIED) -> HealthSnapshot:
    return HealthSnapshot(weight_kg=weight_kg, height_cm=170, emotional_state=emotional_state)


class TestHealthScore:
    """Test suite for calculate_health_score."""

    def test_empty_snapshot(self):
        """BMI 0 classifies as Underweight."""
        assert calculate_health_score(HealthSnapshot(), 0) == 85

    def test_perfect_score(self):
        assert calculate_health_score(make_snapshot(65), 0) == 100

    @pytest.mark.parametrize("weight, expected", [
        (50, 85),   # Underweight
        (65, 100),  # Normal
        (80, 90),   # Overweight
        (95, 75),   # Obese
    ])
    def test_bmi_penalty(self, weight, expected):
        assert calculate_health_score(make_snapshot(weight), 0) == expected

    @pytest.mark.parametrize("state, expected", [
        (EmotionalState.STRESSED, 90),
        (EmotionalState.ANXIOUS, 90),
        (EmotionalState.SAD, 85),
        (EmotionalState.HAPPY, 100),
        (EmotionalState.NEUTRAL, 100),
    ])
    def test_emotional_penalty(self, state, expected):
        assert calculate_health_score(make_snapshot(65, state), 0) == expected

    def test_symptom_penalty(self):
        assert calculate_health_score(make_snapshot(65), 3) == 85

    def test_combined(self):
        snapshot = make_snapshot(95, EmotionalState.SAD)
        assert calculate_health_score(snapshot, 4) == 100 - 25 - 20 - 15

    def test_clamped_at_zero(self):
        snapshot = make_snapshot(95, EmotionalState.SAD)
        assert calculate_health_score(snapshot, 50) == 0

    def test_always_in_range(self):
        for weight in (0, 50, 65, 80, 95):
            for state in EmotionalState:
                for count in range(0, 25):
                    score = calculate_health_score(make_snapshot(weight, state), count)
                    assert 0 <= score <= 100
