"""
Health score calculation.

The score starts at 100 and loses points for BMI outside the normal band,
for each recent symptom and for a negative emotional state.
"""

from .bmi import BMICategory, classify
from .models import EmotionalState, HealthSnapshot

MAX_SCORE = 100
SYMPTOM_PENALTY = 5

BMI_PENALTIES = {
    BMICategory.UNDERWEIGHT: 15,
    BMICategory.NORMAL: 0,
    BMICategory.OVERWEIGHT: 10,
    BMICategory.OBESE: 25,
}

EMOTIONAL_PENALTIES = {
    EmotionalState.STRESSED: 10,
    EmotionalState.ANXIOUS: 10,
    EmotionalState.SAD: 15,
}


def calculate_health_score(snapshot: HealthSnapshot, symptom_count: int) -> int:
    """
    Score a snapshot together with the number of recent symptoms.

    Args:
        snapshot: Health snapshot (zero-valued when none exists)
        symptom_count: Number of symptoms logged in the scoring window

    Returns:
        Integer score in [0, 100]
    """
    score = MAX_SCORE
    score -= BMI_PENALTIES[classify(snapshot.bmi)]
    score -= SYMPTOM_PENALTY * max(symptom_count, 0)
    score -= EMOTIONAL_PENALTIES.get(snapshot.emotional_state, 0)
    return max(score, 0)
