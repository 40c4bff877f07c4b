"""
Recommendation Engine for Health Tracker.

Evaluates the food, exercise and emotional rule catalogs against a health
snapshot and a symptom presence set. The engine is pure: it receives
already-fetched data and never touches storage.
"""

import logging
from typing import Union

from . import emotional_rules, exercise_rules, food_rules
from .models import (
    ActivityLevel, EmotionalRecommendation, ExerciseRecommendation,
    FoodRecommendation, HealthSnapshot, RecommendationAxis
)
from .rules import RuleContext, apply_rules

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """
    Generates recommendation lists per axis.

    Output order is always the state-based entries first (BMI, activity
    level or emotional state), followed by symptom entries in catalog order.
    """

    def __init__(
        self,
        food_catalog=food_rules,
        exercise_catalog=exercise_rules,
        emotional_catalog=emotional_rules,
    ):
        """
        Initialize recommendation engine.

        Args:
            food_catalog: Module or object exposing BMI_RULES and SYMPTOM_RULES
            exercise_catalog: Exposes ACTIVITY_RULES, BMI_RULES and SYMPTOM_RULES
            emotional_catalog: Exposes STATE_RULES and SYMPTOM_RULES
        """
        self.food_catalog = food_catalog
        self.exercise_catalog = exercise_catalog
        self.emotional_catalog = emotional_catalog

    def generate(
        self,
        axis: Union[RecommendationAxis, str],
        snapshot: HealthSnapshot,
        presence: frozenset,
        default_activity_level: Union[ActivityLevel, str] = ActivityLevel.UNSPECIFIED,
    ) -> list:
        """
        Generate recommendations for one axis.

        Args:
            axis: food, exercise or emotional
            snapshot: Latest health snapshot (zero-valued when none exists)
            presence: Symptom presence set
            default_activity_level: Profile activity level, used by the
                exercise axis when the snapshot has none

        Returns:
            Ordered list of recommendation entries

        Raises:
            ValueError: If the axis is unknown
        """
        axis = RecommendationAxis(axis)
        if axis == RecommendationAxis.FOOD:
            return self.generate_food_recommendations(snapshot, presence)
        if axis == RecommendationAxis.EXERCISE:
            return self.generate_exercise_recommendations(
                snapshot, presence, default_activity_level
            )
        return self.generate_emotional_recommendations(snapshot, presence)

    def generate_food_recommendations(
        self,
        snapshot: HealthSnapshot,
        presence: frozenset,
    ) -> list[FoodRecommendation]:
        """
        Food advice: one BMI entry, then every matching symptom entry.
        """
        context = RuleContext.from_snapshot(snapshot, presence)
        recommendations: list[FoodRecommendation] = []
        apply_rules(self.food_catalog.BMI_RULES, context, recommendations)
        apply_rules(self.food_catalog.SYMPTOM_RULES, context, recommendations)
        logger.debug(
            "Generated %d food recommendations for BMI category %s",
            len(recommendations), context.bmi_category.value
        )
        return recommendations

    def generate_exercise_recommendations(
        self,
        snapshot: HealthSnapshot,
        presence: frozenset,
        default_activity_level: Union[ActivityLevel, str] = ActivityLevel.UNSPECIFIED,
    ) -> list[ExerciseRecommendation]:
        """
        Exercise advice.

        The activity pass and the BMI pass are independent; both results are
        kept, activity first. With no activity level on the snapshot or the
        profile, the activity pass matches nothing.
        """
        context = RuleContext.from_snapshot(snapshot, presence, default_activity_level)
        recommendations: list[ExerciseRecommendation] = []
        apply_rules(self.exercise_catalog.ACTIVITY_RULES, context, recommendations)
        apply_rules(self.exercise_catalog.BMI_RULES, context, recommendations)
        apply_rules(self.exercise_catalog.SYMPTOM_RULES, context, recommendations)
        logger.debug(
            "Generated %d exercise recommendations for activity level %r",
            len(recommendations), context.activity_level.value
        )
        return recommendations

    def generate_emotional_recommendations(
        self,
        snapshot: HealthSnapshot,
        presence: frozenset,
    ) -> list[EmotionalRecommendation]:
        """
        Emotional advice.

        Symptom entries are skipped when an entry with the same emotional
        state tag is already in the list.
        """
        context = RuleContext.from_snapshot(snapshot, presence)
        recommendations: list[EmotionalRecommendation] = []
        apply_rules(self.emotional_catalog.STATE_RULES, context, recommendations)
        apply_rules(
            self.emotional_catalog.SYMPTOM_RULES, context, recommendations, dedup=True
        )
        logger.debug(
            "Generated %d emotional recommendations for state %r",
            len(recommendations), context.emotional_state.value
        )
        return recommendations
