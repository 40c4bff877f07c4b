"""
Unit tests for Recommendation Engine.

Tests ordering, BMI and activity gating, symptom triggers and the
emotional-state deduplication.
"""

import pytest

from health_tracker.models import (
    ActivityLevel, EmotionalState, HealthSnapshot, RecommendationAxis
)
from health_tracker.recommendation_engine import RecommendationEngine
from health_tracker.symptoms import SymptomName


HEIGHT_CM = 170
# Weights giving each BMI category at 170 cm
UNDERWEIGHT_KG = 50
NORMAL_KG = 65
OVERWEIGHT_KG = 80
OBESE_KG = 95


def make_snapshot(weight_kg=NORMAL_KG, height_cm=HEIGHT_CM, **fields) -> HealthSnapshot:
    return HealthSnapshot(weight_kg=weight_kg, height_cm=height_cm, **fields)


def presence(*names: SymptomName) -> frozenset:
    return frozenset(names)


def categories(entries) -> list[str]:
    return [entry.identity_key for entry in entries]


@pytest.fixture
def engine():
    return RecommendationEngine()


class TestFoodRecommendations:
    """Test suite for the food axis."""

    def test_overweight_without_symptoms_is_single_entry(self, engine):
        result = engine.generate(RecommendationAxis.FOOD, make_snapshot(OVERWEIGHT_KG), presence())

        assert len(result) == 1
        assert result[0].category == "weight_loss"
        assert result[0].title == "Makanan untuk Menurunkan Berat Badan"

    @pytest.mark.parametrize("weight, category", [
        (UNDERWEIGHT_KG, "weight_gain"),
        (NORMAL_KG, "maintenance"),
        (OVERWEIGHT_KG, "weight_loss"),
        (OBESE_KG, "weight_loss"),
    ])
    def test_bmi_rule_per_category(self, engine, weight, category):
        result = engine.generate_food_recommendations(make_snapshot(weight), presence())
        assert categories(result) == [category]

    def test_zero_bmi_is_underweight(self, engine):
        result = engine.generate_food_recommendations(HealthSnapshot(), presence())
        assert categories(result) == ["weight_gain"]

    def test_symptom_entries_follow_catalog_order(self, engine):
        """Catalog order wins over the order symptoms were given in."""
        result = engine.generate_food_recommendations(
            make_snapshot(),
            presence(SymptomName.DIARE, SymptomName.DEMAM, SymptomName.DIABETES)
        )
        assert categories(result) == ["maintenance", "fever_flu", "diabetes", "diarrhea"]

    def test_overlapping_trigger_fires_every_rule(self, engine):
        """Lemas feeds both the fatigue and the anemia advice."""
        result = engine.generate_food_recommendations(make_snapshot(), presence(SymptomName.LEMAS))
        assert categories(result) == ["maintenance", "fatigue_burnout", "anemia"]

    def test_batuk_triggers_fever_and_cough(self, engine):
        result = engine.generate_food_recommendations(make_snapshot(), presence(SymptomName.BATUK))
        assert categories(result) == ["maintenance", "fever_flu", "cough"]

    def test_pusing_triggers_blood_pressure(self, engine):
        result = engine.generate_food_recommendations(make_snapshot(), presence(SymptomName.PUSING))
        assert "blood_pressure" in categories(result)

    def test_food_payload_fields(self, engine):
        entry = engine.generate_food_recommendations(make_snapshot(), presence())[0]
        assert set(entry.model_dump()) == {"category", "title", "description", "foods", "avoid", "reason"}

    def test_returns_copies_of_catalog_entries(self, engine):
        first = engine.generate_food_recommendations(make_snapshot(), presence())
        first[0].foods.append("Sesuatu")
        second = engine.generate_food_recommendations(make_snapshot(), presence())
        assert "Sesuatu" not in second[0].foods


class TestExerciseRecommendations:
    """Test suite for the exercise axis."""

    @pytest.mark.parametrize("level, category", [
        (ActivityLevel.SEDENTARY, "beginner"),
        (ActivityLevel.LIGHT, "intermediate_light"),
        (ActivityLevel.MODERATE, "intermediate"),
        (ActivityLevel.ACTIVE, "advanced"),
    ])
    def test_activity_level_rule(self, engine, level, category):
        result = engine.generate_exercise_recommendations(
            make_snapshot(activity_level=level), presence()
        )
        assert categories(result) == [category]

    def test_activity_then_bmi_pass(self, engine):
        result = engine.generate_exercise_recommendations(
            make_snapshot(OBESE_KG, activity_level=ActivityLevel.LIGHT), presence()
        )
        assert categories(result) == ["intermediate_light", "weight_loss"]

    def test_profile_activity_level_fallback(self, engine):
        result = engine.generate_exercise_recommendations(
            make_snapshot(), presence(), default_activity_level=ActivityLevel.ACTIVE
        )
        assert categories(result) == ["advanced"]

    def test_snapshot_activity_level_wins_over_profile(self, engine):
        result = engine.generate_exercise_recommendations(
            make_snapshot(activity_level=ActivityLevel.SEDENTARY),
            presence(),
            default_activity_level="active"
        )
        assert categories(result) == ["beginner"]

    def test_no_activity_level_anywhere_matches_nothing(self, engine):
        result = engine.generate_exercise_recommendations(make_snapshot(), presence())
        assert result == []

    def test_symptom_rules_after_state_rules(self, engine):
        result = engine.generate(
            "exercise",
            make_snapshot(OVERWEIGHT_KG, activity_level=ActivityLevel.MODERATE),
            presence(SymptomName.INSOMNIA, SymptomName.NYERI_SENDI, SymptomName.NYERI_OTOT, SymptomName.FLU),
        )
        assert categories(result) == [
            "intermediate", "weight_loss", "low_impact", "recovery", "sleep_improvement"
        ]

    def test_energy_boost_triggers(self, engine):
        for name in (SymptomName.KELELAHAN_FISIK, SymptomName.BURNOUT, SymptomName.LEMAS):
            result = engine.generate_exercise_recommendations(make_snapshot(), presence(name))
            assert categories(result) == ["energy_boost"]


class TestEmotionalRecommendations:
    """Test suite for the emotional axis."""

    def test_stressed_with_stres_symptom_has_unique_keys(self, engine):
        result = engine.generate(
            RecommendationAxis.EMOTIONAL,
            make_snapshot(emotional_state=EmotionalState.STRESSED),
            presence(SymptomName.STRES),
        )
        keys = categories(result)
        assert keys == ["stressed", "stress"]
        assert len(keys) == len(set(keys))

    def test_state_rule_only(self, engine):
        result = engine.generate_emotional_recommendations(
            make_snapshot(emotional_state=EmotionalState.SAD), presence()
        )
        assert categories(result) == ["sad"]
        assert result[0].title == "Tingkatkan Mood Anda"

    def test_unspecified_state_without_symptoms_is_empty(self, engine):
        assert engine.generate_emotional_recommendations(make_snapshot(), presence()) == []

    def test_symptom_catalog_order(self, engine):
        result = engine.generate_emotional_recommendations(
            make_snapshot(),
            presence(SymptomName.KESEPIAN_SOSIAL, SymptomName.BURNOUT, SymptomName.GANGGUAN_TIDUR)
        )
        assert categories(result) == ["sleep_issue", "burnout", "lonely"]

    def test_kecemasan_has_no_emotional_rule(self, engine):
        """Only the short form Cemas maps to the anxiety advice."""
        result = engine.generate_emotional_recommendations(
            make_snapshot(), presence(SymptomName.KECEMASAN)
        )
        assert result == []

    def test_dedup_skips_tag_already_present(self, engine):
        """A catalog entry whose tag is already in the output is dropped."""
        from health_tracker import emotional_rules
        from health_tracker.rules import RecommendationRule, symptom_any

        class Catalog:
            STATE_RULES = emotional_rules.STATE_RULES
            SYMPTOM_RULES = emotional_rules.SYMPTOM_RULES + (
                RecommendationRule(
                    symptom_any(SymptomName.STRES),
                    emotional_rules.SYMPTOM_RULES[2].payload.model_copy(update={"title": "Duplicate"}),
                ),
            )

        custom = RecommendationEngine(emotional_catalog=Catalog)
        result = custom.generate_emotional_recommendations(make_snapshot(), presence(SymptomName.STRES))

        assert categories(result) == ["stress"]
        assert result[0].title != "Duplicate"


class TestGenerate:
    """Test suite for the generic entry point."""

    def test_unknown_axis(self, engine):
        with pytest.raises(ValueError):
            engine.generate("sleep", make_snapshot(), presence())

    @pytest.mark.parametrize("axis", list(RecommendationAxis))
    def test_idempotent(self, engine, axis):
        snapshot = make_snapshot(
            OBESE_KG,
            activity_level=ActivityLevel.LIGHT,
            emotional_state=EmotionalState.ANXIOUS
        )
        symptoms = presence(SymptomName.STRES, SymptomName.CEMAS, SymptomName.DEMAM, SymptomName.LEMAS)

        first = engine.generate(axis, snapshot, symptoms)
        second = engine.generate(axis, snapshot, symptoms)

        assert [e.model_dump_json() for e in first] == [e.model_dump_json() for e in second]
