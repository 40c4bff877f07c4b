"""
Unit tests for Daily Menu Composer.

Tests the default menu, BMI overrides, symptom overrides and their
last-write-wins precedence.
"""

import pytest

from health_tracker.menu_composer import DailyMenuComposer, compose_menu
from health_tracker.menu_rules import BMI_OVERRIDES, DEFAULT_MENU, SYMPTOM_OVERRIDES
from health_tracker.models import HealthSnapshot
from health_tracker.symptoms import SymptomName


HEIGHT_CM = 170
NORMAL_KG = 65
UNDERWEIGHT_KG = 50
OVERWEIGHT_KG = 80
OBESE_KG = 95


def make_snapshot(weight_kg=NORMAL_KG) -> HealthSnapshot:
    return HealthSnapshot(weight_kg=weight_kg, height_cm=HEIGHT_CM)


@pytest.fixture
def composer():
    return DailyMenuComposer()


class TestDefaultMenu:
    """Test suite for the menu without overrides."""

    def test_normal_bmi_without_symptoms_is_default(self, composer):
        menu = composer.compose_menu(make_snapshot(), frozenset())
        assert menu == DEFAULT_MENU

    def test_default_is_fully_populated(self):
        assert DEFAULT_MENU.total_calories == "~1850 kkal"
        assert DEFAULT_MENU.breakfast.title == "🌅 Bubur Ayam Kampung Sehat"
        assert len(DEFAULT_MENU.breakfast_alt) == 5
        assert len(DEFAULT_MENU.lunch_alt) == 5
        assert len(DEFAULT_MENU.dinner_alt) == 5
        assert len(DEFAULT_MENU.snacks) == 4
        assert len(DEFAULT_MENU.drinks) == 8
        assert len(DEFAULT_MENU.fruits) == 12

    def test_result_does_not_share_state_with_default(self, composer):
        menu = composer.compose_menu(make_snapshot(), frozenset())
        menu.drinks.append("Kopi susu")
        menu.breakfast.foods.append("Donat")

        assert "Kopi susu" not in DEFAULT_MENU.drinks
        assert "Donat" not in DEFAULT_MENU.breakfast.foods


class TestBMIOverrides:
    """Test suite for the BMI layer."""

    def test_underweight_replaces_meals_wholesale(self, composer):
        menu = composer.compose_menu(make_snapshot(UNDERWEIGHT_KG), frozenset())

        assert menu.breakfast.title == "🌅 Sarapan Tinggi Kalori"
        assert menu.lunch.title == "🍱 Makan Siang Berenergi"
        assert menu.dinner.title == "🌙 Makan Malam Bergizi"
        assert [s.title for s in menu.snacks] == ["🥜 Snack Pagi", "🍌 Snack Sore"]
        assert menu.total_calories == "~2650 kkal"
        assert menu.total_estimated_cost == "Rp 85.000 - 120.000"
        # Fields the override does not declare stay at the default
        assert menu.drinks == DEFAULT_MENU.drinks
        assert menu.breakfast_alt == DEFAULT_MENU.breakfast_alt

    @pytest.mark.parametrize("weight", [OVERWEIGHT_KG, OBESE_KG])
    def test_weight_loss_menu(self, composer, weight):
        menu = composer.compose_menu(make_snapshot(weight), frozenset())
        assert menu.total_calories == "~880 kkal"
        assert menu.breakfast.title == "🌅 Sarapan Rendah Kalori"
        assert len(menu.snacks) == 2

    def test_empty_snapshot_gets_underweight_menu(self, composer):
        menu = composer.compose_menu(HealthSnapshot(), frozenset())
        assert menu.total_calories == "~2650 kkal"


class TestSymptomOverrides:
    """Test suite for the symptom layer."""

    def test_diabetes_overrides(self, composer):
        menu = composer.compose_menu(make_snapshot(), frozenset({SymptomName.DIABETES}))

        assert menu.health_tip != DEFAULT_MENU.health_tip
        assert menu.breakfast.title == "🌅 Sarapan Diabetes-Friendly"
        assert menu.lunch.title == "🍱 Makan Siang Gula Darah Stabil"
        assert menu.dinner.title == "🌙 Makan Malam Ringan Diabetesi"
        assert len(menu.snacks) == 2
        assert menu.drinks[1] == "🍵 Teh hijau tanpa gula"
        assert menu.fruits[0] == "🍐 Pir - IG rendah"
        assert "🚫 Semangka - IG tinggi" in menu.avoid_fruits
        assert "🚫 Teh manis" in menu.avoid_drinks
        assert menu.total_calories == "~1270 kkal"

    def test_hypertension_keeps_snacks_and_meal_titles(self, composer):
        menu = composer.compose_menu(make_snapshot(), frozenset({SymptomName.HIPERTENSI}))

        assert menu.snacks == DEFAULT_MENU.snacks
        assert menu.breakfast.title == DEFAULT_MENU.breakfast.title
        assert menu.breakfast.ingredients == DEFAULT_MENU.breakfast.ingredients
        assert menu.breakfast.foods == ["Oatmeal", "Pisang", "Yogurt rendah lemak"]
        assert menu.drinks[1] == "🥥 Air kelapa - tinggi kalium"
        assert menu.total_calories == DEFAULT_MENU.total_calories

    def test_cholesterol_only_matches_specific_names(self, composer):
        for name in (SymptomName.KOLESTEROL_TINGGI, SymptomName.KOLESTEROL):
            menu = composer.compose_menu(make_snapshot(), frozenset({name}))
            assert menu.total_calories == "~1400 kkal"
            assert [s.title for s in menu.snacks] == ["🥜 Snack Sehat"]

    def test_underweight_with_fever(self, composer):
        """Fever changes meal foods and calories but leaves the snacks alone."""
        menu = composer.compose_menu(make_snapshot(UNDERWEIGHT_KG), frozenset({SymptomName.DEMAM}))

        assert menu.total_calories == "~1200 kkal"
        assert [s.title for s in menu.snacks] == ["🥜 Snack Pagi", "🍌 Snack Sore"]
        assert menu.breakfast.title == "🌅 Sarapan Tinggi Kalori"
        assert menu.breakfast.foods == ["Bubur ayam hangat", "Teh jahe madu", "Jeruk"]
        assert menu.health_tip.startswith("Perbanyak cairan hangat")
        # Underweight cost estimate is not touched by fever
        assert menu.total_estimated_cost == "Rp 85.000 - 120.000"

    def test_later_rule_wins_on_shared_fields(self, composer):
        """Diabetes runs first, fever last: fever's calories and tip win."""
        menu = composer.compose_menu(
            make_snapshot(),
            frozenset({SymptomName.FLU, SymptomName.DIABETES})
        )

        assert menu.total_calories == "~1200 kkal"
        assert menu.health_tip.startswith("Perbanyak cairan hangat")
        # Diabetes-only fields survive
        assert menu.fruits[0] == "🍐 Pir - IG rendah"
        assert menu.breakfast.title == "🌅 Sarapan Diabetes-Friendly"
        assert menu.breakfast.foods == ["Bubur ayam hangat", "Teh jahe madu", "Jeruk"]
        assert len(menu.snacks) == 2

    def test_insomnia_after_stress(self, composer):
        menu = composer.compose_menu(
            make_snapshot(),
            frozenset({SymptomName.STRES, SymptomName.SULIT_TIDUR})
        )
        assert [s.title for s in menu.snacks] == ["🥛 Snack Sebelum Tidur"]
        assert menu.total_calories == "~1400 kkal"

    def test_priority_order(self):
        assert [rule.name for rule in SYMPTOM_OVERRIDES] == [
            "diabetes", "digestive", "hypertension", "cholesterol", "anemia",
            "gout", "stress_anxiety", "sleep", "fever_flu",
        ]
        assert [rule.name for rule in BMI_OVERRIDES] == ["underweight", "weight_loss"]

    @pytest.mark.parametrize("rule_name", ["hypertension", "fever_flu"])
    def test_rules_without_snack_override(self, rule_name):
        rule = next(r for r in SYMPTOM_OVERRIDES if r.name == rule_name)
        assert "snacks" not in rule.overrides


class TestComposeMenu:
    """Test suite for the module-level helper."""

    def test_idempotent(self):
        snapshot = make_snapshot(OBESE_KG)
        presence = frozenset({SymptomName.MAAG, SymptomName.ASAM_URAT, SymptomName.PILEK})

        first = compose_menu(snapshot, presence)
        second = compose_menu(snapshot, presence)

        assert first.model_dump_json() == second.model_dump_json()

    def test_unknown_presence_entries_are_ignored(self):
        assert compose_menu(make_snapshot(), frozenset()) == compose_menu(
            make_snapshot(), frozenset({SymptomName.OVERTHINKING})
        )
