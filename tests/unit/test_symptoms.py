"""
Unit tests for the symptom vocabulary and presence matching.
"""

from health_tracker.models import Symptom, SymptomType
from health_tracker.symptoms import (
    MENTAL_SYMPTOMS, PHYSICAL_SYMPTOMS, SymptomName,
    build_presence_set, is_present, is_present_any, symptom_catalog
)


def make_symptom(name: str, symptom_type: SymptomType = SymptomType.PHYSICAL) -> Symptom:
    return Symptom(symptom_type=symptom_type, symptom_name=name, severity=5)


class TestSymptomCatalog:
    """Test suite for symptom_catalog."""

    def test_sections(self):
        catalog = symptom_catalog()
        assert set(catalog) == {"physical", "mental"}
        assert len(catalog["physical"]) == len(PHYSICAL_SYMPTOMS) == 15
        assert len(catalog["mental"]) == len(MENTAL_SYMPTOMS) == 10

    def test_template_content(self):
        catalog = symptom_catalog()
        first_physical = catalog["physical"][0]
        assert first_physical.symptom_name == "Demam"
        assert first_physical.symptom_type == SymptomType.PHYSICAL
        assert first_physical.description == "Gejala fisik: Demam"
        assert catalog["mental"][0].description == "Gejala mental: Stres"

    def test_catalog_names_are_known(self):
        catalog = symptom_catalog()
        for template in catalog["physical"] + catalog["mental"]:
            assert SymptomName(template.symptom_name).value == template.symptom_name


class TestPresenceSet:
    """Test suite for build_presence_set and membership checks."""

    def test_collapses_duplicates(self):
        presence = build_presence_set([
            make_symptom("Demam"),
            make_symptom("Demam"),
            make_symptom("Stres", SymptomType.MENTAL),
        ])
        assert presence == frozenset({SymptomName.DEMAM, SymptomName.STRES})

    def test_ignores_symptom_type(self):
        """A name logged under the other type still counts."""
        presence = build_presence_set([make_symptom("Stres", SymptomType.PHYSICAL)])
        assert is_present(presence, SymptomName.STRES)

    def test_unknown_names_are_dropped(self):
        presence = build_presence_set([make_symptom("Sakit Gigi"), make_symptom("Flu")])
        assert presence == frozenset({SymptomName.FLU})

    def test_matching_is_exact(self):
        presence = build_presence_set([make_symptom("demam"), make_symptom("Demam ")])
        assert presence == frozenset()

    def test_empty(self):
        assert build_presence_set([]) == frozenset()

    def test_is_present_accepts_raw_strings(self):
        presence = build_presence_set([make_symptom("Pusing")])
        assert is_present(presence, SymptomName.PUSING)
        assert "Pusing" in presence

    def test_is_present_any(self):
        presence = build_presence_set([make_symptom("Flu")])
        assert is_present_any(presence, [SymptomName.DEMAM, SymptomName.FLU])
        assert not is_present_any(presence, [SymptomName.DEMAM, SymptomName.PILEK])
        assert not is_present_any(presence, [])
