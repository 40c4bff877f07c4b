"""
Symptom vocabulary and presence matching.

Symptom names are stored as their Indonesian display text. Rules refer to the
``SymptomName`` members rather than raw strings, so a typo in a rule fails at
import time instead of silently never matching. Matching is exact: no case
folding or trimming is applied.
"""

import logging
from enum import Enum
from typing import Iterable

from .models import Symptom, SymptomTemplate, SymptomType

logger = logging.getLogger(__name__)


class SymptomName(str, Enum):
    """Every symptom name the catalog offers or a rule reacts to."""
    # Physical catalog
    DEMAM = "Demam"
    FLU = "Flu"
    BATUK = "Batuk"
    PILEK = "Pilek"
    SAKIT_KEPALA = "Sakit Kepala"
    TEKANAN_DARAH_TINGGI = "Tekanan Darah Tinggi"
    KOLESTEROL_TINGGI = "Kolesterol Tinggi"
    MAAG = "Maag"
    GANGGUAN_PENCERNAAN = "Gangguan Pencernaan"
    NYERI_OTOT = "Nyeri Otot"
    KELELAHAN_FISIK = "Kelelahan Fisik"
    OBESITAS = "Obesitas"
    NYERI_SENDI = "Nyeri Sendi"
    SESAK_NAPAS = "Sesak Napas"
    PUSING = "Pusing"

    # Mental catalog
    STRES = "Stres"
    KECEMASAN = "Kecemasan"
    DEPRESI_RINGAN = "Depresi Ringan"
    MUDAH_MARAH = "Mudah Marah"
    GANGGUAN_TIDUR = "Gangguan Tidur"
    BURNOUT = "Burnout"
    KESEPIAN_SOSIAL = "Kesepian Sosial"
    SULIT_KONSENTRASI = "Sulit Konsentrasi"
    MOOD_SWING = "Mood Swing"
    OVERTHINKING = "Overthinking"

    # Accepted by rules but not offered in the catalog lists
    HIPERTENSI = "Hipertensi"
    KOLESTEROL = "Kolesterol"
    CEMAS = "Cemas"
    GELISAH = "Gelisah"
    INSOMNIA = "Insomnia"
    SULIT_TIDUR = "Sulit Tidur"
    KELELAHAN_EMOSIONAL = "Kelelahan Emosional (Burnout)"
    LEMAS = "Lemas"
    LESU = "Lesu"
    MUAL = "Mual"
    PERUT_KEMBUNG = "Perut Kembung"
    MIGRAIN = "Migrain"
    DIABETES = "Diabetes"
    GULA_DARAH_TINGGI = "Gula Darah Tinggi"
    HIPERGLIKEMIA = "Hiperglikemia"
    ANEMIA = "Anemia"
    KURANG_DARAH = "Kurang Darah"
    PUCAT = "Pucat"
    SEMBELIT = "Sembelit"
    KONSTIPASI = "Konstipasi"
    SUSAH_BAB = "Susah BAB"
    ASAM_URAT = "Asam Urat"
    GOUT = "Gout"
    HAMIL = "Hamil"
    KEHAMILAN = "Kehamilan"
    MORNING_SICKNESS = "Morning Sickness"
    ALERGI = "Alergi"
    GATAL_GATAL = "Gatal-gatal"
    RUAM_KULIT = "Ruam Kulit"
    BATUK_BERDAHAK = "Batuk Berdahak"
    TENGGOROKAN_GATAL = "Tenggorokan Gatal"
    DIARE = "Diare"
    MENCRET = "Mencret"
    SAKIT_PERUT = "Sakit Perut"


PHYSICAL_SYMPTOMS: tuple[SymptomName, ...] = (
    SymptomName.DEMAM,
    SymptomName.FLU,
    SymptomName.BATUK,
    SymptomName.PILEK,
    SymptomName.SAKIT_KEPALA,
    SymptomName.TEKANAN_DARAH_TINGGI,
    SymptomName.KOLESTEROL_TINGGI,
    SymptomName.MAAG,
    SymptomName.GANGGUAN_PENCERNAAN,
    SymptomName.NYERI_OTOT,
    SymptomName.KELELAHAN_FISIK,
    SymptomName.OBESITAS,
    SymptomName.NYERI_SENDI,
    SymptomName.SESAK_NAPAS,
    SymptomName.PUSING,
)

MENTAL_SYMPTOMS: tuple[SymptomName, ...] = (
    SymptomName.STRES,
    SymptomName.KECEMASAN,
    SymptomName.DEPRESI_RINGAN,
    SymptomName.MUDAH_MARAH,
    SymptomName.GANGGUAN_TIDUR,
    SymptomName.BURNOUT,
    SymptomName.KESEPIAN_SOSIAL,
    SymptomName.SULIT_KONSENTRASI,
    SymptomName.MOOD_SWING,
    SymptomName.OVERTHINKING,
)

_TYPE_LABELS = {
    SymptomType.PHYSICAL: "Gejala fisik",
    SymptomType.MENTAL: "Gejala mental",
}


def symptom_catalog() -> dict[str, list[SymptomTemplate]]:
    """
    Return the predefined symptom templates grouped by type.

    Returns:
        Dict with ``physical`` and ``mental`` template lists
    """
    def templates(symptom_type: SymptomType, names: tuple[SymptomName, ...]) -> list[SymptomTemplate]:
        return [
            SymptomTemplate(
                symptom_type=symptom_type,
                symptom_name=name.value,
                description=f"{_TYPE_LABELS[symptom_type]}: {name.value}",
            )
            for name in names
        ]

    return {
        SymptomType.PHYSICAL.value: templates(SymptomType.PHYSICAL, PHYSICAL_SYMPTOMS),
        SymptomType.MENTAL.value: templates(SymptomType.MENTAL, MENTAL_SYMPTOMS),
    }


def build_presence_set(symptoms: Iterable[Symptom]) -> frozenset[SymptomName]:
    """
    Collapse logged symptoms to the set of distinct known names.

    Symptom type is ignored. Names outside the vocabulary cannot trigger any
    rule and are left out.
    """
    present = set()
    for symptom in symptoms:
        try:
            present.add(SymptomName(symptom.symptom_name))
        except ValueError:
            logger.debug("Ignoring unknown symptom name %r", symptom.symptom_name)
    return frozenset(present)


def is_present(presence: frozenset, name: SymptomName) -> bool:
    """Check whether a symptom name is in the presence set."""
    return name in presence


def is_present_any(presence: frozenset, names: Iterable[SymptomName]) -> bool:
    """Check whether any of the names is in the presence set."""
    return any(name in presence for name in names)
