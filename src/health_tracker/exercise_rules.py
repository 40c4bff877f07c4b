"""
Exercise recommendation catalog.

Two independent state passes run before the symptom scan: one on activity
level, one on BMI category for weight-related advice.
"""

from .bmi import BMICategory
from .models import ActivityLevel, ExerciseRecommendation
from .rules import ActivityLevelEquals, RecommendationRule, bmi_is, symptom_any
from .symptoms import SymptomName as S


ACTIVITY_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        ActivityLevelEquals(ActivityLevel.SEDENTARY),
        ExerciseRecommendation(
            category="beginner",
            title="Mulai dengan Aktivitas Ringan",
            description="Bangun kebiasaan olahraga secara bertahap",
            exercises=["Jalan kaki 15-30 menit", "Stretching pagi", "Yoga pemula", "Berenang santai"],
            duration="15-30 menit",
            frequency="3-4 kali/minggu",
            intensity="Ringan",
            reason="Tingkat aktivitas Anda rendah, mulai perlahan",
        ),
    ),
    RecommendationRule(
        ActivityLevelEquals(ActivityLevel.LIGHT),
        ExerciseRecommendation(
            category="intermediate_light",
            title="Tingkatkan Intensitas Olahraga",
            description="Tambah variasi dan durasi latihan",
            exercises=["Jogging ringan", "Bersepeda santai", "Senam aerobik", "Pilates"],
            duration="30-45 menit",
            frequency="4-5 kali/minggu",
            intensity="Ringan-Sedang",
            reason="Anda sudah aktif ringan, tingkatkan intensitas",
        ),
    ),
    RecommendationRule(
        ActivityLevelEquals(ActivityLevel.MODERATE),
        ExerciseRecommendation(
            category="intermediate",
            title="Variasikan Latihan Anda",
            description="Kombinasi kardio dan latihan kekuatan",
            exercises=["Lari 5K", "HIIT workout", "Angkat beban", "Berenang lap", "Bulu tangkis"],
            duration="45-60 menit",
            frequency="5 kali/minggu",
            intensity="Sedang",
            reason="Tingkat aktivitas sedang, tambah variasi",
        ),
    ),
    RecommendationRule(
        ActivityLevelEquals(ActivityLevel.ACTIVE),
        ExerciseRecommendation(
            category="advanced",
            title="Pertahankan Performa",
            description="Jaga konsistensi dan hindari overtraining",
            exercises=["Lari jarak jauh", "CrossFit", "Latihan interval", "Olahraga kompetitif"],
            duration="60+ menit",
            frequency="5-6 kali/minggu dengan 1 hari istirahat",
            intensity="Tinggi",
            reason="Anda sangat aktif, jaga keseimbangan",
        ),
    ),
)


BMI_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        bmi_is(BMICategory.OVERWEIGHT, BMICategory.OBESE),
        ExerciseRecommendation(
            category="weight_loss",
            title="Olahraga untuk Menurunkan Berat",
            description="Kombinasi kardio untuk membakar kalori",
            exercises=["Jalan cepat", "Berenang", "Sepeda statis", "Eliptical trainer", "Zumba"],
            duration="45-60 menit",
            frequency="5-6 kali/minggu",
            intensity="Sedang",
            reason="Fokus pada pembakaran kalori untuk penurunan berat badan",
        ),
    ),
)


SYMPTOM_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        symptom_any(S.NYERI_SENDI, S.NYERI_OTOT),
        ExerciseRecommendation(
            category="low_impact",
            title="🦴 Olahraga Rendah Dampak",
            description="Aktivitas yang tidak membebani sendi dan otot",
            exercises=["Berenang", "Yoga", "Tai Chi", "Bersepeda statis", "Water aerobics"],
            duration="20-30 menit",
            frequency="3-4 kali/minggu",
            intensity="Ringan",
            reason="Anda mengalami nyeri sendi/otot, pilih olahraga yang lembut",
        ),
    ),
    RecommendationRule(
        symptom_any(S.DEMAM, S.FLU, S.PILEK),
        ExerciseRecommendation(
            category="recovery",
            title="🤒 Istirahat saat Demam/Flu",
            description="Fokus pada pemulihan saat sakit",
            exercises=["Istirahat total", "Stretching ringan di tempat tidur", "Pernapasan dalam", "Jalan pelan di dalam rumah"],
            duration="5-10 menit",
            frequency="Sesuai kemampuan",
            intensity="Sangat Ringan",
            reason="Saat demam/flu, prioritaskan istirahat. Olahraga berat dapat memperburuk kondisi. Mulai kembali olahraga secara bertahap setelah pulih.",
        ),
    ),
    RecommendationRule(
        symptom_any(S.TEKANAN_DARAH_TINGGI, S.HIPERTENSI),
        ExerciseRecommendation(
            category="blood_pressure",
            title="❤️ Olahraga untuk Tekanan Darah",
            description="Aktivitas yang membantu mengontrol tekanan darah",
            exercises=["Jalan kaki santai", "Berenang", "Bersepeda santai", "Yoga", "Tai Chi", "Senam ringan"],
            duration="30-40 menit",
            frequency="5 kali/minggu",
            intensity="Ringan-Sedang",
            reason="Olahraga teratur membantu menurunkan tekanan darah. Hindari angkat beban berat dan olahraga intensitas tinggi.",
        ),
    ),
    RecommendationRule(
        symptom_any(S.STRES, S.CEMAS, S.KECEMASAN),
        ExerciseRecommendation(
            category="stress_relief",
            title="🧘 Olahraga Pereda Stres",
            description="Aktivitas fisik untuk mengurangi stres dan kecemasan",
            exercises=["Yoga", "Tai Chi", "Jalan santai di alam", "Berenang", "Stretching/peregangan", "Pilates"],
            duration="30-45 menit",
            frequency="4-5 kali/minggu",
            intensity="Ringan-Sedang",
            reason="Olahraga melepaskan endorfin yang membantu mengurangi stres dan kecemasan. Fokus pada pernapasan dan gerakan mindful.",
        ),
    ),
    RecommendationRule(
        symptom_any(S.GANGGUAN_TIDUR, S.INSOMNIA, S.SULIT_TIDUR),
        ExerciseRecommendation(
            category="sleep_improvement",
            title="😴 Olahraga untuk Kualitas Tidur",
            description="Aktivitas yang membantu meningkatkan kualitas tidur",
            exercises=["Yoga sebelum tidur", "Stretching malam", "Jalan kaki sore", "Tai Chi", "Pernapasan 4-7-8"],
            duration="20-30 menit",
            frequency="Setiap hari (hindari 3 jam sebelum tidur)",
            intensity="Ringan",
            reason="Olahraga teratur meningkatkan kualitas tidur, tetapi hindari olahraga intensif 3 jam sebelum tidur.",
        ),
    ),
    RecommendationRule(
        symptom_any(S.KELELAHAN_FISIK, S.BURNOUT, S.LEMAS, S.KELELAHAN_EMOSIONAL),
        ExerciseRecommendation(
            category="energy_boost",
            title="⚡ Olahraga untuk Memulihkan Energi",
            description="Aktivitas ringan untuk mengembalikan energi tanpa menambah kelelahan",
            exercises=["Jalan santai di luar ruangan", "Yoga restoratif", "Stretching pagi", "Berenang santai", "Berkebun"],
            duration="15-30 menit",
            frequency="3-4 kali/minggu, sesuai kemampuan",
            intensity="Ringan",
            reason="Saat burnout, olahraga ringan di luar ruangan dapat membantu memulihkan energi. Jangan memaksakan diri, dengarkan tubuh Anda.",
        ),
    ),
)
