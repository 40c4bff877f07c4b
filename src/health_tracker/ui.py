"""
User Interface for Health Tracker.

Provides a CLI for recording health data and symptoms and for viewing
recommendations, the daily menu and the dashboard.
"""

from typing import Optional
from pydantic import ValidationError

from .advisor import HealthAdvisor
from .models import (
    ActivityLevel, EmotionalState, HealthDataRequest, MealPlan,
    SymptomRequest, SymptomType
)
from .symptoms import symptom_catalog


class HealthTrackerUI:
    """
    Command-line interface for Health Tracker.

    Provides forms for data input and text views of every recommendation.
    """

    def __init__(self, advisor: HealthAdvisor, user_id: str, user_key: bytes):
        """
        Initialize UI for a specific user.

        Args:
            advisor: HealthAdvisor wired to the user's storage
            user_id: User identifier
            user_key: User's encryption key
        """
        self.advisor = advisor
        self.tracker = advisor.tracker
        self.user_id = user_id
        self.user_key = user_key

        # Cache for pre-population
        self._last_request: Optional[HealthDataRequest] = None

    def input_health_data(self) -> bool:
        """
        Display form for a health record.

        Returns:
            True if successful, False otherwise
        """
        print("\n=== Catat Data Kesehatan ===")

        defaults = {}
        if self._last_request:
            defaults = {
                'weight_kg': self._last_request.weight_kg,
                'height_cm': self._last_request.height_cm,
            }
            print("(Tekan Enter untuk memakai nilai sebelumnya)")

        try:
            weight_kg = self._get_float_input("Berat badan (kg)", defaults.get('weight_kg'))
            height_cm = self._get_float_input("Tinggi badan (cm)", defaults.get('height_cm'))
            activity_level = self._get_choice_input(
                "Tingkat aktivitas",
                [level.value for level in ActivityLevel if level.value],
                optional=True
            )
            emotional_state = self._get_choice_input(
                "Kondisi emosional",
                [state.value for state in EmotionalState if state.value],
                optional=True
            )
            notes = self._get_string_input("Catatan (opsional)", optional=True) or ""

            request = HealthDataRequest(
                weight_kg=weight_kg,
                height_cm=height_cm,
                activity_level=activity_level,
                emotional_state=emotional_state,
                notes=notes
            )
        except ValidationError as e:
            self._print_validation_error(e)
            return False

        result = self.tracker.record_health_data(self.user_id, request, self.user_key)
        if not result.success:
            print(f"\n✗ Error: {result.message}")
            return False

        print(f"\n✓ {result.message}")
        print(f"  BMI: {result.snapshot.bmi:.1f} ({result.bmi_category.value})")
        self._last_request = request
        return True

    def input_symptoms(self) -> bool:
        """
        Pick one or more symptoms from the catalog and log them together.

        Returns:
            True if at least one symptom was logged
        """
        print("\n=== Catat Gejala ===")

        catalog = symptom_catalog()
        templates = catalog[SymptomType.PHYSICAL.value] + catalog[SymptomType.MENTAL.value]
        for number, template in enumerate(templates, start=1):
            print(f"{number:2d}. {template.symptom_name} ({template.symptom_type.value})")

        selection = self._get_string_input("Nomor gejala, pisahkan dengan koma")
        try:
            numbers = [int(part) for part in selection.split(',') if part.strip()]
        except ValueError:
            print("  ✗ Masukkan nomor yang valid")
            return False

        requests = []
        try:
            for number in numbers:
                if not 1 <= number <= len(templates):
                    print(f"  ✗ Nomor {number} tidak ada di daftar")
                    return False
                template = templates[number - 1]
                severity = self._get_int_input(f"Tingkat keparahan {template.symptom_name} (1-10)")
                requests.append(SymptomRequest(
                    symptom_type=template.symptom_type,
                    symptom_name=template.symptom_name,
                    severity=severity
                ))
        except ValidationError as e:
            self._print_validation_error(e)
            return False

        results = self.tracker.log_symptoms(self.user_id, requests, self.user_key)
        logged = [r for r in results if r.success]
        for result in results:
            if not result.success:
                print(f"\n✗ Error: {result.message}")
        print(f"\n✓ {len(logged)} gejala dicatat")
        return bool(logged)

    def view_food_recommendations(self) -> None:
        print("\n=== Rekomendasi Makanan ===")
        for rec in self.advisor.food_recommendations(self.user_id, self.user_key):
            print(f"\n📋 {rec.title}")
            print(f"   {rec.description}")
            print(f"   Alasan: {rec.reason}")
            self._print_items("Disarankan", rec.foods)
            self._print_items("Hindari", rec.avoid)

    def view_exercise_recommendations(self) -> None:
        print("\n=== Rekomendasi Olahraga ===")
        for rec in self.advisor.exercise_recommendations(self.user_id, self.user_key):
            print(f"\n🏃 {rec.title}")
            print(f"   {rec.description}")
            print(f"   Durasi: {rec.duration} | Frekuensi: {rec.frequency} | Intensitas: {rec.intensity}")
            print(f"   Alasan: {rec.reason}")
            self._print_items("Latihan", rec.exercises)

    def view_emotional_recommendations(self) -> None:
        print("\n=== Rekomendasi Emosional ===")
        for rec in self.advisor.emotional_recommendations(self.user_id, self.user_key):
            print(f"\n🧘 {rec.title}")
            print(f"   {rec.description}")
            print(f"   Alasan: {rec.reason}")
            self._print_items("Aktivitas", rec.activities)
            self._print_items("Tips", rec.tips)

    def view_daily_menu(self) -> None:
        """Display the composed menu for today."""
        menu = self.advisor.daily_menu(self.user_id, self.user_key)

        print(f"\n=== Menu Harian ({menu.date}) ===")
        print(f"\n{menu.health_tip}")
        for label, meal in (("Sarapan", menu.breakfast), ("Makan siang", menu.lunch), ("Makan malam", menu.dinner)):
            print(f"\n{label}:")
            self._print_meal(meal)
        print("\nCamilan:")
        for snack in menu.snacks:
            self._print_meal(snack)
        self._print_items("Minuman", menu.drinks)
        self._print_items("Buah", menu.fruits)
        self._print_items("Hindari minuman", menu.avoid_drinks)
        self._print_items("Hindari buah", menu.avoid_fruits)
        print(f"\nTotal kalori: {menu.total_calories}")
        if menu.total_estimated_cost:
            print(f"Perkiraan biaya: {menu.total_estimated_cost}")

    def view_dashboard(self) -> None:
        """Display health score, latest record and quick hints."""
        dashboard = self.advisor.dashboard(self.user_id, self.user_key)

        print("\n=== Dashboard ===")
        print(f"Skor kesehatan: {dashboard.health_score}/100")
        print(f"Kategori BMI: {dashboard.bmi_category.value}")
        print(f"Jumlah catatan: {dashboard.total_records}")
        if dashboard.latest_health:
            latest = dashboard.latest_health
            print(f"Data terakhir: {latest.record_date:%Y-%m-%d} - {latest.weight_kg} kg, BMI {latest.bmi:.1f}")
        else:
            print("Belum ada data kesehatan.")

        if dashboard.recent_symptoms:
            print(f"\n🩺 Gejala 7 hari terakhir ({len(dashboard.recent_symptoms)})")
            for symptom in dashboard.recent_symptoms[:5]:
                severity_bar = "█" * symptom.severity + "░" * (10 - symptom.severity)
                print(f"  {symptom.logged_at:%Y-%m-%d %H:%M} {symptom.symptom_name} {severity_bar}")

        for item in dashboard.recommendations:
            print(f"\n[{item.priority.upper()}] {item.title}")
            print(f"   {item.description}")

    def view_health_graph(self, period: str = 'week') -> None:
        """Display weight and BMI over a period as text rows."""
        points = self.tracker.health_graph(self.user_id, self.user_key, period)
        print(f"\n=== Grafik Kesehatan ({period}) ===")
        if not points:
            print("Tidak ada data untuk periode ini.")
            return
        for point in points:
            print(f"{point.date}: {point.weight:.1f} kg, BMI {point.bmi:.1f} {point.emotional_state.value}")

    def view_symptom_stats(self) -> None:
        stats = self.tracker.symptom_stats(self.user_id, self.user_key)
        print("\n=== Statistik Gejala ===")
        print(f"Gejala minggu ini: {stats.symptoms_this_week}")
        print(f"Rata-rata keparahan: {stats.average_severity:.1f}")
        for frequency in stats.frequent_symptoms:
            print(f"  • {frequency.symptom_name}: {frequency.count}x")

    def _print_meal(self, meal: MealPlan) -> None:
        print(f"  {meal.title} ({meal.calories})")
        if meal.foods:
            print(f"    {', '.join(meal.foods)}")
        if meal.recipe:
            print(f"    Resep: {meal.recipe}")

    def _print_items(self, label: str, items: list[str]) -> None:
        if not items:
            return
        print(f"\n   {label}:")
        for item in items:
            print(f"   • {item}")

    def _print_validation_error(self, error: ValidationError) -> None:
        print("\n✗ Validation Error:")
        for detail in error.errors():
            field = detail['loc'][0] if detail['loc'] else 'input'
            print(f"  - {field}: {detail['msg']}")

    def _get_int_input(self, prompt: str, default: Optional[int] = None, optional: bool = False) -> Optional[int]:
        """Get integer input with optional default."""
        if default is not None:
            prompt = f"{prompt} [{default}]: "
        else:
            prompt = f"{prompt}: "

        while True:
            value = input(prompt).strip()
            if not value and default is not None:
                return default
            if not value and optional:
                return None
            try:
                return int(value)
            except ValueError:
                print("  ✗ Please enter a valid integer")

    def _get_float_input(self, prompt: str, default: Optional[float] = None, optional: bool = False) -> Optional[float]:
        """Get float input with optional default."""
        if default is not None:
            prompt = f"{prompt} [{default}]: "
        else:
            prompt = f"{prompt}: "

        while True:
            value = input(prompt).strip()
            if not value and default is not None:
                return default
            if not value and optional:
                return None
            try:
                return float(value)
            except ValueError:
                print("  ✗ Please enter a valid number")

    def _get_string_input(self, prompt: str, default: Optional[str] = None, optional: bool = False) -> Optional[str]:
        """Get string input with optional default."""
        if default is not None:
            prompt = f"{prompt} [{default}]: "
        else:
            prompt = f"{prompt}: "

        value = input(prompt).strip()
        if not value and default is not None:
            return default
        if not value and optional:
            return None
        return value

    def _get_choice_input(self, prompt: str, choices: list[str], optional: bool = False) -> str:
        """Get choice input from list of options; empty input is allowed when optional."""
        choices_str = "/".join(choices)
        prompt = f"{prompt} ({choices_str}): "

        while True:
            value = input(prompt).strip().lower()
            if not value and optional:
                return ""
            if value in choices:
                return value
            print(f"  ✗ Please choose from: {choices_str}")
