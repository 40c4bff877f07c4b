"""
Main entry point for Health Tracker CLI.
"""

import logging
import sys
from getpass import getpass

from .accounts import AccountService
from .advisor import HealthAdvisor
from .config import get_settings
from .data_store import DataStore
from .privacy import AuthResult, PrivacyModule
from .tracker import HealthTracker
from .ui import HealthTrackerUI


def login(accounts: AccountService) -> AuthResult:
    """Prompt until the user is logged in, registering first if needed."""
    while True:
        print("\n1. Masuk")
        print("2. Daftar")
        print("3. Keluar")
        choice = input("Pilih (1-3): ").strip()

        if choice == "3":
            sys.exit(0)

        email = input("Email: ").strip()
        password = getpass("Password: ")

        if choice == "2":
            name = input("Nama: ").strip()
            registration = accounts.register(email, password, name)
            if not registration.success:
                print(f"\n✗ {registration.message}")
                continue
            print(f"\n✓ {registration.message}")
        elif choice != "1":
            print("\n✗ Invalid option. Please select 1-3.")
            continue

        result = accounts.authenticate(email, password)
        if result.success:
            return result
        print(f"\n✗ {result.message}")


def main():
    """Run the Health Tracker CLI."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print("=" * 60)
    print("     Health Tracker")
    print("=" * 60)

    privacy_module = PrivacyModule()
    data_store = DataStore(privacy_module=privacy_module)
    accounts = AccountService(data_store=data_store, privacy_module=privacy_module)
    tracker = HealthTracker(
        data_store=data_store,
        privacy_module=privacy_module,
        account_service=accounts
    )
    advisor = HealthAdvisor(tracker=tracker, account_service=accounts, settings=settings)

    session = login(accounts)
    ui = HealthTrackerUI(advisor, session.user_id, session.user_key)

    actions = {
        "1": ui.input_health_data,
        "2": ui.input_symptoms,
        "3": ui.view_food_recommendations,
        "4": ui.view_exercise_recommendations,
        "5": ui.view_emotional_recommendations,
        "6": ui.view_daily_menu,
        "7": ui.view_dashboard,
        "8": lambda: ui.view_health_graph('week'),
        "9": lambda: ui.view_health_graph('month'),
        "10": ui.view_symptom_stats,
    }

    while True:
        print("\n" + "=" * 60)
        print("Main Menu")
        print("=" * 60)
        print("1. Catat Data Kesehatan")
        print("2. Catat Gejala")
        print("3. Rekomendasi Makanan")
        print("4. Rekomendasi Olahraga")
        print("5. Rekomendasi Emosional")
        print("6. Menu Harian")
        print("7. Dashboard")
        print("8. Grafik Kesehatan (7 hari)")
        print("9. Grafik Kesehatan (30 hari)")
        print("10. Statistik Gejala")
        print("11. Keluar")
        print()

        choice = input("Select an option (1-11): ").strip()

        if choice == "11":
            privacy_module.end_session(session.session_token)
            print("\nTerima kasih telah menggunakan Health Tracker!")
            sys.exit(0)

        action = actions.get(choice)
        if action is None:
            print("\n✗ Invalid option. Please select 1-11.")
            continue
        action()


if __name__ == "__main__":
    main()
