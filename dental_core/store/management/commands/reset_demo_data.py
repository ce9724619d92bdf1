# dental_core/store/management/commands/reset_demo_data.py
from __future__ import annotations

from django.core.management.base import BaseCommand

from dental_core.iam.auth import DemoAuthService
from dental_core.store.state import ClinicState


class Command(BaseCommand):
    help = "Restore every DentalTrack collection to the embedded seed dataset (discards all edits)."

    def add_arguments(self, parser):
        parser.add_argument("--logout", action="store_true", help="Also clear the demo login marker.")

    def handle(self, *args, **opts):
        state = ClinicState.open()
        state.reset_all_data()

        for name, collection in state.collections.items():
            self.stdout.write(f"{name}: {len(collection)}")

        if opts["logout"]:
            DemoAuthService().logout()
            self.stdout.write("Demo login marker cleared.")

        self.stdout.write(self.style.SUCCESS("Demo data reset."))
