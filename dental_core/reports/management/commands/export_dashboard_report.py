# dental_core/reports/management/commands/export_dashboard_report.py
from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from dental_core.reports.services import build_dashboard_metrics, render_dashboard_report
from dental_core.store.state import ClinicState


class Command(BaseCommand):
    help = "Render the plain-text dashboard report to stdout or a file."

    def add_arguments(self, parser):
        parser.add_argument("--output", "-o", type=str, default=None, help="Write to this path instead of stdout.")
        parser.add_argument("--date", type=str, default=None, help="Report date (YYYY-MM-DD). Defaults to today.")

    def handle(self, *args, **opts):
        today = None
        if opts["date"]:
            try:
                today = date.fromisoformat(opts["date"])
            except ValueError:
                raise CommandError(f"Invalid --date {opts['date']!r}; expected YYYY-MM-DD.")

        metrics = build_dashboard_metrics(ClinicState.open(), today=today)
        text = render_dashboard_report(metrics)

        if not opts["output"]:
            self.stdout.write(text, ending="")
            return

        with open(opts["output"], "w", encoding="utf-8") as fh:
            fh.write(text)
        self.stdout.write(self.style.SUCCESS(f"Report written to {opts['output']}"))
