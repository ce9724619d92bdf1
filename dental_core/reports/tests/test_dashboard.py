from datetime import date
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from dental_core.billing.entities import RecordStatus, RecordType, ResponsibleType
from dental_core.billing.services import FinancialRecordService
from dental_core.reports.services import build_dashboard_metrics, render_dashboard_report, report_filename

NOV_20 = date(2024, 11, 20)


def test_metrics_on_a_seed_day(state):
    metrics = build_dashboard_metrics(state, today=NOV_20)

    assert metrics.as_of == NOV_20
    assert metrics.today_appointments == 1
    assert metrics.in_progress_treatments == 3
    assert metrics.month_revenue == Decimal("2550")
    assert [(r.treatment_id, r.percentage) for r in metrics.active_treatments] == [("1", 50), ("2", 25), ("3", 60)]
    assert metrics.active_treatments[1].patient == "Maria Fernanda Silva"
    assert metrics.active_treatments[1].dentist == "Dr. Roberto Lima"


def test_month_revenue_skips_cancelled_expenses_and_future(state):
    for kind, status, day in (
        (RecordType.INCOME, RecordStatus.CANCELLED, 5),
        (RecordType.EXPENSE, RecordStatus.PAID, 5),
        (RecordType.INCOME, RecordStatus.PENDING, 25),
        (RecordType.INCOME, RecordStatus.PENDING, 10),
    ):
        FinancialRecordService.create_record(
            state,
            type=kind,
            amount=Decimal("100"),
            date=date(2024, 11, day),
            description="Avulso",
            category="Outros",
            status=status,
            responsible_type=ResponsibleType.PATIENT,
            created_by="1",
        )

    assert build_dashboard_metrics(state, today=NOV_20).month_revenue == Decimal("2650")


def test_dangling_references_render_as_placeholder(state):
    state.patients.delete("2")
    state.users.delete("3")

    row = build_dashboard_metrics(state, today=NOV_20).active_treatments[1]

    assert (row.patient, row.procedure, row.dentist) == ("-", "Tratamento de Canal", "-")


def test_report_text(state):
    metrics = build_dashboard_metrics(state, today=NOV_20)
    text = render_dashboard_report(metrics)

    assert "Date: 2024-11-20" in text
    assert "Treatments in progress:   3" in text
    assert "R$ 2550.00" in text
    assert "- Maria Fernanda Silva | Tratamento de Canal | Dr. Roberto Lima | 25%" in text
    assert report_filename(metrics) == "dentaltrack-dashboard-2024-11-20.txt"


def test_report_without_active_treatments(state):
    state.treatments.delete_where(lambda t: True)
    text = render_dashboard_report(build_dashboard_metrics(state, today=NOV_20))
    assert "(none)" in text


def test_export_command_writes_file(tmp_path):
    target = tmp_path / "report.txt"
    out = StringIO()

    call_command("export_dashboard_report", "--date", "2024-11-20", "-o", str(target), stdout=out)

    assert "Treatments in progress:   3" in target.read_text(encoding="utf-8")
    assert str(target) in out.getvalue()


def test_export_command_to_stdout():
    out = StringIO()
    call_command("export_dashboard_report", "--date", "2024-11-20", stdout=out)
    assert out.getvalue().startswith("DentalTrack - Dashboard report")


def test_export_command_rejects_bad_date():
    with pytest.raises(CommandError):
        call_command("export_dashboard_report", "--date", "20/11/2024", stdout=StringIO())
