# dental_core/reports/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.template.loader import render_to_string
from django.utils import timezone

from dental_core.billing.entities import RecordStatus, RecordType
from dental_core.common.collections import get_by_id
from dental_core.store.state import ClinicState
from dental_core.treatments.entities import TreatmentStatus
from dental_core.treatments.selectors import get_treatment_progress

logger = logging.getLogger(__name__)

MISSING = "-"


@dataclass(frozen=True)
class ActiveTreatmentRow:
    treatment_id: str
    patient: str
    procedure: str
    category: str
    dentist: str
    percentage: int


@dataclass(frozen=True)
class DashboardMetrics:
    as_of: date
    today_appointments: int
    in_progress_treatments: int
    month_revenue: Decimal
    active_treatments: list[ActiveTreatmentRow] = field(default_factory=list)


def _month_revenue(state: ClinicState, today: date) -> Decimal:
    """Non-cancelled income dated from the 1st of the month up to today."""
    month_start = today.replace(day=1)
    return sum(
        (
            r.amount
            for r in state.financial_records
            if r.type == RecordType.INCOME
            and r.status != RecordStatus.CANCELLED
            and month_start <= r.date <= today
        ),
        Decimal("0.00"),
    )


def build_dashboard_metrics(state: ClinicState, *, today: Optional[date] = None) -> DashboardMetrics:
    """
    - today_appointments: treatments starting today or with a stage scheduled today
    - active treatments: status in_progress (dangling references render as "-")
    """
    today = today or timezone.localdate()

    scheduled_today = {s.treatment_id for s in state.treatment_stages if s.scheduled_date == today}
    appointments = [t for t in state.treatments if t.start_date == today or t.id in scheduled_today]

    in_progress = state.treatments.filter(lambda t: t.status == TreatmentStatus.IN_PROGRESS)

    rows = []
    for t in in_progress:
        patient = get_by_id(state.patients, t.patient_id)
        template = get_by_id(state.procedure_templates, t.template_id)
        dentist = get_by_id(state.users, t.dentist_id)
        rows.append(
            ActiveTreatmentRow(
                treatment_id=t.id,
                patient=patient.name if patient else MISSING,
                procedure=template.name if template else MISSING,
                category=template.category if template else MISSING,
                dentist=dentist.name if dentist else MISSING,
                percentage=get_treatment_progress(state, t.id).percentage,
            )
        )

    return DashboardMetrics(
        as_of=today,
        today_appointments=len(appointments),
        in_progress_treatments=len(in_progress),
        month_revenue=_month_revenue(state, today),
        active_treatments=rows,
    )


def render_dashboard_report(metrics: DashboardMetrics) -> str:
    """Plain-text dashboard snapshot (best effort, not a structured export)."""
    text = render_to_string(
        "reports/dashboard_report.txt",
        {
            "metrics": metrics,
            "currency": getattr(settings, "DENTALTRACK_CURRENCY", "R$"),
            # Always "1234.56", whatever the active locale
            "revenue": f"{metrics.month_revenue:.2f}",
            "generated_at": timezone.localtime(),
        },
    )
    logger.debug("Dashboard report rendered for %s", metrics.as_of)
    return text


def report_filename(metrics: DashboardMetrics) -> str:
    return f"dentaltrack-dashboard-{metrics.as_of.isoformat()}.txt"
