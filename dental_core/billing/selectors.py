# dental_core/billing/selectors.py
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from dental_core.billing.entities import FinancialRecord, RecordStatus, RecordType
from dental_core.common.collections import get_by_id
from dental_core.store.state import ClinicState

ZERO = Decimal("0.00")


def get_financial_record(state: ClinicState, record_id: Optional[str]) -> Optional[FinancialRecord]:
    return get_by_id(state.financial_records, record_id)


def get_financial_by_treatment_id(state: ClinicState, treatment_id: str) -> list[FinancialRecord]:
    return state.financial_records.filter(lambda r: r.treatment_id == treatment_id)


def list_financial_records(
    state: ClinicState,
    *,
    q: Optional[str] = None,
    record_type: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> list[FinancialRecord]:
    records = state.financial_records.all()
    if record_type:
        records = [r for r in records if r.type == record_type]
    if category:
        records = [r for r in records if r.category == category]
    if status:
        records = [r for r in records if r.status == status]
    if date_from:
        records = [r for r in records if r.date >= date_from]
    if date_to:
        records = [r for r in records if r.date <= date_to]

    qv = (q or "").strip().lower()
    if qv:
        records = [r for r in records if qv in r.description.lower()]
    return records


@dataclass(frozen=True)
class FinancialSummary:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    pending_amount: Decimal
    income_by_category: dict[str, Decimal] = field(default_factory=dict)


def summarize(records: Iterable[FinancialRecord]) -> FinancialSummary:
    """
    Cancelled records are ignored. pending_amount sums every pending record,
    income or expense.
    """
    income = expense = pending = ZERO
    by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for r in records:
        if r.status == RecordStatus.CANCELLED:
            continue
        if r.type == RecordType.INCOME:
            income += r.amount
            by_category[r.category] += r.amount
        else:
            expense += r.amount
        if r.status == RecordStatus.PENDING:
            pending += r.amount

    return FinancialSummary(
        total_income=income,
        total_expense=expense,
        balance=income - expense,
        pending_amount=pending,
        income_by_category=dict(by_category),
    )
