# dental_core/billing/services.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from rest_framework.exceptions import NotFound, ValidationError

from dental_core.billing.entities import (
    FinancialRecord,
    FinancialRecordPatch,
    RecordStatus,
    ResponsibleType,
)
from dental_core.common.collections import generate_id
from dental_core.store.state import ClinicState

logger = logging.getLogger(__name__)


def _require_positive(amount) -> Decimal:
    if amount is None or Decimal(amount) <= 0:
        raise ValidationError({"amount": "Amount must be greater than zero."})
    return Decimal(amount)


class FinancialRecordService:
    """
    Income/expense ledger. A record may point at a treatment; deleting the
    treatment later leaves the record (and its treatment_id) in place.
    """

    @staticmethod
    def create_record(
        state: ClinicState,
        *,
        type: str,
        amount: Decimal,
        date: date,
        description: str,
        category: str,
        created_by: str,
        status: str = RecordStatus.PENDING,
        responsible_type: str = ResponsibleType.PATIENT,
        treatment_id: Optional[str] = None,
        payment_date: Optional[date] = None,
        patient_id: Optional[str] = None,
    ) -> FinancialRecord:
        amount = _require_positive(amount)
        if treatment_id and state.treatments.get(treatment_id) is None:
            raise ValidationError({"treatment_id": "Unknown treatment."})

        record = FinancialRecord(
            id=generate_id(),
            treatment_id=treatment_id or None,
            type=type,
            amount=amount,
            date=date,
            payment_date=payment_date,
            description=description,
            category=category,
            status=status,
            responsible_type=responsible_type,
            patient_id=patient_id or None,
            created_by=created_by,
        )
        state.financial_records.add(record)
        logger.info("Financial record %s created (%s %s)", record.id, type, amount)
        return record

    @staticmethod
    def update_record(state: ClinicState, *, record_id: str, patch: FinancialRecordPatch) -> FinancialRecord:
        if "amount" in patch.changes():
            _require_positive(patch.amount)
        if patch.changes().get("treatment_id") and state.treatments.get(patch.treatment_id) is None:
            raise ValidationError({"treatment_id": "Unknown treatment."})

        record = state.financial_records.update(record_id, patch)
        if record is None:
            raise NotFound("Financial record not found.")
        return record

    @staticmethod
    def delete_record(state: ClinicState, *, record_id: str) -> FinancialRecord:
        record = state.financial_records.delete(record_id)
        if record is None:
            raise NotFound("Financial record not found.")
        return record
