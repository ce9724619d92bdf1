# dental_core/billing/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import models

from dental_core.common.collections import UNSET, Patch


class RecordType(models.TextChoices):
    INCOME = "income", "Income"
    EXPENSE = "expense", "Expense"


class RecordStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    CANCELLED = "cancelled", "Cancelled"


class ResponsibleType(models.TextChoices):
    PATIENT = "patient", "Patient"
    CLINIC = "clinic", "Clinic"


@dataclass(frozen=True)
class FinancialRecord:
    id: str
    type: str
    amount: Decimal
    date: date
    description: str
    category: str
    status: str
    responsible_type: str
    created_by: str
    treatment_id: Optional[str] = None
    payment_date: Optional[date] = None
    patient_id: Optional[str] = None


@dataclass(frozen=True)
class FinancialRecordPatch(Patch):
    treatment_id: Optional[str] = UNSET
    type: str = UNSET
    amount: Decimal = UNSET
    date: date = UNSET
    payment_date: Optional[date] = UNSET
    description: str = UNSET
    category: str = UNSET
    status: str = UNSET
    responsible_type: str = UNSET
    patient_id: Optional[str] = UNSET
