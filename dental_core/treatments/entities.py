# dental_core/treatments/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import models

from dental_core.common.collections import UNSET, Patch


class TreatmentStatus(models.TextChoices):
    SCHEDULED = "scheduled", "Scheduled"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class StageStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"
    SKIPPED = "skipped", "Skipped"


@dataclass(frozen=True)
class Treatment:
    id: str
    patient_id: str
    template_id: str
    start_date: date
    status: str
    dentist_id: str
    total_cost: Decimal
    current_stage_id: str = ""
    notes: Optional[str] = None


@dataclass(frozen=True)
class TreatmentStage:
    """
    One executed step of a Treatment.

    checklist_items are fixed once the stage exists; completed_checklist is
    the subset of them that has been ticked.
    """
    id: str
    treatment_id: str
    name: str
    status: str
    order_index: int
    scheduled_date: Optional[date] = None
    date_completed: Optional[date] = None
    notes: Optional[str] = None
    attachments: tuple[str, ...] = ()
    checklist_items: tuple[str, ...] = ()
    completed_checklist: tuple[str, ...] = ()

    @property
    def checklist_ratio(self) -> tuple[int, int]:
        return len(self.completed_checklist), len(self.checklist_items)


@dataclass(frozen=True)
class TreatmentPatch(Patch):
    patient_id: str = UNSET
    template_id: str = UNSET
    start_date: date = UNSET
    status: str = UNSET
    current_stage_id: str = UNSET
    dentist_id: str = UNSET
    total_cost: Decimal = UNSET
    notes: Optional[str] = UNSET


@dataclass(frozen=True)
class TreatmentStagePatch(Patch):
    # attachments/checklist go through their own operations
    name: str = UNSET
    status: str = UNSET
    scheduled_date: Optional[date] = UNSET
    date_completed: Optional[date] = UNSET
    notes: Optional[str] = UNSET
