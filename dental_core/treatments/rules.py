# dental_core/treatments/rules.py
"""
Pure stage transitions: (stage, change) -> new stage. No state, no I/O.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from django.utils import timezone
from rest_framework.exceptions import ValidationError

from dental_core.treatments.entities import StageStatus, TreatmentStage, TreatmentStagePatch

INITIAL_STAGE_STATUS = StageStatus.IN_PROGRESS
FOLLOWING_STAGE_STATUS = StageStatus.PENDING


def initial_status(position: int) -> str:
    """Status of a freshly instantiated stage given its 0-based position."""
    return INITIAL_STAGE_STATUS if position == 0 else FOLLOWING_STAGE_STATUS


def _stamp_completion(stage: TreatmentStage, today: Optional[date]) -> TreatmentStage:
    # One-way: an existing date is kept, and leaving "completed" never clears it
    if stage.status == StageStatus.COMPLETED and stage.date_completed is None:
        return replace(stage, date_completed=today or timezone.localdate())
    return stage


def transition_stage(stage: TreatmentStage, new_status: str, *, today: Optional[date] = None) -> TreatmentStage:
    if new_status not in StageStatus.values:
        raise ValidationError({"status": f"Unknown stage status {new_status!r}."})
    return _stamp_completion(replace(stage, status=new_status), today)


def apply_stage_patch(stage: TreatmentStage, patch: TreatmentStagePatch, *, today: Optional[date] = None) -> TreatmentStage:
    """
    Merge the patch, then stamp date_completed when the patch sets status to
    completed and no completion date is present (the patch may supply one).
    """
    updated = patch.apply(stage)
    if patch.changes().get("status") == StageStatus.COMPLETED:
        return _stamp_completion(updated, today)
    return updated


def toggle_checklist_item(stage: TreatmentStage, item: str) -> TreatmentStage:
    if item not in stage.checklist_items:
        raise ValidationError({"item": f"{item!r} is not in this stage's checklist."})

    if item in stage.completed_checklist:
        done = tuple(i for i in stage.completed_checklist if i != item)
    else:
        # Checklist order first; entries no longer on the checklist are kept after
        done = tuple(i for i in stage.checklist_items if i in stage.completed_checklist or i == item)
        done += tuple(i for i in stage.completed_checklist if i not in stage.checklist_items)
    return replace(stage, completed_checklist=done)


def add_attachments(stage: TreatmentStage, filenames: Iterable[str]) -> TreatmentStage:
    """Append-only. Filenames are recorded, no file content is stored."""
    names = tuple(n.strip() for n in filenames if n and n.strip())
    if not names:
        return stage
    return replace(stage, attachments=stage.attachments + names)
