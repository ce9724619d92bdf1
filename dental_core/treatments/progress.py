# dental_core/treatments/progress.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from dental_core.treatments.entities import StageStatus, TreatmentStage


@dataclass(frozen=True)
class TreatmentProgress:
    total: int
    completed_count: int
    in_progress_count: int
    skipped_count: int
    percentage: int


def round_percentage(part: int, whole: int) -> int:
    """Half-up rounding of part/whole * 100; 0 when whole is 0."""
    if whole <= 0:
        return 0
    value = Decimal(part) * 100 / Decimal(whole)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_progress(stages: Iterable[TreatmentStage]) -> TreatmentProgress:
    stages = list(stages)
    completed = sum(1 for s in stages if s.status == StageStatus.COMPLETED)
    return TreatmentProgress(
        total=len(stages),
        completed_count=completed,
        in_progress_count=sum(1 for s in stages if s.status == StageStatus.IN_PROGRESS),
        skipped_count=sum(1 for s in stages if s.status == StageStatus.SKIPPED),
        percentage=round_percentage(completed, len(stages)),
    )


def checklist_percentage(stage: TreatmentStage) -> int:
    done, total = stage.checklist_ratio
    return round_percentage(done, total)
