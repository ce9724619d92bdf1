# dental_core/treatments/services.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from rest_framework.exceptions import NotFound, ValidationError

from dental_core.billing.entities import FinancialRecord, RecordStatus, RecordType, ResponsibleType
from dental_core.billing.services import FinancialRecordService
from dental_core.common.collections import generate_id
from dental_core.common.ordering import next_order_index, renumber
from dental_core.iam.entities import CLINICAL_ROLES
from dental_core.procedures.selectors import get_stages_by_template_id
from dental_core.store.state import ClinicState
from dental_core.treatments import rules
from dental_core.treatments.entities import (
    StageStatus,
    Treatment,
    TreatmentPatch,
    TreatmentStage,
    TreatmentStagePatch,
    TreatmentStatus,
)

logger = logging.getLogger(__name__)


class TreatmentService:
    """
    Treatment write-model operations.

    Notes:
    - create_treatment is one unit of work: treatment, its stages and the
      optional financial record are all stored or none is.
    - Deleting a treatment cascades to its stages only; financial records
      keep their treatment_id.
    """

    @staticmethod
    def _validate_references(state: ClinicState, *, patient_id: str, template_id: str, dentist_id: str):
        errors = {}
        if not patient_id or state.patients.get(patient_id) is None:
            errors["patient_id"] = "Unknown patient."

        template = state.procedure_templates.get(template_id) if template_id else None
        if template is None:
            errors["template_id"] = "Unknown procedure template."

        dentist = state.users.get(dentist_id) if dentist_id else None
        if dentist is None:
            errors["dentist_id"] = "Unknown dentist."
        elif dentist.role not in CLINICAL_ROLES:
            errors["dentist_id"] = "User cannot be responsible for a treatment."

        if errors:
            raise ValidationError(errors)
        return template

    @staticmethod
    def create_treatment(
        state: ClinicState,
        *,
        patient_id: str,
        template_id: str,
        dentist_id: str,
        start_date: date,
        total_cost: Optional[Decimal] = None,
        notes: Optional[str] = None,
        stage_dates: Optional[Mapping[str, date]] = None,
        create_financial_record: bool = False,
        created_by: Optional[str] = None,
    ) -> tuple[Treatment, list[TreatmentStage], Optional[FinancialRecord]]:
        """
        Instantiate a procedure template for a patient.

        One stage per template stage, same name/order/checklist; the first is
        in_progress, the rest pending. stage_dates maps template stage id to an
        explicit scheduled date; the first stage defaults to start_date.
        total_cost defaults to the template's base cost.
        """
        template = TreatmentService._validate_references(
            state, patient_id=patient_id, template_id=template_id, dentist_id=dentist_id
        )

        cost = template.base_cost if total_cost is None else Decimal(total_cost)
        if cost <= 0:
            raise ValidationError({"total_cost": "Treatment cost must be greater than zero."})

        stage_dates = stage_dates or {}
        template_stages = get_stages_by_template_id(state, template_id)

        with state.unit_of_work():
            treatment = Treatment(
                id=generate_id(),
                patient_id=patient_id,
                template_id=template_id,
                start_date=start_date,
                status=TreatmentStatus.SCHEDULED,
                current_stage_id="",
                dentist_id=dentist_id,
                total_cost=cost,
                notes=notes or None,
            )
            state.treatments.add(treatment)

            stages: list[TreatmentStage] = []
            for position, source in enumerate(template_stages):
                scheduled = stage_dates.get(source.id)
                if scheduled is None and position == 0:
                    scheduled = start_date

                stage = TreatmentStage(
                    id=generate_id(),
                    treatment_id=treatment.id,
                    name=source.name,
                    status=rules.initial_status(position),
                    order_index=source.order_index,
                    scheduled_date=scheduled,
                    checklist_items=source.checklist_items,
                )
                state.treatment_stages.add(stage)
                stages.append(stage)

            record = None
            if create_financial_record:
                record = FinancialRecordService.create_record(
                    state,
                    treatment_id=treatment.id,
                    type=RecordType.INCOME,
                    amount=cost,
                    date=start_date,
                    description=template.name,
                    category=template.category,
                    status=RecordStatus.PENDING,
                    responsible_type=ResponsibleType.PATIENT,
                    patient_id=patient_id,
                    created_by=created_by or dentist_id,
                )

        logger.info(
            "Treatment %s created from template %s with %d stage(s)",
            treatment.id,
            template_id,
            len(stages),
        )
        return treatment, stages, record

    @staticmethod
    def update_treatment(state: ClinicState, *, treatment_id: str, patch: TreatmentPatch) -> Treatment:
        changes = patch.changes()
        if "total_cost" in changes and (patch.total_cost is None or patch.total_cost <= 0):
            raise ValidationError({"total_cost": "Treatment cost must be greater than zero."})

        treatment = state.treatments.update(treatment_id, patch)
        if treatment is None:
            raise NotFound("Treatment not found.")
        return treatment

    @staticmethod
    def delete_treatment(state: ClinicState, *, treatment_id: str) -> int:
        """Returns the number of stages removed with the treatment."""
        with state.unit_of_work():
            if state.treatments.delete(treatment_id) is None:
                raise NotFound("Treatment not found.")
            removed = state.treatment_stages.delete_where(lambda s: s.treatment_id == treatment_id)

        logger.info("Treatment %s deleted with %d stage(s)", treatment_id, removed)
        return removed


class TreatmentStageService:
    """Stage mutations. Status rules live in treatments.rules."""

    @staticmethod
    def _update(state: ClinicState, stage_id: str, fn) -> TreatmentStage:
        stage = state.treatment_stages.update_with(stage_id, fn)
        if stage is None:
            raise NotFound("Treatment stage not found.")
        return stage

    @staticmethod
    def update_stage(
        state: ClinicState,
        *,
        stage_id: str,
        patch: TreatmentStagePatch,
        today: Optional[date] = None,
    ) -> TreatmentStage:
        if "status" in patch.changes() and patch.status not in StageStatus.values:
            raise ValidationError({"status": f"Unknown stage status {patch.status!r}."})
        return TreatmentStageService._update(
            state, stage_id, lambda s: rules.apply_stage_patch(s, patch, today=today)
        )

    @staticmethod
    def set_status(state: ClinicState, *, stage_id: str, status: str, today: Optional[date] = None) -> TreatmentStage:
        stage = TreatmentStageService._update(
            state, stage_id, lambda s: rules.transition_stage(s, status, today=today)
        )
        logger.info("Treatment stage %s -> %s", stage_id, status)
        return stage

    @staticmethod
    def toggle_checklist_item(state: ClinicState, *, stage_id: str, item: str) -> TreatmentStage:
        return TreatmentStageService._update(state, stage_id, lambda s: rules.toggle_checklist_item(s, item))

    @staticmethod
    def add_attachments(state: ClinicState, *, stage_id: str, filenames: Iterable[str]) -> TreatmentStage:
        filenames = list(filenames)
        return TreatmentStageService._update(state, stage_id, lambda s: rules.add_attachments(s, filenames))

    @staticmethod
    def add_stage(
        state: ClinicState,
        *,
        treatment_id: str,
        name: str,
        scheduled_date: Optional[date] = None,
        notes: Optional[str] = None,
        checklist_items: Sequence[str] = (),
    ) -> TreatmentStage:
        """Append a stage to an existing treatment at count + 1, status pending."""
        if state.treatments.get(treatment_id) is None:
            raise NotFound("Treatment not found.")

        name = (name or "").strip()
        if not name:
            raise ValidationError({"name": "Stage name is required."})

        stage = TreatmentStage(
            id=generate_id(),
            treatment_id=treatment_id,
            name=name,
            status=StageStatus.PENDING,
            order_index=next_order_index(state.treatment_stages, parent_field="treatment_id", parent_id=treatment_id),
            scheduled_date=scheduled_date,
            notes=notes or None,
            checklist_items=tuple(checklist_items),
        )
        state.treatment_stages.add(stage)
        return stage

    @staticmethod
    def delete_stage(state: ClinicState, *, stage_id: str) -> TreatmentStage:
        with state.unit_of_work():
            stage = state.treatment_stages.delete(stage_id)
            if stage is None:
                raise NotFound("Treatment stage not found.")
            renumber(state.treatment_stages, parent_field="treatment_id", parent_id=stage.treatment_id)
        return stage
