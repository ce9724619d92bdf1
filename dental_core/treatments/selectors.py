# dental_core/treatments/selectors.py
from __future__ import annotations

from typing import Optional

from dental_core.common.collections import get_by_id
from dental_core.common.ordering import siblings
from dental_core.store.state import ClinicState
from dental_core.treatments.entities import Treatment, TreatmentStage
from dental_core.treatments.progress import TreatmentProgress, compute_progress


def get_treatment(state: ClinicState, treatment_id: Optional[str]) -> Optional[Treatment]:
    return get_by_id(state.treatments, treatment_id)


def get_treatment_stage(state: ClinicState, stage_id: Optional[str]) -> Optional[TreatmentStage]:
    return get_by_id(state.treatment_stages, stage_id)


def get_stages_by_treatment_id(state: ClinicState, treatment_id: str) -> list[TreatmentStage]:
    return siblings(state.treatment_stages, parent_field="treatment_id", parent_id=treatment_id)


def get_treatment_progress(state: ClinicState, treatment_id: str) -> TreatmentProgress:
    return compute_progress(get_stages_by_treatment_id(state, treatment_id))


def list_treatments(
    state: ClinicState,
    *,
    q: Optional[str] = None,
    status: Optional[str] = None,
    patient_id: Optional[str] = None,
    dentist_id: Optional[str] = None,
) -> list[Treatment]:
    """
    Filters:
    - q: case-insensitive match on patient name or procedure name
    - status / patient_id / dentist_id: exact match
    Dangling patient/template references simply do not match q.
    """
    treatments = state.treatments.all()

    if status:
        treatments = [t for t in treatments if t.status == status]
    if patient_id:
        treatments = [t for t in treatments if t.patient_id == patient_id]
    if dentist_id:
        treatments = [t for t in treatments if t.dentist_id == dentist_id]

    qv = (q or "").strip().lower()
    if qv:
        def matches(t: Treatment) -> bool:
            patient = get_by_id(state.patients, t.patient_id)
            template = get_by_id(state.procedure_templates, t.template_id)
            return bool(
                (patient and qv in patient.name.lower())
                or (template and qv in template.name.lower())
            )

        treatments = [t for t in treatments if matches(t)]

    return treatments
