# dental_core/patients/selectors.py
from __future__ import annotations

from typing import Optional

from dental_core.common.collections import get_by_id
from dental_core.patients.entities import Patient
from dental_core.store.state import ClinicState
from dental_core.treatments.entities import Treatment


def get_patient(state: ClinicState, patient_id: Optional[str]) -> Optional[Patient]:
    return get_by_id(state.patients, patient_id)


def search_patients(state: ClinicState, *, q: Optional[str] = None) -> list[Patient]:
    qv = (q or "").strip().lower()
    if not qv:
        return state.patients.all()

    return state.patients.filter(
        lambda p: qv in p.name.lower() or qv in p.national_id.lower() or qv in p.email.lower()
    )


def get_treatments_by_patient_id(state: ClinicState, patient_id: str) -> list[Treatment]:
    return state.treatments.filter(lambda t: t.patient_id == patient_id)
