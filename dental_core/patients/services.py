# dental_core/patients/services.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from django.utils import timezone
from rest_framework.exceptions import NotFound

from dental_core.common.api.exceptions import ConflictError
from dental_core.common.collections import generate_id
from dental_core.patients.entities import Patient, PatientPatch
from dental_core.patients.selectors import get_treatments_by_patient_id
from dental_core.store.state import ClinicState

logger = logging.getLogger(__name__)


class PatientService:
    @staticmethod
    def create_patient(
        state: ClinicState,
        *,
        name: str,
        national_id: str,
        birth_date: date,
        phone: str = "",
        email: str = "",
        address: str = "",
        insurance_id: Optional[str] = None,
        insurance_name: Optional[str] = None,
    ) -> Patient:
        patient = Patient(
            id=generate_id(),
            name=name,
            national_id=national_id,
            phone=phone or "",
            email=email or "",
            birth_date=birth_date,
            address=address or "",
            insurance_id=insurance_id or None,
            insurance_name=insurance_name or None,
            created_at=timezone.localdate(),
        )
        state.patients.add(patient)
        logger.info("Patient %s created", patient.id)
        return patient

    @staticmethod
    def update_patient(state: ClinicState, *, patient_id: str, patch: PatientPatch) -> Patient:
        patient = state.patients.update(patient_id, patch)
        if patient is None:
            raise NotFound("Patient not found.")
        return patient

    @staticmethod
    def delete_patient(state: ClinicState, *, patient_id: str) -> Patient:
        """
        Rejected while any treatment still references the patient, so no
        treatment is left pointing at a missing patient.
        """
        if state.patients.get(patient_id) is None:
            raise NotFound("Patient not found.")

        referencing = get_treatments_by_patient_id(state, patient_id)
        if referencing:
            raise ConflictError(
                f"Patient has {len(referencing)} treatment(s); delete or reassign them first."
            )

        patient = state.patients.delete(patient_id)
        logger.info("Patient %s deleted", patient_id)
        return patient
