from datetime import date

import pytest
from rest_framework.exceptions import NotFound

from dental_core.common.api.exceptions import ConflictError
from dental_core.patients.entities import PatientPatch
from dental_core.patients.selectors import get_patient, get_treatments_by_patient_id, search_patients
from dental_core.patients.services import PatientService


@pytest.mark.parametrize(
    "q, expected",
    [
        ("", ["1", "2", "3", "4", "5", "6"]),
        ("  maria ", ["2"]),
        ("345.678", ["3"]),
        ("ANA.B@", ["4"]),
        ("lima", ["6"]),
        ("nobody", []),
    ],
)
def test_search_patients(state, q, expected):
    assert [p.id for p in search_patients(state, q=q)] == expected


def test_create_patient(state, reopen):
    patient = PatientService.create_patient(
        state,
        name="Lucas Pereira",
        national_id="999.888.777-66",
        birth_date=date(2001, 5, 4),
        phone="(11) 95555-0000",
    )

    assert patient.email == ""
    assert patient.insurance_id is None
    assert get_patient(reopen(), patient.id) == patient


def test_update_patient_keeps_other_fields(state):
    before = get_patient(state, "2")
    after = PatientService.update_patient(state, patient_id="2", patch=PatientPatch(phone="(11) 90000-0000"))

    assert after.phone == "(11) 90000-0000"
    assert after.name == before.name
    assert after.created_at == before.created_at


def test_update_unknown_patient(state):
    with pytest.raises(NotFound):
        PatientService.update_patient(state, patient_id="404", patch=PatientPatch(name="x"))


def test_delete_patient_with_treatments_is_rejected(state):
    assert get_treatments_by_patient_id(state, "1")

    with pytest.raises(ConflictError):
        PatientService.delete_patient(state, patient_id="1")
    assert get_patient(state, "1") is not None


def test_delete_patient_without_treatments(state):
    patient = PatientService.create_patient(
        state, name="Sem Tratamento", national_id="000.000.000-00", birth_date=date(2000, 1, 1)
    )
    PatientService.delete_patient(state, patient_id=patient.id)
    assert get_patient(state, patient.id) is None

    with pytest.raises(NotFound):
        PatientService.delete_patient(state, patient_id=patient.id)
