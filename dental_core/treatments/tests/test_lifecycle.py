from datetime import date
from decimal import Decimal

import pytest
from rest_framework.exceptions import NotFound, ValidationError

from dental_core.treatments.entities import StageStatus, TreatmentPatch, TreatmentStagePatch
from dental_core.treatments.selectors import get_stages_by_treatment_id, list_treatments
from dental_core.treatments.services import TreatmentService, TreatmentStageService


def test_delete_cascades_to_stages_only(state, reopen):
    other_stages = [s for s in state.treatment_stages if s.treatment_id != "1"]
    patients, templates, records = (
        state.patients.all(),
        state.procedure_templates.all(),
        state.financial_records.all(),
    )

    removed = TreatmentService.delete_treatment(state, treatment_id="1")

    assert removed == 8
    assert state.treatments.get("1") is None
    assert state.treatment_stages.all() == other_stages
    assert state.patients.all() == patients
    assert state.procedure_templates.all() == templates
    # Records keep pointing at the deleted treatment
    assert state.financial_records.all() == records

    again = reopen()
    assert again.treatments.get("1") is None
    assert len(again.treatment_stages) == len(other_stages)


def test_delete_unknown_treatment(state):
    with pytest.raises(NotFound):
        TreatmentService.delete_treatment(state, treatment_id="404")


def test_update_treatment_merges_fields(state):
    updated = TreatmentService.update_treatment(
        state, treatment_id="2", patch=TreatmentPatch(notes="Dente 36", current_stage_id="s11")
    )
    assert updated.notes == "Dente 36"
    assert updated.current_stage_id == "s11"
    assert updated.total_cost == Decimal("850")


@pytest.mark.parametrize("cost", [Decimal("0"), None])
def test_update_treatment_rejects_non_positive_cost(state, cost):
    with pytest.raises(ValidationError):
        TreatmentService.update_treatment(state, treatment_id="2", patch=TreatmentPatch(total_cost=cost))


def test_update_unknown_treatment(state):
    with pytest.raises(NotFound):
        TreatmentService.update_treatment(state, treatment_id="404", patch=TreatmentPatch(notes="x"))


def test_update_stage_through_service_stamps_completion(state):
    stage = TreatmentStageService.update_stage(
        state,
        stage_id="s10",
        patch=TreatmentStagePatch(status=StageStatus.COMPLETED, notes="Canais instrumentados"),
        today=date(2024, 11, 27),
    )
    assert stage.date_completed == date(2024, 11, 27)
    assert state.treatment_stages.get("s10") == stage


def test_update_stage_rejects_unknown_status(state):
    with pytest.raises(ValidationError):
        TreatmentStageService.update_stage(state, stage_id="s10", patch=TreatmentStagePatch(status="finished"))


def test_update_unknown_stage(state):
    with pytest.raises(NotFound):
        TreatmentStageService.set_status(state, stage_id="nope", status=StageStatus.SKIPPED)


def test_add_stage_appends_pending(state):
    stage = TreatmentStageService.add_stage(state, treatment_id="2", name=" Retorno ", checklist_items=["Avaliação"])
    assert stage.order_index == 5
    assert stage.status == StageStatus.PENDING
    assert stage.name == "Retorno"
    assert get_stages_by_treatment_id(state, "2")[-1] == stage


def test_add_stage_requires_name_and_treatment(state):
    with pytest.raises(ValidationError):
        TreatmentStageService.add_stage(state, treatment_id="2", name="  ")
    with pytest.raises(NotFound):
        TreatmentStageService.add_stage(state, treatment_id="404", name="Retorno")


def test_delete_stage_renumbers(state):
    TreatmentStageService.delete_stage(state, stage_id="s10")
    stages = get_stages_by_treatment_id(state, "2")
    assert [s.id for s in stages] == ["s9", "s11", "s12"]
    assert [s.order_index for s in stages] == [1, 2, 3]


def test_checklist_and_attachments_persist(state, reopen):
    added = TreatmentStageService.add_stage(
        state, treatment_id="2", name="Controle", checklist_items=["Raio-X", "Odontometria"]
    )
    TreatmentStageService.toggle_checklist_item(state, stage_id=added.id, item="Odontometria")
    TreatmentStageService.add_attachments(state, stage_id=added.id, filenames=["rx_periapical.jpg"])

    stage = reopen().treatment_stages.get(added.id)
    assert stage.completed_checklist == ("Odontometria",)
    assert stage.attachments == ("rx_periapical.jpg",)


@pytest.mark.parametrize(
    "filters, expected",
    [
        ({"q": "canal"}, ["2"]),
        ({"q": "MARIA"}, ["2"]),
        ({"status": "scheduled"}, ["4", "6"]),
        ({"dentist_id": "2"}, ["3", "5"]),
        ({"patient_id": "1"}, ["1"]),
        ({"q": "zzz"}, []),
    ],
)
def test_list_treatments_filters(state, filters, expected):
    assert [t.id for t in list_treatments(state, **filters)] == expected
