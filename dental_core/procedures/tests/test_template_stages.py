import pytest
from rest_framework.exceptions import NotFound, ValidationError

from dental_core.procedures.entities import ProcedureTemplateStagePatch
from dental_core.procedures.selectors import get_stages_by_template_id
from dental_core.procedures.services import ProcedureTemplateService, StageTemplateService


def _names(state, template_id):
    return [s.name for s in get_stages_by_template_id(state, template_id)]


def _indices(state, template_id):
    return [s.order_index for s in get_stages_by_template_id(state, template_id)]


def test_stages_are_sorted_and_dense_for_every_template(state):
    for template in state.procedure_templates:
        indices = _indices(state, template.id)
        assert indices == list(range(1, len(indices) + 1))


def test_add_stage_appends_at_count_plus_one(state, root_canal):
    stage = ProcedureTemplateService.add_stage(state, template_id=root_canal.id, name="Follow-up")

    assert stage.order_index == 5
    assert _names(state, root_canal.id)[-1] == "Follow-up"
    assert stage.description == ""
    assert stage.checklist_items == ()


def test_add_stage_from_stage_template_copies_blueprint(state, root_canal):
    stage = ProcedureTemplateService.add_stage(state, template_id=root_canal.id, stage_template_id="st6")

    assert stage.name == "Raio-X"
    assert stage.description == "Exames radiográficos"
    assert stage.checklist_items == ("Posicionamento", "Tomada radiográfica", "Análise")


def test_add_stage_requires_name_or_blueprint(state, root_canal):
    with pytest.raises(ValidationError):
        ProcedureTemplateService.add_stage(state, template_id=root_canal.id, name="   ")
    with pytest.raises(ValidationError):
        ProcedureTemplateService.add_stage(state, template_id=root_canal.id, stage_template_id="nope")
    with pytest.raises(NotFound):
        ProcedureTemplateService.add_stage(state, template_id="nope", name="X")


def test_delete_stage_renumbers_siblings(state, root_canal):
    second = get_stages_by_template_id(state, root_canal.id)[1]

    ProcedureTemplateService.delete_stage(state, stage_id=second.id)

    assert _names(state, root_canal.id) == ["Diagnosis", "Filling", "Final restoration"]
    assert _indices(state, root_canal.id) == [1, 2, 3]


def test_swap_exchanges_only_the_two_stages(state, root_canal):
    stages = get_stages_by_template_id(state, root_canal.id)
    other_before = {s.id: s.order_index for s in state.procedure_template_stages if s.template_id != root_canal.id}

    ProcedureTemplateService.swap_stage_order(state, first_id=stages[0].id, second_id=stages[3].id)

    assert _names(state, root_canal.id) == ["Final restoration", "Opening", "Filling", "Diagnosis"]
    other_after = {s.id: s.order_index for s in state.procedure_template_stages if s.template_id != root_canal.id}
    assert other_after == other_before


def test_swap_is_an_involution(state, root_canal):
    stages = get_stages_by_template_id(state, root_canal.id)
    before = _names(state, root_canal.id)

    ProcedureTemplateService.swap_stage_order(state, first_id=stages[1].id, second_id=stages[2].id)
    ProcedureTemplateService.swap_stage_order(state, first_id=stages[1].id, second_id=stages[2].id)

    assert _names(state, root_canal.id) == before


def test_swap_across_templates_is_rejected(state):
    with pytest.raises(ValidationError):
        ProcedureTemplateService.swap_stage_order(state, first_id="1", second_id="9")


def test_move_up_and_down(state, root_canal):
    stages = get_stages_by_template_id(state, root_canal.id)

    ProcedureTemplateService.move_stage(state, stage_id=stages[2].id, direction="up")
    assert _names(state, root_canal.id) == ["Diagnosis", "Filling", "Opening", "Final restoration"]

    ProcedureTemplateService.move_stage(state, stage_id=stages[0].id, direction="down")
    assert _names(state, root_canal.id) == ["Filling", "Diagnosis", "Opening", "Final restoration"]


def test_move_at_the_edges_is_noop(state, root_canal):
    stages = get_stages_by_template_id(state, root_canal.id)
    before = _names(state, root_canal.id)

    ProcedureTemplateService.move_stage(state, stage_id=stages[0].id, direction="up")
    ProcedureTemplateService.move_stage(state, stage_id=stages[-1].id, direction="down")

    assert _names(state, root_canal.id) == before
    assert _indices(state, root_canal.id) == [1, 2, 3, 4]


def test_update_stage_keeps_order(state, root_canal):
    stage = get_stages_by_template_id(state, root_canal.id)[0]

    updated = ProcedureTemplateService.update_stage(
        state, stage_id=stage.id, patch=ProcedureTemplateStagePatch(checklist_items=("X-ray",))
    )

    assert updated.order_index == 1
    assert updated.name == "Diagnosis"
    assert updated.checklist_items == ("X-ray",)


def test_delete_template_cascades_to_its_stages_only(state, root_canal):
    other_count = len([s for s in state.procedure_template_stages if s.template_id != root_canal.id])

    removed = ProcedureTemplateService.delete_template(state, template_id=root_canal.id)

    assert removed == 4
    assert state.procedure_templates.get(root_canal.id) is None
    assert get_stages_by_template_id(state, root_canal.id) == []
    assert len(state.procedure_template_stages) == other_count


def test_delete_template_keeps_instantiated_treatments(state):
    ProcedureTemplateService.delete_template(state, template_id="1")

    assert state.treatments.get("1").template_id == "1"
    assert len([s for s in state.treatment_stages if s.treatment_id == "1"]) == 8


def test_deleting_stage_template_leaves_copied_stages(state, root_canal):
    stage = ProcedureTemplateService.add_stage(state, template_id=root_canal.id, stage_template_id="st1")

    StageTemplateService.delete_stage_template(state, stage_template_id="st1")

    assert state.procedure_template_stages.get(stage.id).name == "Anestesia"
