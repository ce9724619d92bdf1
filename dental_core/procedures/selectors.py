# dental_core/procedures/selectors.py
from __future__ import annotations

from typing import Optional

from dental_core.common.collections import get_by_id
from dental_core.common.ordering import siblings
from dental_core.procedures.entities import ProcedureTemplate, ProcedureTemplateStage, StageTemplate
from dental_core.store.state import ClinicState


def get_template(state: ClinicState, template_id: Optional[str]) -> Optional[ProcedureTemplate]:
    return get_by_id(state.procedure_templates, template_id)


def get_template_stage(state: ClinicState, stage_id: Optional[str]) -> Optional[ProcedureTemplateStage]:
    return get_by_id(state.procedure_template_stages, stage_id)


def get_stage_template(state: ClinicState, stage_template_id: Optional[str]) -> Optional[StageTemplate]:
    return get_by_id(state.stage_templates, stage_template_id)


def list_templates(state: ClinicState, *, q: Optional[str] = None, category: Optional[str] = None) -> list[ProcedureTemplate]:
    templates = state.procedure_templates.all()
    if category:
        templates = [t for t in templates if t.category == category]

    qv = (q or "").strip().lower()
    if qv:
        templates = [t for t in templates if qv in t.name.lower() or qv in t.category.lower()]
    return templates


def get_stages_by_template_id(state: ClinicState, template_id: str) -> list[ProcedureTemplateStage]:
    return siblings(state.procedure_template_stages, parent_field="template_id", parent_id=template_id)
