# dental_core/procedures/services.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from rest_framework.exceptions import NotFound, ValidationError

from dental_core.common.collections import generate_id
from dental_core.common.ordering import next_order_index, renumber, swap_order_index
from dental_core.procedures.entities import (
    ProcedureTemplate,
    ProcedureTemplatePatch,
    ProcedureTemplateStage,
    ProcedureTemplateStagePatch,
    StageTemplate,
    StageTemplatePatch,
)
from dental_core.procedures.selectors import get_stages_by_template_id
from dental_core.store.state import ClinicState

logger = logging.getLogger(__name__)

MOVE_UP = "up"
MOVE_DOWN = "down"


class ProcedureTemplateService:
    """
    Procedure template catalog and its ordered stage lists.

    Stage order_index is kept dense per template: new stages append at
    count + 1, removal renumbers, and swap is the only reorder primitive.
    """

    # -------------------------
    # Templates
    # -------------------------
    @staticmethod
    def create_template(
        state: ClinicState,
        *,
        name: str,
        category: str,
        base_cost: Decimal,
        estimated_duration: str = "",
        description: str = "",
    ) -> ProcedureTemplate:
        template = ProcedureTemplate(
            id=generate_id(),
            name=name,
            category=category,
            base_cost=base_cost,
            estimated_duration=estimated_duration or "",
            description=description or "",
        )
        state.procedure_templates.add(template)
        logger.info("Procedure template %s created", template.id)
        return template

    @staticmethod
    def update_template(state: ClinicState, *, template_id: str, patch: ProcedureTemplatePatch) -> ProcedureTemplate:
        template = state.procedure_templates.update(template_id, patch)
        if template is None:
            raise NotFound("Procedure template not found.")
        return template

    @staticmethod
    def delete_template(state: ClinicState, *, template_id: str) -> int:
        """
        Deletes the template and all its stages. Treatments instantiated from
        it keep their own stages. Returns the number of stages removed.
        """
        with state.unit_of_work():
            if state.procedure_templates.delete(template_id) is None:
                raise NotFound("Procedure template not found.")
            removed = state.procedure_template_stages.delete_where(lambda s: s.template_id == template_id)

        logger.info("Procedure template %s deleted with %d stage(s)", template_id, removed)
        return removed

    # -------------------------
    # Template stages
    # -------------------------
    @staticmethod
    def add_stage(
        state: ClinicState,
        *,
        template_id: str,
        stage_template_id: Optional[str] = None,
        name: str = "",
        description: str = "",
        checklist_items: Sequence[str] = (),
    ) -> ProcedureTemplateStage:
        """
        Append a stage, either copied from a StageTemplate (name, description,
        checklist) or built from the given fields.
        """
        if state.procedure_templates.get(template_id) is None:
            raise NotFound("Procedure template not found.")

        if stage_template_id:
            blueprint = state.stage_templates.get(stage_template_id)
            if blueprint is None:
                raise ValidationError({"stage_template_id": "Unknown stage template."})
            name = blueprint.name
            description = blueprint.description
            checklist_items = blueprint.checklist_items

        name = (name or "").strip()
        if not name:
            raise ValidationError({"name": "A stage template or a custom name is required."})

        stage = ProcedureTemplateStage(
            id=generate_id(),
            template_id=template_id,
            name=name,
            order_index=next_order_index(
                state.procedure_template_stages, parent_field="template_id", parent_id=template_id
            ),
            description=description or "",
            checklist_items=tuple(checklist_items),
        )
        state.procedure_template_stages.add(stage)
        return stage

    @staticmethod
    def update_stage(
        state: ClinicState, *, stage_id: str, patch: ProcedureTemplateStagePatch
    ) -> ProcedureTemplateStage:
        stage = state.procedure_template_stages.update(stage_id, patch)
        if stage is None:
            raise NotFound("Template stage not found.")
        return stage

    @staticmethod
    def delete_stage(state: ClinicState, *, stage_id: str) -> ProcedureTemplateStage:
        with state.unit_of_work():
            stage = state.procedure_template_stages.delete(stage_id)
            if stage is None:
                raise NotFound("Template stage not found.")
            renumber(state.procedure_template_stages, parent_field="template_id", parent_id=stage.template_id)
        return stage

    @staticmethod
    def swap_stage_order(
        state: ClinicState, *, first_id: str, second_id: str
    ) -> Optional[tuple[ProcedureTemplateStage, ProcedureTemplateStage]]:
        """Exchange the order_index of two sibling stages. Unknown ids are a no-op (None)."""
        return swap_order_index(state.procedure_template_stages, first_id, second_id, parent_field="template_id")

    @staticmethod
    def move_stage(state: ClinicState, *, stage_id: str, direction: str) -> list[ProcedureTemplateStage]:
        """
        Swap a stage with its upper or lower neighbour. Moving the first stage
        up or the last one down leaves the order unchanged.
        Returns the template's stages in their new order.
        """
        if direction not in (MOVE_UP, MOVE_DOWN):
            raise ValidationError({"direction": f"Must be {MOVE_UP!r} or {MOVE_DOWN!r}."})

        stage = state.procedure_template_stages.get(stage_id)
        if stage is None:
            raise NotFound("Template stage not found.")

        ordered = get_stages_by_template_id(state, stage.template_id)
        position = next(i for i, s in enumerate(ordered) if s.id == stage_id)
        neighbour = position - 1 if direction == MOVE_UP else position + 1

        if 0 <= neighbour < len(ordered):
            swap_order_index(
                state.procedure_template_stages,
                stage_id,
                ordered[neighbour].id,
                parent_field="template_id",
            )
        return get_stages_by_template_id(state, stage.template_id)


class StageTemplateService:
    @staticmethod
    def create_stage_template(
        state: ClinicState,
        *,
        name: str,
        description: str = "",
        default_duration: str = "",
        checklist_items: Sequence[str] = (),
    ) -> StageTemplate:
        template = StageTemplate(
            id=generate_id(),
            name=name,
            description=description or "",
            default_duration=default_duration or "",
            checklist_items=tuple(checklist_items),
        )
        state.stage_templates.add(template)
        return template

    @staticmethod
    def update_stage_template(state: ClinicState, *, stage_template_id: str, patch: StageTemplatePatch) -> StageTemplate:
        template = state.stage_templates.update(stage_template_id, patch)
        if template is None:
            raise NotFound("Stage template not found.")
        return template

    @staticmethod
    def delete_stage_template(state: ClinicState, *, stage_template_id: str) -> StageTemplate:
        # Template stages copied from it are independent
        template = state.stage_templates.delete(stage_template_id)
        if template is None:
            raise NotFound("Stage template not found.")
        return template
