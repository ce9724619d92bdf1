# dental_core/procedures/entities.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dental_core.common.collections import UNSET, Patch


@dataclass(frozen=True)
class ProcedureTemplate:
    """Catalog entry a treatment is instantiated from (e.g. "Dental Implant")."""
    id: str
    name: str
    category: str
    base_cost: Decimal
    estimated_duration: str
    description: str = ""


@dataclass(frozen=True)
class ProcedureTemplateStage:
    """
    One step of a ProcedureTemplate.

    order_index is 1-based and, within one template, dense and unique.
    """
    id: str
    template_id: str
    name: str
    order_index: int
    description: str = ""
    checklist_items: tuple[str, ...] = ()


@dataclass(frozen=True)
class StageTemplate:
    """Reusable stage blueprint, independent of any procedure template."""
    id: str
    name: str
    description: str = ""
    default_duration: str = ""
    checklist_items: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProcedureTemplatePatch(Patch):
    name: str = UNSET
    category: str = UNSET
    base_cost: Decimal = UNSET
    estimated_duration: str = UNSET
    description: str = UNSET


@dataclass(frozen=True)
class ProcedureTemplateStagePatch(Patch):
    # template_id and order_index are not patchable; use swap/move
    name: str = UNSET
    description: str = UNSET
    checklist_items: tuple[str, ...] = UNSET


@dataclass(frozen=True)
class StageTemplatePatch(Patch):
    name: str = UNSET
    description: str = UNSET
    default_duration: str = UNSET
    checklist_items: tuple[str, ...] = UNSET
